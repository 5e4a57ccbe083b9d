"""Generator configuration.

Defaults describe the Groovy Development Kit. Every URL and path can be
overridden through the environment, and the CLI overrides on top of that.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env(name: str, default: str) -> str:
    return os.environ.get(name, default)


@dataclass
class Config:
    """Settings for one generator run."""

    title: str = field(default_factory=lambda: _env("EXTDOC_TITLE", "Groovy JDK"))
    # Short name used in link titles ("GDK enhancement for ...")
    library_label: str = "GDK"
    # Receivers under these prefixes are the library's own types
    library_namespaces: tuple[str, ...] = ("groovy", "org.codehaus.groovy")
    library_api_url: str = field(
        default_factory=lambda: _env(
            "EXTDOC_LIBRARY_API_URL", "http://groovy.codehaus.org/gapi/"
        )
    )
    jdk_api_url: str = field(
        default_factory=lambda: _env(
            "EXTDOC_JDK_API_URL", "http://docs.oracle.com/javase/7/docs/api/"
        )
    )
    # Extension classes whose methods are static on the receiver type
    static_extension_classes: tuple[str, ...] = ("DefaultGroovyStaticMethods",)
    registry_class: str | None = "org.codehaus.groovy.runtime.DefaultGroovyMethods"
    registry_field: str = "additionals"
    source_root: str = field(
        default_factory=lambda: _env("EXTDOC_SOURCE_ROOT", "src/main")
    )
    output_dir: str = field(
        default_factory=lambda: _env("EXTDOC_OUTPUT_DIR", "target/html/groovy-jdk")
    )

    def in_library_namespace(self, name: str) -> bool:
        """Check if a dotted name belongs to the enhancing library."""
        return any(name.startswith(prefix) for prefix in self.library_namespaces)
