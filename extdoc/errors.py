"""Exceptions raised by the documentation generator."""

from __future__ import annotations

from pathlib import Path


class ExtdocError(Exception):
    """Base exception for extdoc operations."""

    pass


class SourceParseError(ExtdocError):
    """Raised when a Java source file cannot be parsed."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"Failed to parse {path}: {message}")
        self.path = path


class RegistryLookupError(ExtdocError):
    """Raised when the extension-class registry cannot be read."""

    pass


class TemplateRenderError(ExtdocError):
    """Raised when a page template cannot be loaded or rendered."""

    def __init__(self, template: str, message: str):
        super().__init__(f"Template {template}: {message}")
        self.template = template
