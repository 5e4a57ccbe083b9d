"""HTML site generation from the documentation tree."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2

from .config import Config
from .errors import TemplateRenderError
from .formatters import JavadocFormatter, relative_root
from .models import DocMethod, DocSource, DocType

log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).with_name("templates")
RESOURCES = ("extdoc.ico", "stylesheet.css")


@dataclass(frozen=True)
class IndexItem:
    """One entry of index-all.html: a type, or a method of that type."""

    index: str  # Upper-cased first letter
    doc_type: DocType
    sort_key: str
    doc_method: DocMethod | None = None


def package_path(package_name: str) -> Path:
    """Relative directory of a package ("java.util" -> java/util)."""
    return Path(*package_name.split(".")) if package_name else Path()


def package_url(package_name: str) -> str:
    """Relative URL prefix of a package directory ("java.util" -> "java/util/")."""
    return package_name.replace(".", "/") + "/" if package_name else ""


def create_package_directory(output_dir: Path, package_name: str) -> Path:
    directory = output_dir / package_path(package_name)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def generate_index_map(doc_source: DocSource) -> dict[str, list[IndexItem]]:
    """Bucket every type and method by the upper-cased first letter of its name.

    Buckets are ordered by letter and their entries by sort key. Entries with
    equal sort keys are kept once.
    """
    buckets: dict[str, dict[str, IndexItem]] = {}
    for doc_type in doc_source.all_doc_types:
        items = [
            IndexItem(
                index=doc_type.simple_class_name[0].upper(),
                doc_type=doc_type,
                sort_key=doc_type.sort_key,
            )
        ]
        for doc_method in doc_type.doc_methods:
            items.append(
                IndexItem(
                    index=doc_method.name[0].upper(),
                    doc_type=doc_type,
                    doc_method=doc_method,
                    sort_key=doc_method.sort_key,
                )
            )
        for item in items:
            bucket = buckets.setdefault(item.index, {})
            bucket.setdefault(item.sort_key, item)

    return {
        letter: [bucket[key] for key in sorted(bucket)]
        for letter, bucket in sorted(buckets.items())
    }


class DocGenerator:
    """Renders a DocSource into a javadoc-style frameset site.

    Args:
        doc_source: The package -> type -> method tree
        output_dir: Site root, created if missing
        config: Title, link targets and namespaces
        templates_dir: Directory holding the page templates and static resources
    """

    def __init__(
        self,
        doc_source: DocSource,
        output_dir: Path,
        config: Config,
        templates_dir: Path = TEMPLATES_DIR,
    ):
        self.doc_source = doc_source
        self.output_dir = Path(output_dir)
        self.config = config
        self.templates_dir = templates_dir
        self.formatter = JavadocFormatter(config)
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(templates_dir)),
            autoescape=jinja2.select_autoescape(["html"]),
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["package_url"] = package_url
        self.env.globals.update(
            fmt=self.formatter,
            relative_root=relative_root,
            title=config.title,
        )

    def _render(self, template_name: str, **context: Any) -> str:
        try:
            return self.env.get_template(template_name).render(**context)
        except jinja2.TemplateError as e:
            raise TemplateRenderError(template_name, str(e)) from e

    def _write(self, path: Path, text: str) -> None:
        path.write_text(text, encoding="utf-8")
        log.debug("wrote %s", path)

    def generate_all(self) -> list[Path]:
        """Write every page and resource; returns the files written."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []

        def emit(path: Path, text: str) -> None:
            self._write(path, text)
            written.append(path)

        emit(self.output_dir / "index.html", self._render("index.html"))
        emit(
            self.output_dir / "overview-summary.html",
            self._render("overview-summary.html", packages=self.doc_source.packages),
        )

        packages = self.doc_source.packages
        packages_except_primitive = [p for p in packages if not p.primitive]
        primitive_package = next((p for p in packages if p.primitive), None)
        emit(
            self.output_dir / "overview-frame.html",
            self._render(
                "template.overview-frame.html",
                packages=packages_except_primitive,
                primitive_package=primitive_package,
            ),
        )

        package_list = "".join(f"{p.name}\n" for p in self.doc_source.packages)
        emit(self.output_dir / "package-list", package_list)

        all_types = self.doc_source.all_doc_types
        emit(
            self.output_dir / "allclasses-frame.html",
            self._render("template.allclasses-frame.html", doc_types=all_types),
        )

        for doc_package in self.doc_source.packages:
            directory = create_package_directory(self.output_dir, doc_package.name)
            emit(
                directory / "package-frame.html",
                self._render("template.package-frame.html", doc_package=doc_package),
            )

        for doc_type in all_types:
            directory = create_package_directory(self.output_dir, doc_type.package_name)
            emit(
                directory / f"{doc_type.simple_class_name}.html",
                self._render("template.class.html", doc_type=doc_type),
            )

        emit(
            self.output_dir / "index-all.html",
            self._render(
                "template.index-all.html",
                index_map=generate_index_map(self.doc_source),
            ),
        )

        for resource in RESOURCES:
            target = self.output_dir / resource
            shutil.copyfile(self.templates_dir / resource, target)
            written.append(target)

        log.info("Generated %d files in %s", len(written), self.output_dir)
        return written
