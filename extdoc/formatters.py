"""Javadoc text formatting and cross-reference links.

Links are resolved textually: a reference to a class that does not exist
still produces an anchor.
"""

from __future__ import annotations

import re

from markupsafe import Markup

from .config import Config
from .jdk import resolve_jdk_class_name
from .models import DocMethod

__all__ = [
    "JavadocFormatter",
    "codify",
    "first_sentence",
    "relative_root",
    "resolve_jdk_class_name",
]

_CODE = re.compile(r"\{@code\s+([^}]*)\s*\}")
_LINK = re.compile(r"\{@link\s+([^}]*)\s*\}")
_SHORTHAND = re.compile(r"#([^(]*)\(([^)]+)\)")
# A terminator followed by whitespace and something that does not continue
# the sentence in lower case ("e.g. this" is one sentence)
_SENTENCE_END = re.compile(r"[.!?]+(?:\s+(?=[^a-z\s])|\s*$)")


def codify(text: str) -> str:
    return _CODE.sub(lambda m: f"<code>{m.group(1)}</code>", text)


def first_sentence(text: str) -> str:
    match = _SENTENCE_END.search(text)
    if match is None:
        return text
    return text[: match.end()]


def relative_root(package_name: str) -> str:
    """Path from a package's directory back to the output root."""
    if not package_name:
        return ""
    return "../" * (package_name.count(".") + 1)


def _expand_shorthand(destination: str) -> str:
    """Rewrite "#name(Receiver, Args)" as "Receiver#name(Args)"."""
    match = _SHORTHAND.search(destination)
    if match is None:
        return destination
    name, args_text = match.group(1), match.group(2)
    args = re.split(r",\s?", args_text)
    receiver = args.pop(0)
    return f"{receiver}#{name}({', '.join(args)})"


class JavadocFormatter:
    """Turns javadoc text into HTML, linking class references.

    Args:
        config: Supplies the API base URLs and the library namespace.
    """

    def __init__(self, config: Config):
        self.config = config

    def link_anchor(self, destination: str, origin_package: str) -> str:
        """Build an ``<a>`` for a class or method reference.

        Args:
            destination: "java.util.List", "java.util.List#add(Object)", or
                the shorthand "#name(Receiver, Args)" for another extension method
            origin_package: Package of the page the link appears on

        Returns:
            The anchor HTML, or ``destination`` unchanged when it has no package
        """
        in_library_docs = destination.startswith("#")
        if in_library_docs:
            destination = _expand_shorthand(destination)

        class_part = destination.split("#", 1)[0]
        fragment = destination[len(class_part) :]
        fqcn = resolve_jdk_class_name(class_part)
        simple_class_name = fqcn.rsplit(".", 1)[-1]
        package_name = fqcn.rsplit(".", 1)[0] if "." in fqcn else ""

        # No package means no documentation location to point at
        if not package_name:
            return destination

        if in_library_docs:
            base_url = relative_root(origin_package)
            title = f"{self.config.library_label} enhancement for {fqcn}"
        elif self.config.in_library_namespace(package_name):
            base_url = self.config.library_api_url
            title = f"{self.config.library_label} class in {package_name}"
        else:
            base_url = self.config.jdk_api_url
            title = f"JDK class in {package_name}"

        path = package_name.replace(".", "/")
        url = f"{base_url}{path}/{simple_class_name}.html{fragment}"
        return f'<a href="{url}" title="{title}">{simple_class_name}{fragment}</a>'

    def linkify(self, text: str, origin_package: str) -> str:
        return _LINK.sub(
            lambda m: self.link_anchor(m.group(1).strip(), origin_package), text
        )

    def format_text(self, text: str, origin_package: str) -> Markup:
        return Markup(self.linkify(codify(text), origin_package))

    # Per-method views used by the class page template

    def comment(self, doc_method: DocMethod) -> Markup:
        return self.format_text(doc_method.method.comment, self._package(doc_method))

    def short_comment(self, doc_method: DocMethod) -> Markup:
        text = first_sentence(doc_method.method.comment)
        return self.format_text(text, self._package(doc_method))

    def return_comment(self, doc_method: DocMethod) -> Markup:
        tag = doc_method.method.tag_by_name("return")
        return self.format_text(tag.value if tag else "", self._package(doc_method))

    def parameter_comments(self, doc_method: DocMethod) -> dict[str, Markup]:
        """Map parameter names to their formatted @param text, minus the receiver."""
        comments = {}
        for tag in doc_method.method.tags_by_name("param")[1:]:
            name, _, text = tag.value.partition(" ")
            comments[name] = self.format_text(text, self._package(doc_method))
        return comments

    def see_comments(self, doc_method: DocMethod) -> list[Markup]:
        package = self._package(doc_method)
        return [
            Markup(self.link_anchor(tag.value, package))
            for tag in doc_method.method.tags_by_name("see")
        ]

    def since_comment(self, doc_method: DocMethod) -> str | None:
        tag = doc_method.method.tag_by_name("since")
        return tag.value if tag else None

    def parameters_doc_url(self, doc_method: DocMethod) -> Markup:
        package = self._package(doc_method)
        parts = []
        for p in doc_method.parameters:
            type_link = self.link_anchor(resolve_jdk_class_name(str(p.type)), package)
            if p.type.varargs:
                type_link += "..."
            parts.append(f"{type_link} {p.name}")
        return Markup(", ".join(parts))

    def return_type_doc_url(self, doc_method: DocMethod) -> Markup:
        return_type = doc_method.method.return_type
        resolved = resolve_jdk_class_name(str(return_type)) if return_type else "void"
        return Markup(self.link_anchor(resolved, self._package(doc_method)))

    @staticmethod
    def _package(doc_method: DocMethod) -> str:
        return doc_method.declaring_doc_type.package_name
