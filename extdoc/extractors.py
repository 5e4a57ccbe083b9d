"""Extension-method extraction from Java sources using the javalang parser."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import javalang
from javalang.parser import JavaSyntaxError
from javalang.tokenizer import LexerError

from .config import Config
from .errors import RegistryLookupError, SourceParseError
from .jdk import KNOWN_INTERFACES, PRIMITIVE_TYPES, lookup_member
from .models import DocTag, ParsedMethod, ParsedParameter, TypeRef

log = logging.getLogger(__name__)

DEPRECATED = "java.lang.Deprecated"

# Any "@tag" starting a line is a block tag. Mid-line only the standard names
# are, so "annotated with @Deprecated" stays in the text.
_STANDARD_TAGS = (
    "param|return|see|since|throws|exception|deprecated|author|version|serial"
)
_BLOCK_TAG = re.compile(
    rf"^[ \t]*@([A-Za-z]+)\b|(?<=\s)@({_STANDARD_TAGS})\b", re.MULTILINE
)


@dataclass
class ParsedJavadoc:
    """Javadoc split into body text and block tags."""

    comment: str = ""
    tags: list[DocTag] = field(default_factory=list)


def _strip_comment_markers(raw: str) -> str:
    """Remove the comment delimiters and the leading "*" gutter of each line."""
    text = raw.strip()
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]
    lines = [re.sub(r"^\s*\*+ ?", "", line).rstrip() for line in text.split("\n")]
    return "\n".join(lines).strip()


def _block_tags(text: str) -> list[re.Match[str]]:
    matches = []
    for match in _BLOCK_TAG.finditer(text):
        # Skip "@" inside an inline {@...} tag
        if text.count("{", 0, match.start()) > text.count("}", 0, match.start()):
            continue
        matches.append(match)
    return matches


def parse_javadoc(raw: str | None) -> ParsedJavadoc:
    """Parse a ``/** ... */`` comment into its body and block tags."""
    if not raw:
        return ParsedJavadoc()

    text = _strip_comment_markers(raw)
    matches = _block_tags(text)
    if not matches:
        return ParsedJavadoc(comment=text)

    result = ParsedJavadoc(comment=text[: matches[0].start()].strip())
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        value = re.sub(r"\s+", " ", text[match.end() : end]).strip()
        name = match.group(1) or match.group(2)
        result.tags.append(DocTag(name=name, value=value))
    return result


def source_file_of(class_name: str, source_root: str | Path = "src/main") -> Path:
    """Map a class name (or a path) to the Java source that declares it."""
    if "/" in class_name:
        return Path(class_name)
    outer = re.sub(r"\$.*", "", class_name)
    return Path(source_root) / (outer.replace(".", "/") + ".java")


def _parse(path: Path) -> javalang.tree.CompilationUnit:
    try:
        return javalang.parse.parse(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise SourceParseError(path, f"not valid UTF-8 ({e.reason})") from e
    except (JavaSyntaxError, LexerError) as e:
        detail = getattr(e, "description", None) or str(e) or e.__class__.__name__
        raise SourceParseError(path, detail) from e


def _body(type_decl) -> list:
    body = getattr(type_decl, "body", None)
    return body if isinstance(body, list) else []


def _position_line(node) -> int:
    position = getattr(node, "position", None)
    return position[0] if position else 0


def _qualified(node) -> str:
    """Join a possibly nested reference type ("Map.Entry") into one name."""
    name = node.name
    if isinstance(name, (list, tuple)):
        name = ".".join(name)
    sub = getattr(node, "sub_type", None)
    while sub is not None:
        name = f"{name}.{sub.name}"
        sub = getattr(sub, "sub_type", None)
    return name


def _dimensions(node) -> int:
    count = 0
    while node is not None:
        count += len(getattr(node, "dimensions", None) or [])
        node = getattr(node, "sub_type", None)
    return count


@dataclass
class _Scope:
    """Name-resolution context of one compilation unit."""

    package: str
    single_imports: dict[str, str]
    wildcard_imports: list[str]
    known_types: set[str]  # FQNs declared in any parsed source
    interfaces: set[str]
    type_parameters: frozenset[str] = frozenset()

    @classmethod
    def of(cls, unit, known_types: set[str], interfaces: set[str]) -> _Scope:
        single: dict[str, str] = {}
        wildcard: list[str] = []
        for imp in unit.imports or []:
            if imp.static:
                continue
            if imp.wildcard:
                wildcard.append(imp.path)
            else:
                single[imp.path.rsplit(".", 1)[-1]] = imp.path
        package = unit.package.name if unit.package else ""
        return cls(package, single, wildcard, known_types, interfaces)

    def with_type_parameters(self, *groups) -> _Scope:
        names = {p.name for group in groups for p in group or []}
        return _Scope(
            self.package,
            self.single_imports,
            self.wildcard_imports,
            self.known_types,
            self.interfaces,
            self.type_parameters | names,
        )

    def resolve(self, name: str) -> str:
        return self.lookup(name)[0]

    def lookup(self, name: str) -> tuple[str, bool]:
        """Resolve a type name.

        The flag is False when nothing matched and the name was placed in the
        compilation unit's own package.
        """
        if name in self.type_parameters:
            return name, True
        head, _, rest = name.partition(".")
        if rest and head[:1].islower():
            return name, True
        resolved, certain = self._resolve_simple(head)
        return (f"{resolved}.{rest}" if rest else resolved), certain

    def _resolve_simple(self, simple: str) -> tuple[str, bool]:
        if simple in self.single_imports:
            return self.single_imports[simple], True
        local = f"{self.package}.{simple}" if self.package else simple
        if local in self.known_types:
            return local, True
        for package in ["java.lang", *self.wildcard_imports]:
            member = lookup_member(package, simple)
            if member is None and f"{package}.{simple}" in self.known_types:
                member = f"{package}.{simple}"
            if member:
                return member, True
        if len(self.wildcard_imports) == 1:
            return f"{self.wildcard_imports[0]}.{simple}", True
        return local, False

    def type_ref(self, node, varargs: bool = False) -> TypeRef:
        dimensions = _dimensions(node)
        if isinstance(node, javalang.tree.BasicType) or node.name in PRIMITIVE_TYPES:
            return TypeRef(node.name, dimensions, primitive=True, varargs=varargs)
        value, resolved = self.lookup(_qualified(node))
        is_interface = dimensions == 0 and (
            value in KNOWN_INTERFACES or value in self.interfaces
        )
        return TypeRef(
            value,
            dimensions,
            interface=is_interface,
            varargs=varargs,
            resolved=resolved,
        )


def _declared_types(unit) -> tuple[set[str], set[str]]:
    package = unit.package.name if unit.package else ""
    declared: set[str] = set()
    interfaces: set[str] = set()
    for type_decl in unit.types or []:
        fqn = f"{package}.{type_decl.name}" if package else type_decl.name
        declared.add(fqn)
        if isinstance(type_decl, javalang.tree.InterfaceDeclaration):
            interfaces.add(fqn)
    return declared, interfaces


def parse_sources(
    paths: Iterable[Path],
) -> list[tuple[Path, javalang.tree.CompilationUnit]]:
    """Parse every existing source file; missing files are skipped."""
    units = []
    for path in paths:
        if not path.exists():
            log.debug("not found, skipping: %s", path)
            continue
        log.debug("adding source %s", path)
        units.append((path, _parse(path)))
    return units


def _parse_method(
    method,
    declaring_class: str,
    scope: _Scope,
    path: Path,
    in_interface: bool,
) -> ParsedMethod:
    scope = scope.with_type_parameters(method.type_parameters)
    modifiers = set(method.modifiers or ())
    if in_interface:
        modifiers.add("public")
    javadoc = parse_javadoc(method.documentation)
    return ParsedMethod(
        name=method.name,
        declaring_class=declaring_class,
        modifiers=frozenset(modifiers),
        annotations=tuple(scope.resolve(a.name) for a in method.annotations or []),
        parameters=[
            ParsedParameter(
                name=p.name,
                type=scope.type_ref(p.type, varargs=bool(p.varargs)),
            )
            for p in method.parameters or []
        ],
        return_type=scope.type_ref(method.return_type) if method.return_type else None,
        comment=javadoc.comment,
        tags=javadoc.tags,
        source_file=str(path),
        line_number=_position_line(method),
    )


def extract_methods(paths: Iterable[Path]) -> list[ParsedMethod]:
    """Read every method declared by the top-level types of the given sources."""
    units = parse_sources(paths)

    known_types: set[str] = set()
    interfaces: set[str] = set()
    for _, unit in units:
        declared, declared_interfaces = _declared_types(unit)
        known_types |= declared
        interfaces |= declared_interfaces

    methods: list[ParsedMethod] = []
    for path, unit in units:
        scope = _Scope.of(unit, known_types, interfaces)
        for type_decl in unit.types or []:
            declaring_class = scope.resolve(type_decl.name)
            in_interface = isinstance(type_decl, javalang.tree.InterfaceDeclaration)
            class_scope = scope.with_type_parameters(
                getattr(type_decl, "type_parameters", None)
            )
            for decl in _body(type_decl):
                if isinstance(decl, javalang.tree.MethodDeclaration):
                    method = _parse_method(
                        decl, declaring_class, class_scope, path, in_interface
                    )
                    methods.append(method)
    return methods


def is_extension_method(method: ParsedMethod, config: Config) -> bool:
    """Check if a method documents as an extension of its first parameter's type."""
    if "public" not in method.modifiers or "static" not in method.modifiers:
        return False
    if DEPRECATED in method.annotations:
        return False
    if not method.parameters:
        return False
    receiver = method.parameters[0].type
    if not receiver.resolved:
        # Package was guessed from the declaring class, not read from an import
        log.debug("unresolved receiver %s of %s kept", receiver, method.name)
        return True
    return not config.in_library_namespace(receiver.value)


def filter_methods(
    methods: Iterable[ParsedMethod], config: Config
) -> list[ParsedMethod]:
    return [m for m in methods if is_extension_method(m, config)]


def _class_reference_name(node) -> str | None:
    """Name of a ``Foo.class`` literal.

    The parser splits "a.b.Foo.class" into the qualifier "a.b" and the type "Foo".
    """
    parts = [getattr(node, "qualifier", None) or ""]
    ref_type = getattr(node, "type", None)
    if ref_type is not None and getattr(ref_type, "name", None):
        parts.append(_qualified(ref_type))
    name = ".".join(part for part in parts if part)
    return name or None


def _outer_class(name: str, scope: _Scope) -> str:
    """Resolve a class literal and drop any nested-class segments."""
    segments = name.split(".")
    for i, segment in enumerate(segments):
        if segment[:1].isupper():
            return scope.resolve(".".join(segments[: i + 1]))
    return name


def load_registry_classes(path: Path, field_name: str = "additionals") -> list[str]:
    """Read the class literals listed by the registry class's array field.

    Raises:
        RegistryLookupError: If the source cannot be read or parsed, or lacks
            the field.
    """
    if not path.exists():
        raise RegistryLookupError(f"Registry source not found: {path}")
    try:
        unit = _parse(path)
    except SourceParseError as e:
        raise RegistryLookupError(str(e)) from e
    except OSError as e:
        raise RegistryLookupError(f"Cannot read registry source {path}: {e}") from e

    declared, interfaces = _declared_types(unit)
    scope = _Scope.of(unit, declared, interfaces)
    for type_decl in unit.types or []:
        for decl in _body(type_decl):
            if not isinstance(decl, javalang.tree.FieldDeclaration):
                continue
            if not any(d.name == field_name for d in decl.declarators):
                continue
            classes = []
            for _, node in decl.filter(javalang.tree.ClassReference):
                name = _class_reference_name(node)
                if name:
                    classes.append(_outer_class(name, scope))
            return classes

    raise RegistryLookupError(f"No field {field_name!r} in {path}")


def collect_source_files(
    class_names: Iterable[str],
    config: Config,
    additional_classes: Iterable[str] = (),
) -> list[Path]:
    """Map class names to source paths, appending registry classes not yet listed."""
    files = [source_file_of(name, config.source_root) for name in class_names]
    seen = {f.resolve() for f in files}
    for class_name in additional_classes:
        additional = source_file_of(class_name, config.source_root)
        if additional.resolve() not in seen:
            seen.add(additional.resolve())
            files.append(additional)
    return files
