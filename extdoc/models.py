"""Data models for extension-method documentation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .jdk import resolve_jdk_class_name

PRIMITIVE_TYPE_PSEUDO_PACKAGE = "primitive-types"


@dataclass(frozen=True)
class TypeRef:
    """A Java type as written in a signature, resolved as far as possible."""

    value: str  # "java.lang.String", "int", or an unresolved "T"
    dimensions: int = 0
    primitive: bool = False
    interface: bool = False
    varargs: bool = False
    # False when the package was guessed from the declaring compilation unit
    resolved: bool = True

    def __str__(self) -> str:
        return self.value + "[]" * self.dimensions


@dataclass(frozen=True)
class DocTag:
    """A javadoc block tag such as ``@return`` or ``@param``."""

    name: str  # "return", without the "@"
    value: str


@dataclass(frozen=True)
class ParsedParameter:
    name: str
    type: TypeRef


@dataclass
class ParsedMethod:
    """A method signature with its javadoc, as read from a source file."""

    name: str
    declaring_class: str  # "org.codehaus.groovy.runtime.DefaultGroovyMethods"
    modifiers: frozenset[str] = frozenset()
    annotations: tuple[str, ...] = ()  # Fully-qualified annotation names
    parameters: list[ParsedParameter] = field(default_factory=list)
    return_type: TypeRef | None = None  # None for void
    comment: str = ""  # Javadoc body without block tags
    tags: list[DocTag] = field(default_factory=list)
    source_file: str = ""
    line_number: int = 0

    @property
    def declaring_class_name(self) -> str:
        return self.declaring_class.rsplit(".", 1)[-1]

    def tag_by_name(self, name: str) -> DocTag | None:
        for tag in self.tags:
            if tag.name == name:
                return tag
        return None

    def tags_by_name(self, name: str) -> list[DocTag]:
        return [tag for tag in self.tags if tag.name == name]


@dataclass(eq=False)
class DocMethod:
    """An extension method filed under the type it extends."""

    declaring_doc_type: DocType
    method: ParsedMethod
    static: bool = False  # Static on the receiver type (e.g. Thread.start)

    @property
    def name(self) -> str:
        return self.method.name

    @property
    def parameters(self) -> list[ParsedParameter]:
        """Parameters without the first one, which is the receiver."""
        return self.method.parameters[1:]

    @property
    def parameters_signature(self) -> str:
        return ", ".join(resolve_jdk_class_name(str(p.type)) for p in self.parameters)

    @property
    def sort_key(self) -> str:
        return (
            f"{self.name} {self.parameters_signature} "
            f"{self.declaring_doc_type.fully_qualified_class_name}"
        )


@dataclass(eq=False)
class DocType:
    """A receiver type together with the extension methods it gains."""

    type_ref: TypeRef
    # Empty because JDK classes are not parsed
    short_comment: str = ""
    _methods: dict[str, DocMethod] = field(default_factory=dict, repr=False)

    @property
    def fully_qualified_class_name(self) -> str:
        if self.type_ref.primitive:
            return f"{PRIMITIVE_TYPE_PSEUDO_PACKAGE}.{self.type_ref}"
        return resolve_jdk_class_name(str(self.type_ref))

    @property
    def package_name(self) -> str:
        if self.type_ref.primitive:
            return PRIMITIVE_TYPE_PSEUDO_PACKAGE
        fqcn = self.fully_qualified_class_name
        if "." not in fqcn:
            return ""
        return fqcn.rsplit(".", 1)[0]

    @property
    def simple_class_name(self) -> str:
        return self.fully_qualified_class_name.rsplit(".", 1)[-1]

    @property
    def interface(self) -> bool:
        return self.type_ref.interface

    @property
    def sort_key(self) -> str:
        return f"{self.simple_class_name} {self.fully_qualified_class_name}"

    @property
    def doc_methods(self) -> list[DocMethod]:
        return [self._methods[key] for key in sorted(self._methods)]

    def add_method(self, method: ParsedMethod, static: bool = False) -> DocMethod:
        """Add a method; an equal sort key keeps the method added first."""
        doc_method = DocMethod(declaring_doc_type=self, method=method, static=static)
        return self._methods.setdefault(doc_method.sort_key, doc_method)


@dataclass(eq=False)
class DocPackage:
    """A Java package (or the primitive pseudo-package) of receiver types."""

    name: str
    _types: dict[str, DocType] = field(default_factory=dict, repr=False)

    @property
    def primitive(self) -> bool:
        return self.name == PRIMITIVE_TYPE_PSEUDO_PACKAGE

    @property
    def sort_key(self) -> str:
        return self.name

    @property
    def doc_types(self) -> list[DocType]:
        return sorted(self._types.values(), key=lambda t: t.sort_key)

    def get_or_add_type(self, type_ref: TypeRef) -> DocType:
        candidate = DocType(type_ref=type_ref)
        return self._types.setdefault(candidate.fully_qualified_class_name, candidate)


@dataclass
class DocSource:
    """The package -> type -> method tree rendered into HTML."""

    static_extension_classes: tuple[str, ...] = ()
    _packages: dict[str, DocPackage] = field(default_factory=dict, repr=False)

    @property
    def packages(self) -> list[DocPackage]:
        return sorted(self._packages.values(), key=lambda p: p.sort_key)

    @property
    def all_doc_types(self) -> list[DocType]:
        types = [t for p in self._packages.values() for t in p.doc_types]
        return sorted(types, key=lambda t: t.sort_key)

    def __iter__(self) -> Iterator[DocMethod]:
        for doc_type in self.all_doc_types:
            yield from doc_type.doc_methods

    def add(self, type_ref: TypeRef, method: ParsedMethod) -> DocMethod:
        """File ``method`` under the type it extends."""
        package_name = DocType(type_ref=type_ref).package_name
        package = self._packages.setdefault(package_name, DocPackage(name=package_name))
        doc_type = package.get_or_add_type(type_ref)
        static = method.declaring_class_name in self.static_extension_classes
        return doc_type.add_method(method, static=static)


def build_doc_source(
    methods: Iterable[ParsedMethod],
    static_extension_classes: tuple[str, ...] = (),
) -> DocSource:
    """Group filtered extension methods by receiver type and package."""
    source = DocSource(static_extension_classes=static_extension_classes)
    for method in methods:
        source.add(method.parameters[0].type, method)
    return source
