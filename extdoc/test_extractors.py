"""Tests for javadoc parsing, source loading and the extension-method filter."""

from pathlib import Path

import pytest

from extdoc.errors import RegistryLookupError, SourceParseError
from extdoc.extractors import (
    collect_source_files,
    extract_methods,
    filter_methods,
    is_extension_method,
    load_registry_classes,
    parse_javadoc,
    source_file_of,
)
from extdoc.models import ParsedMethod, ParsedParameter, TypeRef

STRING_EXTENSIONS = """
    package org.example;

    import java.util.*;
    import java.io.File;

    public class StringExtensions {
        /**
         * Reverses a string.
         *
         * @param self a String
         * @return the reversed string
         */
        public static String reverse(String self) {
            return new StringBuilder(self).reverse().toString();
        }

        /**
         * Splits into lines.
         * @param self a String
         * @return the lines
         * @since 1.5
         */
        public static List<String> readLines(String self) {
            return null;
        }

        @Deprecated
        public static String center(String self, int width) {
            return self;
        }

        public static <T> List<T> toList(T[] self) {
            return null;
        }

        public static long size(File self) {
            return 0;
        }

        public static int sum(int[] self) {
            return 0;
        }

        public static void eachLine(Map.Entry entry, Object... args) {
        }

        static String hidden(String self) {
            return self;
        }

        public String notStatic(String self) {
            return self;
        }

        public static String nothing() {
            return "";
        }
    }
"""


def _method(
    name="m",
    modifiers=("public", "static"),
    params=("java.lang.String",),
    annotations=(),
):
    return ParsedMethod(
        name=name,
        declaring_class="org.example.Ext",
        modifiers=frozenset(modifiers),
        annotations=tuple(annotations),
        parameters=[ParsedParameter(f"p{i}", TypeRef(t)) for i, t in enumerate(params)],
    )


def test_brief():
    result = parse_javadoc("/** Short description. */")
    assert result.comment == "Short description."
    assert result.tags == []


def test_gutter_stripped():
    doc = """/**
     * First line of description
     * continues here.
     */"""
    result = parse_javadoc(doc)
    assert result.comment == "First line of description\ncontinues here."


def test_inline_block_tag():
    result = parse_javadoc("/** Reverses a string. @return the reversed string */")
    assert result.comment == "Reverses a string."
    assert result.tags[0].name == "return"
    assert result.tags[0].value == "the reversed string"


def test_tags_in_order():
    doc = """/**
     * Pads a string.
     *
     * @param self a String
     * @param width the
     *     target width
     * @return the padded string
     * @see #center(String, int)
     */"""
    result = parse_javadoc(doc)
    assert [t.name for t in result.tags] == ["param", "param", "return", "see"]
    assert result.tags[1].value == "width the target width"
    assert result.tags[3].value == "#center(String, int)"


def test_inline_tags_are_not_block_tags():
    result = parse_javadoc("/** Use {@link java.util.List} or {@code a @b} here. */")
    assert result.tags == []
    assert "{@link java.util.List}" in result.comment


def test_email_is_not_a_tag():
    result = parse_javadoc("/** Mail user@example.com for help. */")
    assert result.tags == []


def test_empty_javadoc():
    assert parse_javadoc(None).comment == ""
    assert parse_javadoc("").tags == []


def test_source_file_of():
    assert source_file_of("org.example.Foo") == Path("src/main/org/example/Foo.java")
    inner = source_file_of("org.example.Foo$Inner", "base")
    assert inner == Path("base/org/example/Foo.java")
    assert source_file_of("some/dir/Foo.java") == Path("some/dir/Foo.java")


def test_collect_source_files_skips_duplicates(config):
    files = collect_source_files(
        ["org.example.A"],
        config,
        additional_classes=["org.example.A", "org.example.B"],
    )
    assert [f.name for f in files] == ["A.java", "B.java"]


def test_extract_resolves_types(write_java):
    path = write_java("org.example.StringExtensions", STRING_EXTENSIONS)
    methods = {m.name: m for m in extract_methods([path])}

    reverse = methods["reverse"]
    assert reverse.declaring_class == "org.example.StringExtensions"
    assert reverse.parameters[0].type == TypeRef("java.lang.String")
    assert reverse.return_type == TypeRef("java.lang.String")
    assert reverse.comment == "Reverses a string."
    assert reverse.tag_by_name("return").value == "the reversed string"

    assert methods["readLines"].return_type == TypeRef("java.util.List", interface=True)
    assert str(methods["toList"].parameters[0].type) == "T[]"
    assert methods["size"].parameters[0].type.value == "java.io.File"
    assert methods["sum"].parameters[0].type == TypeRef("int", 1, primitive=True)
    assert methods["eachLine"].parameters[0].type.value == "java.util.Map.Entry"
    assert methods["eachLine"].parameters[1].type.varargs
    assert methods["eachLine"].return_type is None
    assert "java.lang.Deprecated" in methods["center"].annotations


def test_missing_source_is_skipped(write_java, tmp_path):
    path = write_java("org.example.StringExtensions", STRING_EXTENSIONS)
    methods = extract_methods([tmp_path / "Missing.java", path])
    assert "reverse" in {m.name for m in methods}


def test_unparsable_source_raises(write_java):
    path = write_java("org.example.Broken", "public class Broken { void (}")
    with pytest.raises(SourceParseError) as exc:
        extract_methods([path])
    assert exc.value.path == path


def test_interface_declared_in_sources(write_java):
    shape = write_java(
        "org.example.Shape",
        """
        package org.example;
        public interface Shape {
            double area();
        }
        """,
    )
    ext = write_java(
        "org.example.ShapeExtensions",
        """
        package org.example;
        public class ShapeExtensions {
            public static double twice(Shape self) { return 0; }
        }
        """,
    )
    methods = {m.name: m for m in extract_methods([shape, ext])}
    shape_ref = methods["twice"].parameters[0].type
    assert shape_ref == TypeRef("org.example.Shape", interface=True)
    # Interface methods are implicitly public
    assert "public" in methods["area"].modifiers


def test_filter_keeps_public_static_extensions(write_java, config):
    path = write_java("org.example.StringExtensions", STRING_EXTENSIONS)
    kept = {m.name for m in filter_methods(extract_methods([path]), config)}
    assert kept == {"reverse", "readLines", "toList", "size", "sum", "eachLine"}


def test_filter_rejects_library_receivers(config):
    assert not is_extension_method(_method(params=("groovy.lang.Closure",)), config)
    assert not is_extension_method(_method(params=("org.codehaus.groovy.Foo",)), config)
    method = _method(params=("java.lang.Object", "groovy.lang.Closure"))
    assert is_extension_method(method, config)


def test_filter_rejects_zero_parameters(config):
    assert not is_extension_method(_method(params=()), config)


def test_filter_rejects_deprecated(config):
    method = _method(annotations=["java.lang.Deprecated"])
    assert not is_extension_method(method, config)


def test_filter_is_idempotent(write_java, config):
    path = write_java("org.example.StringExtensions", STRING_EXTENSIONS)
    methods = extract_methods([path])
    once = filter_methods(methods, config)
    assert filter_methods(once, config) == once


REGISTRY = """
    package org.example.runtime;

    import org.example.StringExtensions;
    import org.example.io.FileExtensions;

    public class ExtensionRegistry {
        public static final Class[] additionals = {
            StringExtensions.class,
            FileExtensions.class,
            org.example.net.UrlExtensions.class,
            LocalExtensions.class
        };
    }
"""


def test_registry_classes(write_java):
    path = write_java("org.example.runtime.ExtensionRegistry", REGISTRY)
    assert load_registry_classes(path) == [
        "org.example.StringExtensions",
        "org.example.io.FileExtensions",
        "org.example.net.UrlExtensions",
        "org.example.runtime.LocalExtensions",
    ]


def test_registry_missing_field(write_java):
    path = write_java("org.example.runtime.ExtensionRegistry", REGISTRY)
    with pytest.raises(RegistryLookupError):
        load_registry_classes(path, "extensions")


def test_registry_missing_file(tmp_path):
    with pytest.raises(RegistryLookupError):
        load_registry_classes(tmp_path / "Nope.java")


def test_annotation_mentioned_mid_sentence_stays_in_text():
    doc = """/**
     * Removes methods annotated with @Deprecated from the list.
     * @return the list
     */"""
    result = parse_javadoc(doc)
    assert result.comment == "Removes methods annotated with @Deprecated from the list."
    assert [(t.name, t.value) for t in result.tags] == [("return", "the list")]


def test_custom_tag_at_line_start():
    result = parse_javadoc("/**\n * Body text.\n * @custom value\n */")
    assert result.comment == "Body text."
    assert result.tags[0].name == "custom"


RUNTIME_CLASS = "org.codehaus.groovy.runtime.ProcessExtensions"
RUNTIME_EXTENSIONS = """
    package org.codehaus.groovy.runtime;

    public class ProcessExtensions {
        public static Process begin(ProcessBuilder self) {
            return null;
        }

        public static int len(StackTraceElement self) {
            return 0;
        }

        public static String label(Widget self) {
            return "";
        }

        public static String describe(NullObject self) {
            return "";
        }
    }
"""

NULL_OBJECT = """
    package org.codehaus.groovy.runtime;

    public class NullObject {
    }
"""


def test_java_lang_receivers_in_library_package(write_java, config):
    path = write_java(RUNTIME_CLASS, RUNTIME_EXTENSIONS)
    methods = {m.name: m for m in extract_methods([path])}

    assert methods["begin"].parameters[0].type.value == "java.lang.ProcessBuilder"
    assert methods["len"].parameters[0].type.value == "java.lang.StackTraceElement"
    assert is_extension_method(methods["begin"], config)
    assert is_extension_method(methods["len"], config)


def test_unresolved_receiver_is_kept(write_java, config):
    path = write_java(RUNTIME_CLASS, RUNTIME_EXTENSIONS)
    null_object = write_java("org.codehaus.groovy.runtime.NullObject", NULL_OBJECT)
    methods = {m.name: m for m in extract_methods([path, null_object])}

    widget = methods["label"].parameters[0].type
    assert widget.value == "org.codehaus.groovy.runtime.Widget"
    assert not widget.resolved
    assert is_extension_method(methods["label"], config)

    # Declared in the parsed sources, so known to belong to the library
    assert methods["describe"].parameters[0].type.resolved
    assert not is_extension_method(methods["describe"], config)

    kept = {m.name for m in filter_methods(methods.values(), config)}
    assert kept == {"begin", "len", "label"}


def test_single_wildcard_import_resolves_unknown_names(write_java):
    path = write_java(
        "org.example.MapExtensions",
        """
        package org.example;

        import java.util.*;

        public class MapExtensions {
            public static int n(IdentityHashMap self) { return 0; }
        }
        """,
    )
    [method] = extract_methods([path])
    receiver = method.parameters[0].type
    assert receiver.value == "java.util.IdentityHashMap"
    assert receiver.resolved


def test_several_wildcard_imports_leave_unknown_names_unresolved(write_java):
    path = write_java(
        "org.example.MapExtensions",
        """
        package org.example;

        import java.util.*;
        import java.io.*;

        public class MapExtensions {
            public static int n(IdentityHashMap self) { return 0; }
        }
        """,
    )
    [method] = extract_methods([path])
    receiver = method.parameters[0].type
    assert receiver.value == "org.example.IdentityHashMap"
    assert not receiver.resolved


def test_registry_not_utf8(tmp_path):
    path = tmp_path / "Registry.java"
    path.write_bytes(b"public class Registry { String s = \"\xff\xfe\"; }")
    with pytest.raises(RegistryLookupError):
        load_registry_classes(path)


def test_registry_unreadable(tmp_path):
    # A directory exists but cannot be read as a file
    path = tmp_path / "Registry.java"
    path.mkdir()
    with pytest.raises(RegistryLookupError):
        load_registry_classes(path)
