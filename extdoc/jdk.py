"""Well-known JDK names used to resolve simple type names without a classpath."""

from __future__ import annotations

PRIMITIVE_TYPES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double"}
)

# Package members resolvable through an on-demand import. java.lang is implicit
# and listed in full; the other packages list the commonly extended types.
KNOWN_PACKAGE_MEMBERS: dict[str, frozenset[str]] = {
    "java.lang": frozenset(
        {
            # Interfaces
            "Appendable", "AutoCloseable", "CharSequence", "Cloneable",
            "Comparable", "Iterable", "Readable", "Runnable",
            # Classes
            "Boolean", "Byte", "Character", "Class", "ClassLoader", "ClassValue",
            "Compiler", "Double", "Enum", "Float", "InheritableThreadLocal",
            "Integer", "Long", "Math", "Number", "Object", "Package", "Process",
            "ProcessBuilder", "Runtime", "RuntimePermission", "SecurityManager",
            "Short", "StackTraceElement", "StrictMath", "String", "StringBuffer",
            "StringBuilder", "System", "Thread", "ThreadGroup", "ThreadLocal",
            "Throwable", "Void",
            # Exceptions
            "ArithmeticException", "ArrayIndexOutOfBoundsException",
            "ArrayStoreException", "ClassCastException", "ClassNotFoundException",
            "CloneNotSupportedException", "EnumConstantNotPresentException",
            "Exception", "IllegalAccessException", "IllegalArgumentException",
            "IllegalMonitorStateException", "IllegalStateException",
            "IllegalThreadStateException", "IndexOutOfBoundsException",
            "InstantiationException", "InterruptedException",
            "NegativeArraySizeException", "NoSuchFieldException",
            "NoSuchMethodException", "NullPointerException",
            "NumberFormatException", "ReflectiveOperationException",
            "RuntimeException", "SecurityException",
            "StringIndexOutOfBoundsException", "TypeNotPresentException",
            "UnsupportedOperationException",
            # Errors
            "AbstractMethodError", "AssertionError", "BootstrapMethodError",
            "ClassCircularityError", "ClassFormatError", "Error",
            "ExceptionInInitializerError", "IllegalAccessError",
            "IncompatibleClassChangeError", "InstantiationError", "InternalError",
            "LinkageError", "NoClassDefFoundError", "NoSuchFieldError",
            "NoSuchMethodError", "OutOfMemoryError", "StackOverflowError",
            "ThreadDeath", "UnknownError", "UnsatisfiedLinkError",
            "UnsupportedClassVersionError", "VerifyError", "VirtualMachineError",
            # Annotations
            "Deprecated", "FunctionalInterface", "Override", "SafeVarargs",
            "SuppressWarnings",
        }
    ),
    "java.io": frozenset(
        {
            "BufferedInputStream", "BufferedOutputStream", "BufferedReader",
            "BufferedWriter", "Closeable", "DataInputStream", "DataOutputStream",
            "File", "FileFilter", "FilenameFilter", "Flushable", "InputStream",
            "ObjectInputStream", "ObjectOutputStream", "OutputStream",
            "PrintStream", "PrintWriter", "Reader", "Serializable", "Writer",
        }
    ),
    "java.net": frozenset({"ServerSocket", "Socket", "URI", "URL"}),
    "java.nio.file": frozenset({"Path", "Paths", "Files"}),
    "java.sql": frozenset({"Date", "ResultSet", "Timestamp"}),
    "java.text": frozenset({"DateFormat", "SimpleDateFormat"}),
    "java.util": frozenset(
        {
            "AbstractMap", "ArrayList", "Arrays", "BitSet", "Calendar",
            "Collection", "Collections", "Comparator", "Date", "Deque",
            "Enumeration", "HashMap", "HashSet", "Iterator", "LinkedHashMap",
            "LinkedHashSet", "LinkedList", "List", "ListIterator", "Locale",
            "Map", "NavigableMap", "NavigableSet", "Queue", "Random", "Set",
            "SortedMap", "SortedSet", "Stack", "TimeZone", "Timer", "TreeMap",
            "TreeSet", "Vector",
        }
    ),
    "java.util.concurrent": frozenset(
        {"BlockingQueue", "Callable", "ConcurrentMap", "Future", "TimeUnit"}
    ),
    "java.util.regex": frozenset({"Matcher", "Pattern"}),
}

KNOWN_INTERFACES = frozenset(
    {
        "java.io.Closeable",
        "java.io.FileFilter",
        "java.io.FilenameFilter",
        "java.io.Flushable",
        "java.io.Serializable",
        "java.lang.Appendable",
        "java.lang.AutoCloseable",
        "java.lang.CharSequence",
        "java.lang.Cloneable",
        "java.lang.Comparable",
        "java.lang.Iterable",
        "java.lang.Readable",
        "java.lang.Runnable",
        "java.nio.file.Path",
        "java.sql.ResultSet",
        "java.util.Collection",
        "java.util.Comparator",
        "java.util.Deque",
        "java.util.Enumeration",
        "java.util.Iterator",
        "java.util.List",
        "java.util.ListIterator",
        "java.util.Map",
        "java.util.Map.Entry",
        "java.util.NavigableMap",
        "java.util.NavigableSet",
        "java.util.Queue",
        "java.util.Set",
        "java.util.SortedMap",
        "java.util.SortedSet",
        "java.util.concurrent.BlockingQueue",
        "java.util.concurrent.Callable",
        "java.util.concurrent.ConcurrentMap",
        "java.util.concurrent.Future",
    }
)


def lookup_member(package: str, simple_name: str) -> str | None:
    """Return the fully-qualified name if ``package`` is known to hold the type."""
    if simple_name in KNOWN_PACKAGE_MEMBERS.get(package, ()):
        return f"{package}.{simple_name}"
    return None


# Type-parameter names used by the extension classes, documented as Object
GENERIC_PLACEHOLDERS = frozenset({"T", "E", "U", "K", "V", "G"})
GENERIC_ARRAY_PLACEHOLDERS = frozenset({"T[]", "E[]"})


def resolve_jdk_class_name(class_name: str) -> str:
    """Map generic placeholders to the JDK type they erase to."""
    if class_name in GENERIC_PLACEHOLDERS:
        return "java.lang.Object"
    if class_name in GENERIC_ARRAY_PLACEHOLDERS:
        return "java.lang.Object[]"
    return class_name
