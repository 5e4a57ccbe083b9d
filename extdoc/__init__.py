"""extdoc - HTML documentation for Java extension methods.

Parses Java sources, keeps the public static methods whose first parameter
names the type they extend, groups them package -> type -> method, and
renders a javadoc-style site.
"""

__version__ = "0.1.0"
