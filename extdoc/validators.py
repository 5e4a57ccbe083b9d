"""Documentation validation and quality checks."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import DocMethod, DocSource


@dataclass
class ValidationResult:
    """Results from documentation validation."""

    errors: list[str] = field(default_factory=list)  # Build fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Logged but allowed


def _label(doc_method: DocMethod) -> str:
    return (
        f"{doc_method.declaring_doc_type.simple_class_name}#{doc_method.name}"
        f"({doc_method.parameters_signature})"
    )


def validate_docs(doc_source: DocSource, strict: bool = False) -> ValidationResult:
    """Validate the javadoc of every documented extension method.

    Checks:
    1. Methods should have a javadoc comment (warning, error in strict mode)
    2. Methods returning a value should have @return (warning)
    3. @param tags should cover every parameter, receiver included (warning)

    Args:
        doc_source: The documentation tree
        strict: If True, missing comments are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    for doc_method in doc_source:
        method = doc_method.method
        label = _label(doc_method)

        if not method.comment:
            location = f"{method.source_file}:{method.line_number}"
            msg = f"{label}: missing javadoc comment ({location})"
            if strict:
                result.errors.append(msg)
            else:
                result.warnings.append(msg)
            continue

        if method.return_type is not None and method.tag_by_name("return") is None:
            result.warnings.append(f"{label}: documented but missing @return")

        param_tags = method.tags_by_name("param")
        if param_tags and len(param_tags) != len(method.parameters):
            result.warnings.append(
                f"{label}: {len(param_tags)} @param tags for "
                f"{len(method.parameters)} parameters"
            )

    return result


def compute_coverage(doc_source: DocSource) -> float:
    """Fraction of documented methods that carry a javadoc comment (0.0 - 1.0)."""
    methods = list(doc_source)
    if not methods:
        return 1.0
    return sum(1 for m in methods if m.method.comment) / len(methods)
