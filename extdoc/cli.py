"""Documentation generator for extension methods.

Generates, under the output directory:
    index.html, overview-summary.html, overview-frame.html  - Frameset and overview
    package-list                                            - One package per line
    allclasses-frame.html, index-all.html                   - Class list and index
    {package/path}/package-frame.html                       - Types of a package
    {package/path}/{SimpleClassName}.html                   - Methods added to a type
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from .config import Config
from .errors import ExtdocError, RegistryLookupError
from .extractors import (
    collect_source_files,
    extract_methods,
    filter_methods,
    load_registry_classes,
    source_file_of,
)
from .generators import DocGenerator
from .models import build_doc_source
from .validators import compute_coverage, validate_docs

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extdoc",
        description="Generate HTML documentation for Java extension methods.",
    )
    parser.add_argument(
        "sources",
        nargs="+",
        help="Extension classes as dotted class names or paths to .java files",
    )
    parser.add_argument("-o", "--output", help="Output directory")
    parser.add_argument(
        "--source-root", help="Directory class names are resolved against"
    )
    parser.add_argument(
        "--registry",
        help=(
            "Class whose 'additionals' field lists more extension classes"
            " ('' to disable)"
        ),
    )
    parser.add_argument("--title", help="Title shown on every page")
    parser.add_argument(
        "--strict", action="store_true", help="Fail when a method has no javadoc"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    config = Config()
    if args.output:
        config.output_dir = args.output
    if args.source_root:
        config.source_root = args.source_root
    if args.registry is not None:
        config.registry_class = args.registry or None
    if args.title:
        config.title = args.title
    return config


def _additional_classes(config: Config) -> list[str]:
    if not config.registry_class:
        return []
    registry = source_file_of(config.registry_class, config.source_root)
    try:
        classes = load_registry_classes(registry, config.registry_field)
    except RegistryLookupError as e:
        # No registry available, document the given sources only
        log.error("Registry lookup failed: %s", e)
        return []
    log.debug("registry %s lists %d classes", config.registry_class, len(classes))
    return classes


def generate(config: Config, class_names: list[str], strict: bool = False) -> int:
    """Run the whole pipeline; returns the process exit code."""
    additional = _additional_classes(config)
    source_files = collect_source_files(class_names, config, additional)

    methods = extract_methods(source_files)
    extension_methods = filter_methods(methods, config)
    log.info(
        "Extracted %d methods, %d documented as extensions",
        len(methods),
        len(extension_methods),
    )

    doc_source = build_doc_source(extension_methods, config.static_extension_classes)
    log.info(
        "Packages: %d, types: %d",
        len(doc_source.packages),
        len(doc_source.all_doc_types),
    )

    validation = validate_docs(doc_source, strict=strict)
    for warning in validation.warnings:
        log.warning(warning)
    if validation.errors:
        for err in validation.errors:
            log.error(err)
        return 1
    log.info("Coverage: %.0f%%", compute_coverage(doc_source) * 100)

    DocGenerator(doc_source, Path(config.output_dir), config).generate_all()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Generate all documentation."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    start = time.monotonic()
    config = _config_from_args(args)
    try:
        status = generate(config, args.sources, strict=args.strict)
    except ExtdocError as e:
        log.error("%s", e)
        return 1

    if status == 0:
        elapsed_ms = (time.monotonic() - start) * 1000
        log.info("Done. Took %d milliseconds.", elapsed_ms)
    return status


if __name__ == "__main__":
    sys.exit(main())
