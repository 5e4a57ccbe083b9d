"""Pytest fixtures for extdoc tests."""

import textwrap
from pathlib import Path

import pytest

from extdoc.config import Config


@pytest.fixture
def config(tmp_path):
    """Default configuration writing into a temporary directory."""
    return Config(
        source_root=str(tmp_path / "src" / "main"),
        output_dir=str(tmp_path / "html"),
        registry_class=None,
    )


@pytest.fixture
def write_java(tmp_path):
    """
    Write a Java source below the temporary source root.

    Example:
        path = write_java("org.example.StringExtensions", '''
            package org.example;
            public class StringExtensions { ... }
        ''')
    """

    def _write(class_name: str, source: str) -> Path:
        path = tmp_path / "src" / "main" / (class_name.replace(".", "/") + ".java")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return path

    return _write
