"""
Tests that enforce coding standards.

These tests verify that the codebase follows our import and logging
conventions:

- no ``from X import Y`` outside ``__init__.py`` re-exports
- external modules are aliased with a leading underscore (``import os as _os``)
- modules that log use a module-level ``_logger = _logging.getLogger(__name__)``
"""

import pathlib as _pathlib
import re as _re

import pytest as _pytest

SRC_DIR = _pathlib.Path(__file__).parent.parent / "src" / "consul_parser"
TESTS_DIR = _pathlib.Path(__file__).parent.parent / "tests"

_PLAIN_IMPORT = _re.compile(r"^import (?P<module>[\w.]+)(?: as (?P<alias>\w+))?\s*$")


def _get_python_files(directory: _pathlib.Path) -> list[_pathlib.Path]:
    """Get all Python files in a directory, recursively."""
    return sorted(directory.rglob("*.py"))


def _extract_from_imports(content: str) -> list[tuple[int, str]]:
    """
    Extract 'from X import Y' statements from file content.

    Returns list of (line_number, line_content) tuples.
    Excludes 'from __future__ import' and lines inside TYPE_CHECKING blocks.
    """
    imports: list[tuple[int, str]] = []
    in_type_checking = False

    for i, line in enumerate(content.split("\n"), start=1):
        stripped = line.strip()

        if "if _typing.TYPE_CHECKING:" in line:
            in_type_checking = True
            continue
        if in_type_checking and stripped and not line.startswith((" ", "\t", "#")):
            in_type_checking = False
        if in_type_checking:
            continue

        if stripped.startswith("from ") and " import " in stripped:
            if "from __future__ import" in stripped:
                continue
            imports.append((i, stripped))

    return imports


def _unaliased_external_imports(content: str) -> list[tuple[int, str]]:
    """Return top-level imports of external modules lacking a _ alias."""
    violations: list[tuple[int, str]] = []
    for i, line in enumerate(content.split("\n"), start=1):
        match = _PLAIN_IMPORT.match(line)
        if not match or match.group("module").startswith("consul_parser"):
            continue
        alias = match.group("alias")
        if alias is None or not alias.startswith("_"):
            violations.append((i, line.strip()))
    return violations


class TestImportStyle:
    """Tests for import style compliance."""

    @_pytest.mark.parametrize("directory", [SRC_DIR, TESTS_DIR], ids=["src", "tests"])
    def test_no_from_imports(self, directory: _pathlib.Path) -> None:
        """Files should not use 'from X import Y' (except __init__ re-exports)."""
        violations = [
            f"{path}:{line_num}: {line}"
            for path in _get_python_files(directory)
            if path.name not in ("__init__.py", "test_coding_standards.py")
            for line_num, line in _extract_from_imports(path.read_text())
        ]
        if violations:
            _pytest.fail(
                "Found forbidden 'from X import Y' imports:\n"
                + "\n".join(f"  {v}" for v in violations)
                + "\n\nUse 'import X as _x' (external) or 'import X as x' (internal) instead."
            )

    def test_external_imports_are_private(self) -> None:
        """Source modules alias external imports with a leading underscore."""
        violations = [
            f"{path}:{line_num}: {line}"
            for path in _get_python_files(SRC_DIR)
            for line_num, line in _unaliased_external_imports(path.read_text())
        ]
        if violations:
            _pytest.fail("Unaliased external imports:\n" + "\n".join(f"  {v}" for v in violations))


class TestLoggingStyle:
    """Modules that log do so through a module-level logger."""

    def test_module_logger_convention(self) -> None:
        violations = []
        for path in _get_python_files(SRC_DIR):
            content = path.read_text()
            if "_logger." not in content:
                continue
            if "_logger = _logging.getLogger(__name__)" not in content:
                violations.append(str(path))
        assert violations == []

    def test_no_print_calls(self) -> None:
        """The library reports through logging, never print()."""
        offenders = [
            str(path)
            for path in _get_python_files(SRC_DIR)
            if _re.search(r"^\s*print\(", path.read_text(), _re.MULTILINE)
        ]
        assert offenders == []


class TestImportExtraction:
    """Tests for the import extraction logic itself."""

    def test_detects_from_import(self) -> None:
        imports = _extract_from_imports("from pathlib import Path")
        assert imports == [(1, "from pathlib import Path")]

    def test_allows_future_imports(self) -> None:
        assert _extract_from_imports("from __future__ import annotations") == []

    def test_ignores_type_checking_block(self) -> None:
        content = """
import typing as _typing

if _typing.TYPE_CHECKING:
    from some_module import SomeType

def foo():
    pass
"""
        assert _extract_from_imports(content) == []

    def test_flags_unaliased_external(self) -> None:
        content = "import os\nimport json as _json\nimport consul_parser.paths as paths\n"
        assert _unaliased_external_imports(content) == [(1, "import os")]
