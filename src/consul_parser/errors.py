"""
Error types raised by consul-parser.

Every error derives from ConsulParserError, and additionally from the
builtin exception that best describes it, so callers can catch either.
"""

from __future__ import annotations

import typing as _typing

import pydantic as _pydantic


class ConsulParserError(Exception):
    """Base class for all consul-parser errors."""


class ConfigValidationError(ConsulParserError, ValueError):
    """Parser configuration does not have the right format."""

    def __init__(
        self,
        message: str,
        errors: list[dict[str, _typing.Any]] | None = None,
    ) -> None:
        self.errors = errors or []
        super().__init__(message)


class KeysValidationError(ConsulParserError, ValueError):
    """Key descriptor list is missing, empty, or has malformed items."""

    def __init__(
        self,
        message: str,
        errors: list[dict[str, _typing.Any]] | None = None,
    ) -> None:
        self.errors = errors or []
        super().__init__(message)

    @property
    def invalid_indexes(self) -> list[int]:
        """Indexes of the descriptors that failed validation, in order."""
        indexes: list[int] = []
        for error in self.errors:
            loc = error.get("loc") or ()
            if loc and isinstance(loc[0], int) and loc[0] not in indexes:
                indexes.append(loc[0])
        return indexes


class KeysFileError(KeysValidationError):
    """Error loading key descriptors from a YAML file."""

    def __init__(self, path: _typing.Any, message: str) -> None:
        self.path = path
        super().__init__(f"Error in keys file {path}: {message}")


class RequiredKeyMissingError(ConsulParserError, LookupError):
    """A key marked as required was not found in the store."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key {key} is required but not found")


class UnsupportedTypeError(ConsulParserError, TypeError):
    """A descriptor asked for a value type that cannot be coerced."""

    def __init__(self, value_type: str, key: str) -> None:
        self.value_type = value_type
        self.key = key
        super().__init__(f"Type {value_type} for {key} is not supported")


class MalformedObjectValueError(ConsulParserError, ValueError):
    """An object-typed value is not a valid JSON document."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Value of {key} is not a valid JSON document: {reason}")


class NotConnectedError(ConsulParserError, RuntimeError):
    """parse() was called before connect() or client injection."""


class StoreError(ConsulParserError, RuntimeError):
    """The key-value store returned an unexpected response."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"Failed to fetch {key}: {message}")


class UninitializedError(ConsulParserError, RuntimeError):
    """get_in() was called before any successful parse()."""

    def __init__(self) -> None:
        super().__init__("Values are not initialized")


class PathNotFoundError(ConsulParserError, LookupError):
    """A get_in() path does not resolve in the parsed values."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Incorrect path: {path}")


def format_validation_errors(exc: _pydantic.ValidationError) -> str:
    """Render pydantic errors one per line as ``[loc] message``."""
    lines = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        lines.append(f"  [{loc}] {error['msg']}")
    return "\n".join(lines)
