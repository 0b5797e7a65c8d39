"""
Path helpers for building and reading the parsed value tree.

Descriptor keys are slash-delimited ("db/primary/host"). Each segment but
the last names a nested dict; the last names the leaf.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import consul_parser.constants as constants
import consul_parser.errors as errors


def split_key(key: str) -> tuple[str, ...]:
    """Split a descriptor key into its path segments."""
    return tuple(key.split(constants.KEY_SEPARATOR))


def effective_key(key: str, prefix: str | None) -> str:
    """Return the key as sent to the store, with prefix applied if set."""
    if prefix:
        return f"{prefix}{constants.KEY_SEPARATOR}{key}"
    return key


def composite_key(segments: _abc.Sequence[_typing.Any]) -> str:
    """Join get_in() segments into the cache key for that path."""
    return constants.CACHE_KEY_SEPARATOR.join(str(s) for s in segments)


def ensure_parents(
    tree: dict[str, _typing.Any],
    path: tuple[str, ...],
) -> dict[str, _typing.Any]:
    """
    Create (or reuse) the dict nodes for every segment but the last.

    A non-dict value sitting where a node is needed is replaced by an
    empty dict.

    Returns:
        The dict that should hold the leaf ``path[-1]``.
    """
    current = tree
    for segment in path[:-1]:
        if segment not in current or not isinstance(current[segment], dict):
            current[segment] = {}
        current = current[segment]
    return current


def set_at_path(
    tree: dict[str, _typing.Any],
    path: tuple[str, ...],
    value: _typing.Any,
) -> None:
    """Set value at a nested path, creating intermediate dicts as needed."""
    if not path:
        return
    ensure_parents(tree, path)[path[-1]] = value


def get_at_path(
    tree: _typing.Any,
    segments: _abc.Sequence[_typing.Any],
) -> _typing.Any:
    """
    Walk the tree one segment at a time and return the value found.

    Mappings are indexed by the segment as given, falling back to its
    string form, so 1 and "1" reach the same key (they share a cache key
    too). Lists accept a decimal segment (either int or str) as an index.
    A key that holds None is found; a key that is absent is not.

    Raises:
        PathNotFoundError: If any segment does not resolve.
    """
    current = tree
    for segment in segments:
        if isinstance(current, _abc.Mapping):
            if _has_key(current, segment):
                current = current[segment]
            elif str(segment) in current:
                current = current[str(segment)]
            else:
                raise errors.PathNotFoundError(composite_key(segments))
        elif isinstance(current, list) and _is_index(segment, len(current)):
            current = current[int(segment)]
        else:
            raise errors.PathNotFoundError(composite_key(segments))
    return current


def _is_index(segment: _typing.Any, length: int) -> bool:
    """Check if segment is a valid non-negative index into a list."""
    if isinstance(segment, bool):
        return False
    if isinstance(segment, int):
        return 0 <= segment < length
    if isinstance(segment, str) and segment.isdecimal():
        # "01" is not an index, only the canonical form is
        return str(int(segment)) == segment and int(segment) < length
    return False


def _has_key(mapping: _abc.Mapping[_typing.Any, _typing.Any], segment: _typing.Any) -> bool:
    try:
        return segment in mapping
    except TypeError:
        # Unhashable segments can only match by their string form
        return False
