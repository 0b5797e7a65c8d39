"""
Contract for the key-value store a parser reads from.

Any object with an async ``get(key)`` satisfies it: a ConsulClient, a test
double, or an adapter over another store.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

KVEntry = _abc.Mapping[str, _typing.Any]
"""A store entry. Must carry the raw payload under "Value"."""

VALUE_FIELD = "Value"
"""Entry field holding the raw (decoded) value."""


@_typing.runtime_checkable
class KVStore(_typing.Protocol):
    """Asynchronous key-value store."""

    async def get(self, key: str) -> KVEntry | None:
        """
        Fetch one key.

        Returns:
            The entry for key, or None if the key does not exist.
        """
        ...


ClientFactory = _abc.Callable[[dict[str, _typing.Any]], KVStore]
"""Builds a store client from a (disposable) options dict."""


def raw_value(entry: KVEntry) -> _typing.Any:
    """Return the raw payload of an entry (a mapping or an object)."""
    if isinstance(entry, _abc.Mapping):
        return entry.get(VALUE_FIELD)
    return getattr(entry, VALUE_FIELD, None)
