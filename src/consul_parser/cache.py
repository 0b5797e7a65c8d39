"""
Memoization cache for resolved value paths.

ValueCache maps a composite path key (the get_in() segments joined with
commas) to the value that path resolved to. Entries never expire and are
not invalidated when a parser re-parses; call clear() to drop them.

DEFAULT_CACHE is shared by every Parser built without an explicit cache,
so entries written through one parser are visible to all of them.
"""

from __future__ import annotations

import threading as _threading
import typing as _typing


class _MissingType:
    """Sentinel type marking a key as absent from the cache."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING = _MissingType()


class ValueCache:
    """
    Flat key -> value store with presence-aware lookups.

    Falsy values (0, False, None, "") are legitimate entries. Use lookup()
    or ``key in cache`` to tell "cached as None" apart from "not cached".

    Thread safety: single-key reads and writes are guarded by a lock.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _typing.Any] = {}
        self._lock = _threading.Lock()

    def set(self, key: str, value: _typing.Any) -> None:
        """Store or overwrite the entry for key."""
        with self._lock:
            self._entries[key] = value

    def get(self, key: str, default: _typing.Any = None) -> _typing.Any:
        """Return the entry for key, or default if nothing is stored."""
        with self._lock:
            return self._entries.get(key, default)

    def lookup(self, key: str) -> tuple[bool, _typing.Any]:
        """
        Look up key with an explicit presence flag.

        Returns:
            (True, value) when key is cached, (False, None) otherwise.
        """
        with self._lock:
            value = self._entries.get(key, MISSING)
        if value is MISSING:
            return False, None
        return True, value

    # Aliases for callers using the set_value/get_value naming
    def set_value(self, key: str, value: _typing.Any) -> None:
        self.set(key, value)

    def get_value(self, key: str) -> _typing.Any:
        return self.get(key)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"ValueCache(entries={len(self)})"


DEFAULT_CACHE = ValueCache()
"""Process-wide cache used by parsers that are not given their own."""
