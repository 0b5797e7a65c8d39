"""
Shared pytest fixtures for consul-parser tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import asyncio as _asyncio
import os as _os
import typing as _typing

import pytest as _pytest

import consul_parser.cache as cache
import consul_parser.constants as constants
import consul_parser.parser as parser_module

# =============================================================================
# Store Doubles
# =============================================================================


class FakeStore:
    """
    In-memory KVStore.

    ``entries`` maps effective keys to raw values. Every requested key is
    recorded in ``calls``, in request order.
    """

    def __init__(self, entries: dict[str, _typing.Any] | None = None) -> None:
        self.entries: dict[str, _typing.Any] = dict(entries or {})
        self.calls: list[str] = []

    async def get(self, key: str) -> dict[str, _typing.Any] | None:
        self.calls.append(key)
        # Yield once so concurrent fetches interleave
        await _asyncio.sleep(0)
        if key not in self.entries:
            return None
        return {"Key": key, "Value": self.entries[key]}


# =============================================================================
# Isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def isolated_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove CONSUL_PARSER_* variables so settings only see test input."""
    for key in list(_os.environ):
        if key.startswith(constants.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@_pytest.fixture(autouse=True)
def clean_default_cache() -> _typing.Iterator[None]:
    """Empty the process-wide cache around every test."""
    cache.DEFAULT_CACHE.clear()
    yield
    cache.DEFAULT_CACHE.clear()


# =============================================================================
# Parser Fixtures
# =============================================================================


@_pytest.fixture
def value_cache() -> cache.ValueCache:
    """A cache private to one test."""
    return cache.ValueCache()


@_pytest.fixture
def store() -> FakeStore:
    """An empty in-memory store; tests fill ``store.entries``."""
    return FakeStore()


@_pytest.fixture
def parser(store: FakeStore, value_cache: cache.ValueCache) -> parser_module.Parser:
    """A default-config parser wired to the in-memory store."""
    p = parser_module.Parser(cache=value_cache)
    p.client = store
    return p
