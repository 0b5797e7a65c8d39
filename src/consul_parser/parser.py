"""
Parser: fetch keys from the store, coerce them, and assemble a tree.

Typical use:

    parser = Parser({"parser": {"prefix": "my-service"}})
    parser.connect()
    await parser.parse([
        {"key": "db/host", "require": True},
        {"key": "db/port", "type": Parser.types.NUMBER},
    ])
    parser.get_in("db", "port")  # 5432

All keys of one parse() are fetched concurrently. The resulting tree only
replaces the previous one if every fetch and coercion succeeded.
"""

from __future__ import annotations

import asyncio as _asyncio
import collections.abc as _abc
import copy as _copy
import logging as _logging
import types as _types
import typing as _typing

import consul_parser.cache as value_cache
import consul_parser.coercion as coercion
import consul_parser.config.settings as settings
import consul_parser.errors as errors
import consul_parser.keys as descriptors
import consul_parser.paths as paths
import consul_parser.store.base as store_base
import consul_parser.store.consul as consul

_logger = _logging.getLogger(__name__)

KeyList = _abc.Sequence[descriptors.KeyDescriptor | _abc.Mapping[str, _typing.Any]]


class _Fetched(_typing.NamedTuple):
    descriptor: descriptors.KeyDescriptor
    found: bool
    value: _typing.Any


class Parser:
    """
    Reads typed configuration values from a key-value store.

    Args:
        config: ``{"parser": {"prefix": ...}, "consul": {...}}`` or a
            ParserSettings. Omitted sections get defaults.
        cache: Cache for get_in() lookups. Defaults to the process-wide
            DEFAULT_CACHE, shared with every other parser that uses it.
        client_factory: Builds the store client on connect(). Defaults to
            ConsulClient.

    Raises:
        ConfigValidationError: If config does not have the right format.
    """

    types = descriptors.ValueType
    """Value types a descriptor may ask for."""

    def __init__(
        self,
        config: settings.ParserSettings | _abc.Mapping[str, _typing.Any] | None = None,
        *,
        cache: value_cache.ValueCache | None = None,
        client_factory: store_base.ClientFactory | None = None,
    ) -> None:
        self.config = settings.load_settings(config)
        self._cache = cache if cache is not None else value_cache.DEFAULT_CACHE
        self._client_factory = client_factory or consul.ConsulClient
        self.client: store_base.KVStore | None = None
        self._replaced_clients: list[store_base.KVStore] = []
        self._values: dict[str, _typing.Any] | None = None

    @property
    def cache(self) -> value_cache.ValueCache:
        return self._cache

    @property
    def values(self) -> dict[str, _typing.Any] | None:
        """Tree from the last successful parse(), or None before that."""
        return self._values

    def connect(self) -> store_base.KVStore:
        """
        Build the store client from the configured consul options.

        The client receives a deep copy, since it may modify the dict it
        is given. The stored config is never changed by connecting. A client
        from an earlier connect() is kept until close() shuts it down.
        """
        if self.client is not None:
            self._replaced_clients.append(self.client)
        options = _copy.deepcopy(self.config.consul.client_options())
        self.client = self._client_factory(options)
        _logger.debug("Connected store client %s", type(self.client).__name__)
        return self.client

    async def close(self) -> None:
        """Close every store client this parser connected, if it can be closed."""
        clients = [*self._replaced_clients, self.client]
        self._replaced_clients = []
        self.client = None
        for client in clients:
            aclose = getattr(client, "aclose", None)
            if aclose is not None:
                await aclose()

    async def __aenter__(self) -> Parser:
        if self.client is None:
            self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: _types.TracebackType | None,
    ) -> None:
        await self.close()

    async def parse(self, keys: KeyList | None) -> dict[str, _typing.Any]:
        """
        Fetch, coerce and assemble every key into a nested dict.

        Args:
            keys: Key descriptors (dicts or KeyDescriptor objects).

        Returns:
            The new tree, which also becomes ``self.values``.

        Raises:
            KeysValidationError: keys is missing, empty or malformed. Raised
                before the store is contacted.
            NotConnectedError: No client was connected or injected.
            RequiredKeyMissingError: A required key has no value.
            MalformedObjectValueError: An object value is not valid JSON.
            UnsupportedTypeError: A descriptor type cannot be coerced.
        """
        validated = descriptors.validate_keys(keys)
        if self.client is None:
            raise errors.NotConnectedError("Parser is not connected, call connect() first")

        prefix = self.config.prefix
        tasks = [
            _asyncio.ensure_future(self._fetch(self.client, descriptor, prefix))
            for descriptor in validated
        ]
        try:
            results = await _asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            # Let cancelled fetches settle before surfacing the error
            await _asyncio.gather(*tasks, return_exceptions=True)
            raise

        values: dict[str, _typing.Any] = {}
        for fetched in results:
            segments = fetched.descriptor.segments
            if fetched.found:
                paths.set_at_path(values, segments, fetched.value)
            else:
                paths.ensure_parents(values, segments)

        self._values = values
        _logger.info("Parsed %d keys", len(validated))
        return values

    async def _fetch(
        self,
        client: store_base.KVStore,
        descriptor: descriptors.KeyDescriptor,
        prefix: str | None,
    ) -> _Fetched:
        lookup_key = paths.effective_key(descriptor.key, prefix)
        _logger.debug("Fetching key %s", lookup_key)
        entry = await client.get(lookup_key)

        if not entry:
            if descriptor.require:
                raise errors.RequiredKeyMissingError(lookup_key)
            _logger.warning("Key %s not found, leaving it out", lookup_key)
            return _Fetched(descriptor, False, None)

        value = coercion.coerce_value(
            store_base.raw_value(entry), descriptor.type, lookup_key
        )
        return _Fetched(descriptor, True, value)

    def get_in(self, *path: _typing.Any) -> _typing.Any:
        """
        Return the value at a path into the parsed tree.

        Results are memoized in the cache under the comma-joined path and
        are not invalidated by later parse() calls; clear the cache to
        drop them.

        Raises:
            UninitializedError: No parse() has succeeded yet.
            PathNotFoundError: The path does not resolve.
        """
        if self._values is None:
            raise errors.UninitializedError()

        cache_key = paths.composite_key(path)
        found, cached = self._cache.lookup(cache_key)
        if found:
            _logger.debug("Cache hit for %s", cache_key)
            return cached

        value = paths.get_at_path(self._values, path)
        self._cache.set(cache_key, value)
        return value
