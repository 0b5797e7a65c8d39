"""
Consul KV client.

A thin asynchronous wrapper over Consul's HTTP KV endpoint:

    GET {scheme}://{host}:{port}/v1/kv/<key>[?dc=<dc>]

Consul answers 404 for a missing key and a one-element JSON list otherwise,
with the payload base64-encoded in "Value". get() decodes it so entries
carry plain text.
"""

from __future__ import annotations

import base64 as _base64
import binascii as _binascii
import logging as _logging
import typing as _typing
import urllib.parse as _urllib_parse

import httpx as _httpx
import pydantic as _pydantic

import consul_parser.config.types as config_types
import consul_parser.constants as constants
import consul_parser.errors as errors
import consul_parser.store.base as base

_logger = _logging.getLogger(__name__)


class ConsulClientOptions(config_types.ConfigBase):
    """Connection options understood by ConsulClient; others are kept as extras."""

    host: str = constants.DEFAULT_CONSUL_HOST
    port: int = _pydantic.Field(default=constants.DEFAULT_CONSUL_PORT, ge=1, le=65535)
    scheme: _typing.Literal["http", "https"] = constants.DEFAULT_CONSUL_SCHEME
    token: str | None = None
    """ACL token, sent as X-Consul-Token."""
    dc: str | None = None
    """Datacenter to query; the agent's own when unset."""
    verify: bool = True
    timeout: float | None = constants.DEFAULT_CONSUL_TIMEOUT

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


class ConsulClient:
    """
    Asynchronous Consul KV reader.

    The options dict passed in is consumed: options the client handles are
    removed from it. Pass a copy if the dict must survive.
    """

    def __init__(
        self,
        config: dict[str, _typing.Any] | None = None,
        *,
        transport: _httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Options as in ConsulClientOptions. ``promisify`` is
                accepted and ignored, since this client is always async.
            transport: Optional httpx transport (for testing).
        """
        config = {} if config is None else config
        config.pop("promisify", None)

        try:
            self._options = ConsulClientOptions.model_validate(config)
        except _pydantic.ValidationError as e:
            raise errors.ConfigValidationError(
                f"Consul options do not have right format!\n"
                f"{errors.format_validation_errors(e)}",
                errors=e.errors(),
            ) from e

        for name in ConsulClientOptions.model_fields:
            config.pop(name, None)
        if self._options.has_extra_fields():
            _logger.debug(
                "Ignoring unknown Consul options: %s",
                sorted(self._options.get_extra_fields()),
            )

        headers: dict[str, str] = {"User-Agent": "consul-parser/1.0"}
        if self._options.token:
            headers[constants.CONSUL_TOKEN_HEADER] = self._options.token

        self._client = _httpx.AsyncClient(
            base_url=self._options.base_url,
            headers=headers,
            timeout=self._options.timeout,
            verify=self._options.verify,
            transport=transport,
        )

    @property
    def options(self) -> ConsulClientOptions:
        return self._options

    @property
    def base_url(self) -> str:
        """Base URL of the Consul agent."""
        return self._options.base_url

    async def get(self, key: str) -> dict[str, _typing.Any] | None:
        """
        Fetch one key from the KV store.

        Returns:
            The entry with "Value" decoded to text (None for keys that exist
            without a payload), or None when the key does not exist.

        Raises:
            StoreError: If the request fails or the response is unexpected.
        """
        path = constants.CONSUL_KV_ENDPOINT + _urllib_parse.quote(key, safe="/")
        params = {"dc": self._options.dc} if self._options.dc else None

        try:
            response = await self._client.get(path, params=params)
        except _httpx.HTTPError as e:
            raise errors.StoreError(key, str(e)) from e

        if response.status_code == 404:
            _logger.debug("Consul key not found: %s", key)
            return None

        try:
            response.raise_for_status()
        except _httpx.HTTPStatusError as e:
            raise errors.StoreError(key, f"HTTP {response.status_code}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise errors.StoreError(key, "response is not JSON") from e
        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            raise errors.StoreError(key, "unexpected response shape")

        entry: dict[str, _typing.Any] = dict(data[0])
        entry[base.VALUE_FIELD] = _decode_value(key, entry.get(base.VALUE_FIELD))
        return entry

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


def _decode_value(key: str, encoded: str | None) -> str | None:
    if encoded is None:
        return None
    try:
        return _base64.b64decode(encoded, validate=True).decode("utf-8")
    except (_binascii.Error, UnicodeDecodeError) as e:
        raise errors.StoreError(key, f"cannot decode value: {e}") from e
