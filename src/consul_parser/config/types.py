"""Configuration section models for consul-parser.

This module defines the Pydantic models for the two sections a parser
configuration may hold:

- ParserOptions: parser.* (key prefix)
- ConsulOptions: consul.* (opaque store-client options)

Design decision: ParserOptions rejects unknown fields, since a typo there
silently changes which keys are fetched. ConsulOptions allows them, since
they are passed through to the store client untouched.
"""

import typing as _typing

import pydantic as _pydantic

# =============================================================================
# Base class with introspection
# =============================================================================


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for config sections.

    Provides introspection of fields that were given but are not part of
    the schema (only possible on sections that allow extra fields).
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """
        Return fields that were provided but not in the schema.

        Returns:
            Dict of field_name → value for all unrecognized fields.
        """
        return dict(self.model_extra) if self.model_extra else {}

    def has_extra_fields(self) -> bool:
        """Check if this config has any unrecognized fields."""
        return bool(self.model_extra)


# =============================================================================
# Parser Settings
# =============================================================================


class ParserOptions(ConfigBase):
    """
    Key lookup settings.

    Config section: parser.*
    """

    model_config = _pydantic.ConfigDict(extra="forbid")

    prefix: str | None = None
    """Prepended as "<prefix>/" to every key before lookup. Empty means none."""


# =============================================================================
# Store Client Settings
# =============================================================================


class ConsulOptions(ConfigBase):
    """
    Options handed to the store client on connect().

    Config section: consul.*

    Only ``promisify`` is interpreted here. Everything else (host, port,
    scheme, token, dc, verify, timeout, ...) is carried as an extra field
    and read by the client.
    """

    promisify: _typing.Any = True
    """Any value is accepted and replaced by True; the client is always async."""

    @_pydantic.field_validator("promisify")
    @classmethod
    def _always_async(cls, v: _typing.Any) -> bool:
        return True

    def client_options(self) -> dict[str, _typing.Any]:
        """Return every option, declared and extra, as a plain dict."""
        return self.model_dump()
