"""
Parser settings using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with CONSUL_PARSER_ prefix

Nested config uses double underscore delimiter:
  CONSUL_PARSER_PARSER__PREFIX=my-service
  CONSUL_PARSER_CONSUL='{"host": "consul.internal", "port": 8501}'
"""

import collections.abc as _abc
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import consul_parser.config.types as types
import consul_parser.constants as constants
import consul_parser.errors as errors


class ParserSettings(_pydantic_settings.BaseSettings):
    """
    Complete parser configuration.

    Unknown top-level sections are rejected. Omitted sections get their
    defaults: ``parser: {}`` and ``consul: {promisify: True}``.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        env_nested_delimiter="__",  # CONSUL_PARSER_PARSER__PREFIX
        extra="forbid",
    )

    parser: types.ParserOptions = _pydantic.Field(default_factory=types.ParserOptions)
    consul: types.ConsulOptions = _pydantic.Field(default_factory=types.ConsulOptions)

    @property
    def prefix(self) -> str | None:
        """Configured key prefix, or None when no prefix applies."""
        return self.parser.prefix or None


def load_settings(
    config: ParserSettings | _abc.Mapping[str, _typing.Any] | None = None,
) -> ParserSettings:
    """
    Build validated settings from a config mapping.

    Args:
        config: A mapping shaped like ``{"parser": {...}, "consul": {...}}``,
            an existing ParserSettings (returned as-is), or None for defaults.

    Raises:
        ConfigValidationError: If config does not have the right shape.
    """
    if isinstance(config, ParserSettings):
        return config
    if config is None:
        config = {}
    if not isinstance(config, _abc.Mapping):
        raise errors.ConfigValidationError(
            f"Config does not have right format! Expected a mapping, "
            f"got {type(config).__name__}"
        )

    try:
        return ParserSettings(**config)
    except _pydantic.ValidationError as e:
        raise errors.ConfigValidationError(
            f"Config does not have right format!\n{errors.format_validation_errors(e)}",
            errors=e.errors(),
        ) from e
    except TypeError as e:
        # Non-string keys cannot be passed as keyword arguments
        raise errors.ConfigValidationError(
            f"Config does not have right format! {e}"
        ) from e
