"""
consul-parser - typed configuration values from Consul KV.

Fetches a declared set of keys, coerces each to its declared type, and
assembles them into a nested dict with memoized path lookups.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml
__version__: str = _metadata.version("consul-parser")

from consul_parser.cache import DEFAULT_CACHE, ValueCache  # noqa: E402
from consul_parser.config import ParserSettings  # noqa: E402
from consul_parser.errors import (  # noqa: E402
    ConfigValidationError,
    ConsulParserError,
    KeysFileError,
    KeysValidationError,
    MalformedObjectValueError,
    NotConnectedError,
    PathNotFoundError,
    RequiredKeyMissingError,
    StoreError,
    UninitializedError,
    UnsupportedTypeError,
)
from consul_parser.keys import KeyDescriptor, ValueType, load_key_descriptors  # noqa: E402
from consul_parser.parser import Parser  # noqa: E402
from consul_parser.store import ConsulClient, KVStore  # noqa: E402

__all__ = [
    "__version__",
    "ConfigValidationError",
    "ConsulClient",
    "ConsulParserError",
    "DEFAULT_CACHE",
    "KVStore",
    "KeyDescriptor",
    "KeysFileError",
    "KeysValidationError",
    "MalformedObjectValueError",
    "NotConnectedError",
    "Parser",
    "ParserSettings",
    "PathNotFoundError",
    "RequiredKeyMissingError",
    "StoreError",
    "UninitializedError",
    "UnsupportedTypeError",
    "ValueCache",
    "ValueType",
    "load_key_descriptors",
]
