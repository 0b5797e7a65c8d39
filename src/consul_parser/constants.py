"""
Shared constants for consul-parser.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Environment
ENV_PREFIX = "CONSUL_PARSER_"
"""Prefix for environment variables read by ParserSettings."""

# Consul agent defaults
DEFAULT_CONSUL_HOST = "127.0.0.1"
"""Default Consul agent host."""

DEFAULT_CONSUL_PORT = 8500
"""Default Consul HTTP API port."""

DEFAULT_CONSUL_SCHEME = "http"
"""Default scheme for the Consul HTTP API."""

DEFAULT_CONSUL_TIMEOUT = 10.0
"""Default request timeout in seconds."""

CONSUL_KV_ENDPOINT = "/v1/kv/"
"""Path of the Consul KV endpoint, keys are appended to it."""

CONSUL_TOKEN_HEADER = "X-Consul-Token"
"""Header carrying the ACL token."""

# Key and path handling
KEY_SEPARATOR = "/"
"""Separator between segments of a descriptor key (and the prefix)."""

CACHE_KEY_SEPARATOR = ","
"""Separator used to join get_in() segments into a cache key.

Segments containing a comma can collide with other paths. This is kept
for compatibility with existing cache keys.
"""
