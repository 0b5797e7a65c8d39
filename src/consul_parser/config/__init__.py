"""
Configuration module for consul-parser.

Uses pydantic-settings for environment variable loading.
"""

from consul_parser.config.settings import ParserSettings, load_settings
from consul_parser.config.types import ConsulOptions, ParserOptions

__all__ = ["ConsulOptions", "ParserOptions", "ParserSettings", "load_settings"]
