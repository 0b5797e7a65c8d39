"""
Key-value store clients.

KVStore is the contract a parser consumes; ConsulClient implements it
over Consul's HTTP API.
"""

from consul_parser.store.base import ClientFactory, KVEntry, KVStore, raw_value
from consul_parser.store.consul import ConsulClient, ConsulClientOptions

__all__ = [
    "ClientFactory",
    "ConsulClient",
    "ConsulClientOptions",
    "KVEntry",
    "KVStore",
    "raw_value",
]
