"""Key-value store adapters backing the rate limiter.

The limiter only needs ``get`` and ``put`` with a TTL, the lowest common
denominator of edge KV stores, so any eventually-consistent store fits.
"""

from edge_api.adapters.kv.base import AbstractKeyValueStore, KeyValueStoreError
from edge_api.adapters.kv.factory import create_key_value_store
from edge_api.adapters.kv.in_memory import InMemoryKeyValueStore
from edge_api.adapters.kv.redis_store import RedisKeyValueStore

__all__ = [
    "AbstractKeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueStoreError",
    "RedisKeyValueStore",
    "create_key_value_store",
]
