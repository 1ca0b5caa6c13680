"""Redis-backed key-value store.

Uses ``SET key value EX ttl`` so Redis expires counters on its own. Every
redis error is wrapped in ``KeyValueStoreError`` so the limiter can fail open
without knowing about the driver.

Keys are opaque (``ratelimit:<scope>:<client>``); they are logged only as a
hash by the limiter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from edge_api.adapters.kv.base import AbstractKeyValueStore, KeyValueStoreError

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RedisKeyValueStore(AbstractKeyValueStore):
    """Store backed by an async Redis client.

    Args:
        client: ``redis.asyncio.Redis`` instance created with
            ``decode_responses=True``.
    """

    def __init__(self, client: Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> RedisKeyValueStore:
        """Build a store from a ``redis://`` URL."""
        from redis.asyncio import Redis

        return cls(Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(key)
        except RedisError as exc:
            raise KeyValueStoreError("Failed to read from Redis") from exc
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def put(self, key: str, value: str, *, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except RedisError as exc:
            raise KeyValueStoreError("Failed to write to Redis") from exc

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except RedisError as exc:
            logger.warning(
                "kv.close_failed",
                extra={"error_type": type(exc).__name__},
            )
