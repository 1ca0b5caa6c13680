"""Unit tests for key-value store adapters and their factory."""

from unittest.mock import AsyncMock, Mock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from edge_api.adapters.kv import (
    InMemoryKeyValueStore,
    KeyValueStoreError,
    RedisKeyValueStore,
    create_key_value_store,
)
from edge_api.core.config import RateLimitSettings
from edge_api.core.errors import ConfigurationAppError


@pytest.mark.asyncio
async def test_in_memory_round_trip() -> None:
    store = InMemoryKeyValueStore()

    await store.put("k", "v", ttl_seconds=60)

    assert await store.get("k") == "v"
    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_in_memory_expires_entries() -> None:
    clock = Mock(return_value=1000.0)
    store = InMemoryKeyValueStore(clock=clock)
    await store.put("k", "v", ttl_seconds=10)

    clock.return_value = 1009.9
    assert await store.get("k") == "v"

    clock.return_value = 1010.0
    assert await store.get("k") is None
    assert len(store) == 0


@pytest.mark.asyncio
async def test_in_memory_sweeps_expired_on_put() -> None:
    clock = Mock(return_value=1000.0)
    store = InMemoryKeyValueStore(clock=clock)
    await store.put("old", "1", ttl_seconds=5)

    clock.return_value = 1100.0
    await store.put("new", "2", ttl_seconds=5)

    assert len(store) == 1


@pytest.mark.asyncio
async def test_in_memory_rejects_zero_ttl() -> None:
    with pytest.raises(ValueError):
        await InMemoryKeyValueStore().put("k", "v", ttl_seconds=0)


@pytest.mark.asyncio
async def test_redis_store_sets_ttl() -> None:
    redis_client = AsyncMock()
    redis_client.get.return_value = "v"
    store = RedisKeyValueStore(redis_client)

    await store.put("k", "v", ttl_seconds=3600)
    value = await store.get("k")

    redis_client.set.assert_awaited_once_with("k", "v", ex=3600)
    assert value == "v"


@pytest.mark.asyncio
async def test_redis_store_decodes_bytes() -> None:
    redis_client = AsyncMock()
    redis_client.get.return_value = b"v"

    assert await RedisKeyValueStore(redis_client).get("k") == "v"


@pytest.mark.asyncio
async def test_redis_errors_are_wrapped() -> None:
    redis_client = AsyncMock()
    redis_client.get.side_effect = RedisConnectionError("down")
    redis_client.set.side_effect = RedisConnectionError("down")
    store = RedisKeyValueStore(redis_client)

    with pytest.raises(KeyValueStoreError):
        await store.get("k")
    with pytest.raises(KeyValueStoreError):
        await store.put("k", "v", ttl_seconds=1)


class TestFactory:
    def test_memory_backend(self) -> None:
        store = create_key_value_store(RateLimitSettings(backend="memory"))
        assert isinstance(store, InMemoryKeyValueStore)

    def test_redis_backend(self) -> None:
        store = create_key_value_store(
            RateLimitSettings(backend="redis", redis_url="redis://localhost:6379/0")
        )
        assert isinstance(store, RedisKeyValueStore)

    def test_redis_backend_requires_url(self) -> None:
        with pytest.raises(ConfigurationAppError):
            create_key_value_store(RateLimitSettings(backend="redis", redis_url=None))

    def test_none_backend_disables_store(self) -> None:
        assert create_key_value_store(RateLimitSettings(backend="none")) is None

    def test_unknown_backend(self) -> None:
        with pytest.raises(ConfigurationAppError):
            create_key_value_store(RateLimitSettings(backend="memcached"))
