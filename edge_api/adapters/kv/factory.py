"""Factory for the rate limiter's counter store."""

from __future__ import annotations

import logging

from edge_api.adapters.kv.base import AbstractKeyValueStore
from edge_api.adapters.kv.in_memory import InMemoryKeyValueStore
from edge_api.adapters.kv.redis_store import RedisKeyValueStore
from edge_api.core.config import RateLimitSettings
from edge_api.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)


def create_key_value_store(config: RateLimitSettings) -> AbstractKeyValueStore | None:
    """Instantiate the store selected by ``RATE_LIMIT_BACKEND``.

    Args:
        config: Rate limiting settings.

    Returns:
        The configured store, or None for backend ``none``. A missing store
        makes the limiter fail open.

    Raises:
        ConfigurationAppError: If the backend is unknown or incomplete.
    """
    backend = config.backend.lower()

    if backend == "memory":
        return InMemoryKeyValueStore()

    if backend == "redis":
        if not config.redis_url:
            raise ConfigurationAppError(
                code="rate_limit_missing_redis_url",
                message="Redis backend requires RATE_LIMIT_REDIS_URL",
            )
        return RedisKeyValueStore.from_url(config.redis_url)

    if backend == "none":
        logger.warning("rate_limit.store_not_configured", extra={"backend": backend})
        return None

    raise ConfigurationAppError(
        code="rate_limit_unknown_backend",
        message=(
            f"Unknown rate limit backend: '{backend}'. "
            "Supported backends: memory, redis, none"
        ),
    )
