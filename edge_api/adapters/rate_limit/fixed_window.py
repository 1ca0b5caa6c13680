"""Fixed-window rate limiter over a key-value store.

Each (scope, client) pair owns one JSON record ``{"count", "window_start"}``
stored with TTL equal to the window, so stale counters disappear on their own.

Notes:
- Not atomic: the read-modify-write has no compare-and-swap, so concurrent
  requests from the same client can over- or under-count slightly. This is an
  accepted limitation for a non-critical control on an eventually-consistent
  store. A store with atomic increment-with-TTL would remove the race.
- Fails open: when the store is missing or erroring the request is allowed
  and a warning is logged.
"""

from __future__ import annotations

import hashlib
import json
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable

from edge_api.adapters.kv.base import AbstractKeyValueStore, KeyValueStoreError
from edge_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult

logger = logging.getLogger(__name__)

KEY_PREFIX = "ratelimit"


@dataclass
class RateLimitCounter:
    """Counter record persisted per (scope, client) key."""

    count: int
    window_start: float

    def dumps(self) -> str:
        return json.dumps({"count": self.count, "window_start": self.window_start})

    @classmethod
    def loads(cls, raw: str) -> RateLimitCounter:
        data = json.loads(raw)
        count = int(data["count"])
        if count < 0:
            raise ValueError("count must be >= 0")
        return cls(count=count, window_start=float(data["window_start"]))


def build_counter_key(scope: str, client_id: str) -> str:
    """Build the store key for a scope/client pair."""
    return f"{KEY_PREFIX}:{scope}:{client_id}"


def _hash_key(key: str) -> str:
    """Hash the counter key for logging without exposing client IPs."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


class KeyValueFixedWindowRateLimiter(AbstractRateLimiter):
    """Fixed-window counter keyed by scope and client identifier.

    The window starts at the first request of a client (not at a wall-clock
    boundary) and is reset by the first request arriving after it elapsed.
    """

    def __init__(
        self,
        store: AbstractKeyValueStore | None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            store: Counter store; None makes every check fail open.
            clock: Time source function returning UNIX time in seconds.
        """
        self._store = store
        self._clock = clock

    async def check_and_consume(
        self,
        scope: str,
        client_id: str,
        *,
        limit: int,
        window_seconds: int,
    ) -> RateLimitResult:
        """Consume one request from the client's budget.

        Raises:
            ValueError: If limit, window_seconds or scope are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")
        if not scope:
            raise ValueError("scope must be a non-empty string")

        key = build_counter_key(scope, client_id or "unknown")
        now = self._clock()

        if self._store is None:
            return self._fail_open(scope, limit, now, window_seconds, reason="not_configured")

        try:
            counter = await self._read(key, now)

            if now - counter.window_start >= window_seconds:
                counter = RateLimitCounter(count=1, window_start=now)
                await self._store.put(key, counter.dumps(), ttl_seconds=window_seconds)
                return self._allowed(limit, counter, window_seconds)

            if counter.count >= limit:
                return self._blocked(scope, key, limit, counter, now, window_seconds)

            counter.count += 1
            await self._store.put(key, counter.dumps(), ttl_seconds=window_seconds)
            return self._allowed(limit, counter, window_seconds)
        except KeyValueStoreError as exc:
            logger.warning(
                "rate_limit.store_error",
                extra={"scope": scope, "error_type": type(exc).__name__},
            )
            return self._fail_open(scope, limit, now, window_seconds, reason="store_error")

    async def _read(self, key: str, now: float) -> RateLimitCounter:
        raw = await self._store.get(key)
        if raw is None:
            return RateLimitCounter(count=0, window_start=now)
        try:
            return RateLimitCounter.loads(raw)
        except (ValueError, KeyError, TypeError):
            logger.warning("rate_limit.corrupt_record", extra={"key_hash": _hash_key(key)})
            return RateLimitCounter(count=0, window_start=now)

    @staticmethod
    def _allowed(limit: int, counter: RateLimitCounter, window_seconds: int) -> RateLimitResult:
        return RateLimitResult(
            allowed=True,
            limit=limit,
            remaining=max(0, limit - counter.count),
            reset_at=int(counter.window_start + window_seconds),
        )

    @staticmethod
    def _blocked(
        scope: str,
        key: str,
        limit: int,
        counter: RateLimitCounter,
        now: float,
        window_seconds: int,
    ) -> RateLimitResult:
        reset_at = counter.window_start + window_seconds
        retry_after = max(1, int(math.ceil(reset_at - now)))
        logger.warning(
            "rate_limit.exceeded",
            extra={
                "scope": scope,
                "key_hash": _hash_key(key),
                "limit": limit,
                "window_s": window_seconds,
                "retry_after_s": retry_after,
            },
        )
        return RateLimitResult(
            allowed=False,
            limit=limit,
            remaining=0,
            reset_at=int(reset_at),
            retry_after_seconds=retry_after,
        )

    @staticmethod
    def _fail_open(
        scope: str,
        limit: int,
        now: float,
        window_seconds: int,
        *,
        reason: str,
    ) -> RateLimitResult:
        logger.warning(
            "rate_limit.fail_open",
            extra={"scope": scope, "reason": reason},
        )
        return RateLimitResult(
            allowed=True,
            limit=limit,
            remaining=limit,
            reset_at=int(now + window_seconds),
        )
