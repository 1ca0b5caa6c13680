"""In-memory key-value store with TTL expiry.

Notes:
- Per-process only: running multiple workers multiplies the effective limits.
- Thread-safe: uses a lock around shared state.
- Expired entries are dropped lazily on read and swept on write.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

from edge_api.adapters.kv.base import AbstractKeyValueStore


@dataclass
class _Entry:
    value: str
    expires_at: float


class InMemoryKeyValueStore(AbstractKeyValueStore):
    """Dict-backed store honoring per-key TTLs.

    Important:
        This store is per-process only. If the API runs with multiple workers,
        each worker keeps its own counters.
    """

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        """Initialize the store.

        Args:
            clock: Time source function returning UNIX time in seconds.
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def get(self, key: str) -> str | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= now:
                del self._entries[key]
                return None
            return entry.value

    async def put(self, key: str, value: str, *, ttl_seconds: int) -> None:
        if ttl_seconds < 1:
            raise ValueError("ttl_seconds must be >= 1")

        now = self._clock()
        with self._lock:
            self._sweep(now)
            self._entries[key] = _Entry(value=value, expires_at=now + ttl_seconds)

    def _sweep(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for key in expired:
            del self._entries[key]
