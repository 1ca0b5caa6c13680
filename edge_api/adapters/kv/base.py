"""Key-value store interface.

The API should depend on this abstraction (not the concrete implementation)
so the counter store can be swapped (in-memory for a single process, Redis
when several workers share limits) without touching the limiter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStoreError(Exception):
    """Raised when the backing store cannot serve a read or write."""


class AbstractKeyValueStore(ABC):
    """Interface for string key-value stores with per-key expiry."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent or expired.

        Raises:
            KeyValueStoreError: If the store is unreachable.
        """
        raise NotImplementedError

    @abstractmethod
    async def put(self, key: str, value: str, *, ttl_seconds: int) -> None:
        """Store ``value`` under ``key``, expiring after ``ttl_seconds``.

        Raises:
            KeyValueStoreError: If the store is unreachable.
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Release connections held by the store."""
        return None
