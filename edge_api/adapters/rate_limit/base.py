"""Rate limiter interfaces.

The API should depend on this abstraction (not the concrete implementation)
so the counting strategy can change without touching services or routes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a check-and-consume operation.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the current window resets.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None = None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    async def check_and_consume(
        self,
        scope: str,
        client_id: str,
        *,
        limit: int,
        window_seconds: int,
    ) -> RateLimitResult:
        """Consume one unit of budget for ``client_id`` within ``scope``.

        Args:
            scope: Endpoint class with an independent budget (e.g. "contact").
            client_id: Client identifier, usually the caller IP.
            limit: Max requests allowed per window.
            window_seconds: Window length in seconds.

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError
