"""Rate limiting wiring for the HTTP layer.

This module connects the limiter adapter to requests:

- ``get_client_ip`` derives the client identifier from edge proxy headers.
- ``enforce_rate_limit`` consumes one unit for a scope and raises
  ``RateLimitAppError`` (HTTP 429) once the budget is spent.

Two scopes exist with independent budgets: ``contact`` and ``subscribe``.
Both fail open when the counter store is unavailable.
"""

from __future__ import annotations

from fastapi import Request

from edge_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from edge_api.core.config import RateLimitSettings
from edge_api.core.errors import RateLimitAppError

CONTACT_SCOPE = "contact"
SUBSCRIBE_SCOPE = "subscribe"

_EXCEEDED_MESSAGES = {
    CONTACT_SCOPE: "Too many submissions. Please try again later.",
    SUBSCRIBE_SCOPE: "Too many requests. Please try again later.",
}


def get_client_ip(request: Request) -> str:
    """Return the best available client IP for rate limiting.

    Preference order: ``CF-Connecting-IP``, first hop of ``X-Forwarded-For``,
    the socket peer address, then ``"unknown"``.
    """

    connecting_ip = request.headers.get("cf-connecting-ip", "").strip()
    if connecting_ip:
        return connecting_ip

    forwarded_for = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def scope_limit(scope: str, config: RateLimitSettings) -> int:
    """Return the configured per-window limit for a scope."""

    limits = {
        CONTACT_SCOPE: config.contact_limit,
        SUBSCRIBE_SCOPE: config.subscribe_limit,
    }
    return limits[scope]


async def enforce_rate_limit(
    limiter: AbstractRateLimiter,
    *,
    scope: str,
    client_id: str,
    config: RateLimitSettings,
) -> RateLimitResult:
    """Consume one unit of the client's budget for ``scope``.

    Args:
        limiter: Limiter instance owned by the application.
        scope: Endpoint class (``contact`` or ``subscribe``).
        client_id: Client identifier (see ``get_client_ip``).
        config: Rate limiting settings (limits, window, header policy).

    Returns:
        RateLimitResult for an allowed request, so callers can report the
        remaining budget.

    Raises:
        RateLimitAppError: 429 when the budget for the window is exhausted.
    """

    result = await limiter.check_and_consume(
        scope,
        client_id,
        limit=scope_limit(scope, config),
        window_seconds=config.window_seconds,
    )
    if result.allowed:
        return result

    retry_after = result.retry_after_seconds or 1
    context: dict[str, object] = {"scope": scope}
    if config.include_headers:
        context["headers"] = {
            "X-RateLimit-Limit": str(result.limit),
            "X-RateLimit-Remaining": str(result.remaining),
            "X-RateLimit-Reset": str(result.reset_at),
        }

    raise RateLimitAppError(
        code="rate_limited",
        message=_EXCEEDED_MESSAGES.get(scope, "Too many requests. Please try again later."),
        details={"retry_after": retry_after, "context": context},
    )
