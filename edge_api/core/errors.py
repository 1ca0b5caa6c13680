"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses. Upstream clients never
raise these; services translate failed ``UpstreamResult`` values into them and
the exception handlers turn them into HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Only ``errors`` and ``retry_after`` are exposed in response bodies; the
    remaining fields are for logs.
    """

    errors: list[str]
    retry_after: int
    http_status: int
    upstream: str
    upstream_status: int
    hint: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message, safe to show to the client.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when client input is malformed."""


class RateLimitAppError(AppError):
    """Raised when a client exceeded its fixed-window budget."""


class ConfigurationAppError(AppError):
    """Raised when a required secret or setting is missing."""


class UpstreamAuthAppError(AppError):
    """Raised when a provider rejected our credentials (HTTP 401)."""


class UpstreamAppError(AppError):
    """Raised when a provider answered with a non-2xx status."""


class UpstreamUnavailableAppError(AppError):
    """Raised when a provider could not be reached or timed out."""
