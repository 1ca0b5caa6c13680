"""Translation of failed upstream results into domain errors."""

from __future__ import annotations

from typing import Any

from edge_api.adapters.upstream import UpstreamOutcome, UpstreamResult
from edge_api.core.errors import (
    UpstreamAppError,
    UpstreamAuthAppError,
    UpstreamUnavailableAppError,
)

SERVICE_UNAVAILABLE_MESSAGE = "Service temporarily unavailable. Please try again later."


def raise_for_upstream(
    result: UpstreamResult[Any],
    *,
    upstream: str,
    error_message: str | None = None,
    unavailable_message: str | None = None,
    http_status: int = 503,
) -> None:
    """Raise the domain error matching a failed result; no-op on success.

    Args:
        result: Classified provider outcome.
        upstream: Provider label for logs and error codes ("chat", "email"...).
        error_message: Client-facing message for non-2xx answers; defaults to
            the provider's own message.
        unavailable_message: Client-facing message for network errors and
            timeouts; defaults to the client's message.
        http_status: Status returned for non-2xx answers.

    Raises:
        UpstreamAuthAppError: Provider answered 401. The client only sees a
            generic "unavailable" message.
        UpstreamAppError: Provider answered another non-2xx status.
        UpstreamUnavailableAppError: Provider unreachable or timed out.
    """
    if result.ok:
        return

    if result.outcome is UpstreamOutcome.AUTH_ERROR:
        raise UpstreamAuthAppError(
            code=f"{upstream}_auth_failed",
            message=SERVICE_UNAVAILABLE_MESSAGE,
            details={
                "upstream": upstream,
                "upstream_status": result.status_code or 401,
                "hint": result.message or "Provider rejected the API key",
            },
        )

    if result.outcome is UpstreamOutcome.UPSTREAM_ERROR:
        raise UpstreamAppError(
            code=f"{upstream}_error",
            message=error_message or result.message or SERVICE_UNAVAILABLE_MESSAGE,
            details={
                "http_status": http_status,
                "upstream": upstream,
                "upstream_status": result.status_code or 0,
            },
        )

    code = f"{upstream}_timeout" if result.outcome is UpstreamOutcome.TIMEOUT else f"{upstream}_unreachable"
    raise UpstreamUnavailableAppError(
        code=code,
        message=unavailable_message or result.message or SERVICE_UNAVAILABLE_MESSAGE,
        details={"upstream": upstream},
    )
