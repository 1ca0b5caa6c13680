"""CORS header construction.

The policy is permissive but normalized: an allowed origin is echoed back,
anything else (including a missing ``Origin`` header) is rewritten to the
canonical default origin rather than rejected. Browsers on unknown origins
then fail the CORS check on their own.
"""

from __future__ import annotations

from edge_api.core.config import CorsSettings

ALLOWED_METHODS = "GET, POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def resolve_origin(origin: str | None, cors: CorsSettings) -> str:
    """Return the origin to advertise for a request.

    Args:
        origin: Value of the request ``Origin`` header, if any.
        cors: CORS configuration holding the allow-list and default origin.

    Returns:
        ``origin`` when it is on the allow-list, otherwise the default origin.
    """

    if origin and origin in cors.origins:
        return origin
    return cors.default_origin


def build_cors_headers(origin: str | None, cors: CorsSettings) -> dict[str, str]:
    """Build the CORS headers attached to every response."""

    return {
        "Access-Control-Allow-Origin": resolve_origin(origin, cors),
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Max-Age": str(cors.max_age),
        "Vary": "Origin",
    }
