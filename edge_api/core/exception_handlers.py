"""Global exception handlers for consistent error responses.

Every failure leaves the API in the same envelope: ``{"error": "<message>"}``
plus ``details`` (validation errors) or ``retryAfter`` (rate limiting) when
relevant.

Design:
- AppError subclasses → status from ``status_for_error`` (400/429/500/503)
- Malformed JSON / FastAPI request validation → 400 "Invalid request format"
- 404/405 from routing → 404 "Endpoint not found"
- Unexpected Exception → generic 500 (safety net, CORS headers added here
  because this handler runs outside the middleware stack)
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from edge_api.core.cors import build_cors_headers
from edge_api.core.errors import (
    AppError,
    ConfigurationAppError,
    RateLimitAppError,
    UpstreamAppError,
    UpstreamAuthAppError,
    UpstreamUnavailableAppError,
    ValidationAppError,
)
from edge_api.core.logging import get_request_id

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "Invalid request format"
NOT_FOUND_MESSAGE = "Endpoint not found"
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again later."


def status_for_error(exc: AppError) -> int:
    """Map a domain error to its HTTP status code.

    - ValidationAppError → 400
    - RateLimitAppError → 429
    - ConfigurationAppError → 500
    - UpstreamAuthAppError → 503 (credential problems are server-side)
    - UpstreamAppError → ``details.http_status`` or 503
    - UpstreamUnavailableAppError → 503
    """
    if isinstance(exc, ValidationAppError):
        return 400
    if isinstance(exc, RateLimitAppError):
        return 429
    if isinstance(exc, ConfigurationAppError):
        return 500
    if isinstance(exc, (UpstreamAuthAppError, UpstreamUnavailableAppError)):
        return 503
    if isinstance(exc, UpstreamAppError):
        return (exc.details or {}).get("http_status", 503)
    return 500


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with the uniform JSON envelope.

    Validation problems are expected client mistakes and logged at info level;
    configuration and upstream problems are logged as errors with the
    server-side cause from ``details``.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with appropriate status code and error body.
    """
    status_code = status_for_error(exc)
    details = exc.details or {}

    log_extra = {
        "error_code": exc.code,
        "status_code": status_code,
        "request_path": request.url.path,
        "request_id": get_request_id(),
    }
    if isinstance(exc, ValidationAppError):
        logger.info("app_error_handled", extra=log_extra)
    elif isinstance(exc, (RateLimitAppError, UpstreamUnavailableAppError)):
        logger.warning("app_error_handled", extra=log_extra)
    else:
        logger.error(
            "app_error_handled",
            extra={
                **log_extra,
                "hint": details.get("hint"),
                "upstream": details.get("upstream"),
                "upstream_status": details.get("upstream_status"),
            },
        )

    content: dict[str, object] = {"error": exc.message}
    headers: dict[str, str] = {}

    if details.get("errors"):
        content["details"] = list(details["errors"])

    if isinstance(exc, RateLimitAppError):
        retry_after = int(details.get("retry_after", 1))
        content["retryAfter"] = retry_after
        headers["Retry-After"] = str(retry_after)
        headers.update(details.get("context", {}).get("headers", {}))

    return JSONResponse(status_code=status_code, content=content, headers=headers or None)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Turn malformed bodies and bad parameters into a generic 400."""
    logger.info(
        "request_validation_failed",
        extra={
            "request_path": request.url.path,
            "error_count": len(exc.errors()),
            "request_id": get_request_id(),
        },
    )
    return JSONResponse(status_code=400, content={"error": INVALID_FORMAT_MESSAGE})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize routing errors; unmatched path or method is a 404."""
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": NOT_FOUND_MESSAGE})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs detailed information for debugging while returning a generic
    message. Prevents information leakage (no stack traces to client).
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    headers = None
    settings = getattr(request.app.state, "settings", None)
    if settings is not None:
        headers = build_cors_headers(request.headers.get("origin"), settings.cors)

    return JSONResponse(
        status_code=500,
        content={"error": UNEXPECTED_MESSAGE},
        headers=headers,
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(Exception)(general_exception_handler)
