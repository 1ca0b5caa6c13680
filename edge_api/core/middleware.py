"""HTTP middleware for request correlation and CORS.

Two middlewares are registered by the app factory:

- ``request_id_middleware`` accepts an incoming ``X-Request-ID`` header or
  generates a UUID, stores it in contextvars for log correlation and echoes it
  (plus the request duration) on the response.
- ``cors_middleware`` answers every ``OPTIONS`` request with ``204`` and
  attaches CORS headers to every other response, including error envelopes.

Usage:
    app.middleware("http")(cors_middleware)
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from edge_api.core.cors import build_cors_headers
from edge_api.core.logging import clear_request_id, set_request_id


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate or generate the request correlation id.

    The header name comes from ``LogSettings.request_id_header``. The id is
    cleared from context once the response is produced so it cannot leak into
    the next request handled by the same task.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response with ``X-Request-ID`` and
            ``X-Request-Duration-ms`` headers added.
    """

    header_name = request.app.state.settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def cors_middleware(request: Request, call_next) -> Response:
    """Short-circuit preflight requests and decorate responses with CORS headers.

    Preflight is answered for any path, matched or not, so browsers never see
    a 404 on ``OPTIONS``.
    """

    headers = build_cors_headers(
        request.headers.get("origin"),
        request.app.state.settings.cors,
    )

    if request.method == "OPTIONS":
        return Response(status_code=204, headers=headers)

    response: Response = await call_next(request)
    response.headers.update(headers)
    return response
