from __future__ import annotations

"""Application factory for the FastAPI app.

Centralizes app construction (settings, per-app collaborators, middleware,
handlers, routers) so tests can build isolated instances with their own
settings and rate limit store.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from edge_api.adapters.kv import create_key_value_store
from edge_api.adapters.rate_limit import KeyValueFixedWindowRateLimiter
from edge_api.api.routes import (
    calendar_router,
    chat_router,
    contact_router,
    health_router,
    subscribe_router,
)
from edge_api.core.background import BackgroundTaskRunner
from edge_api.core.config import Settings, load_settings
from edge_api.core.exception_handlers import setup_exception_handlers
from edge_api.core.logging import configure_logging
from edge_api.core.middleware import cors_middleware, request_id_middleware
from edge_api.core.openapi import apply_openapi_customizations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("app.startup", extra={"rate_limit_backend": app.state.settings.rate_limit.backend})
    try:
        yield
    finally:
        await app.state.background.drain(app.state.settings.app.background_drain_timeout_seconds)
        if app.state.kv_store is not None:
            await app.state.kv_store.close()
        logger.info("app.shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        settings: Explicit settings; defaults to the cached environment
            settings from ``load_settings``.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.

    Raises:
        ConfigurationAppError: If the rate limit backend is misconfigured.
    """
    settings = settings or load_settings()

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title=settings.app.service_name,
        description=(
            "Server-side proxy for a public website: AI chat, contact form, "
            "newsletter subscription and calendar booking. Provider secrets "
            "stay on the server; form endpoints are rate limited per client IP."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        lifespan=lifespan,
    )

    kv_store = create_key_value_store(settings.rate_limit)
    app.state.settings = settings
    app.state.kv_store = kv_store
    app.state.rate_limiter = KeyValueFixedWindowRateLimiter(kv_store)
    app.state.background = BackgroundTaskRunner()

    # Middleware (last registered runs first)
    app.middleware("http")(cors_middleware)
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(health_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")
    app.include_router(contact_router, prefix="/api")
    app.include_router(subscribe_router, prefix="/api")
    app.include_router(calendar_router, prefix="/api")

    # OpenAPI customizations (tags)
    apply_openapi_customizations(app)

    return app
