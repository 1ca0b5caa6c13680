from __future__ import annotations

from edge_api.api.routes.calendar import router as calendar_router
from edge_api.api.routes.chat import router as chat_router
from edge_api.api.routes.contact import router as contact_router
from edge_api.api.routes.health import router as health_router
from edge_api.api.routes.subscribe import router as subscribe_router

__all__ = [
    "calendar_router",
    "chat_router",
    "contact_router",
    "health_router",
    "subscribe_router",
]
