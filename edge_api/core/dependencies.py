"""FastAPI dependencies resolving per-app collaborators.

Everything a handler needs comes from ``request.app.state`` (populated by
``create_app``) or is built from the settings stored there, so tests can
swap any collaborator through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated, Any, Callable

from fastapi import Depends, Request

from edge_api.adapters.calendar.base import AbstractCalendarClient
from edge_api.adapters.calendar.factory import create_calendar_client
from edge_api.adapters.email.base import AbstractEmailClient
from edge_api.adapters.email.factory import create_email_client
from edge_api.adapters.llm.base import AbstractChatClient
from edge_api.adapters.llm.factory import create_chat_client
from edge_api.adapters.rate_limit.base import AbstractRateLimiter
from edge_api.core.background import BackgroundTaskRunner
from edge_api.core.config import Settings
from edge_api.core.errors import ValidationAppError
from edge_api.core.rate_limit import get_client_ip


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_limiter(request: Request) -> AbstractRateLimiter:
    return request.app.state.rate_limiter


def get_background_runner(request: Request) -> BackgroundTaskRunner:
    return request.app.state.background


ChatClientProvider = Callable[[], AbstractChatClient]
EmailClientProvider = Callable[[], AbstractEmailClient]
CalendarClientProvider = Callable[[], AbstractCalendarClient]


# Providers are returned instead of clients so a missing secret surfaces
# only after input validation and rate limiting have run.
def get_chat_client_provider(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ChatClientProvider:
    return lambda: create_chat_client(settings.llm)


def get_email_client_provider(
    settings: Annotated[Settings, Depends(get_settings)],
) -> EmailClientProvider:
    return lambda: create_email_client(settings.email)


def get_calendar_client_provider(
    settings: Annotated[Settings, Depends(get_settings)],
) -> CalendarClientProvider:
    return lambda: create_calendar_client(settings.calendar)


def client_ip(request: Request) -> str:
    return get_client_ip(request)


async def read_json_body(request: Request) -> Any:
    """Decode the request body as JSON.

    The decoded value is returned untyped; endpoint validators decide what
    shape is acceptable.

    Raises:
        ValidationAppError: 400 "Invalid request format" for bodies that are
            not valid JSON.
    """
    try:
        return await request.json()
    except ValueError as exc:
        raise ValidationAppError(
            code="invalid_request_format",
            message="Invalid request format",
        ) from exc


SettingsDep = Annotated[Settings, Depends(get_settings)]
RateLimiterDep = Annotated[AbstractRateLimiter, Depends(get_rate_limiter)]
BackgroundDep = Annotated[BackgroundTaskRunner, Depends(get_background_runner)]
ChatClientProviderDep = Annotated[ChatClientProvider, Depends(get_chat_client_provider)]
EmailClientProviderDep = Annotated[EmailClientProvider, Depends(get_email_client_provider)]
CalendarClientProviderDep = Annotated[
    CalendarClientProvider, Depends(get_calendar_client_provider)
]
ClientIpDep = Annotated[str, Depends(client_ip)]
JsonBodyDep = Annotated[Any, Depends(read_json_body)]
