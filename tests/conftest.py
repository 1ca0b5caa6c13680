"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins APP_ENV to ``testing`` and removes provider secrets so no test ever
reaches a real provider.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ["RATE_LIMIT_BACKEND"] = "memory"
os.environ.setdefault("LOG_FORMAT", "plain")
for _secret in ("LLM_API_KEY", "EMAIL_API_KEY", "CALENDAR_API_KEY"):
    os.environ.pop(_secret, None)

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from edge_api.adapters.calendar.base import AbstractCalendarClient
from edge_api.adapters.email.base import AbstractEmailClient, EmailMessage
from edge_api.adapters.llm.base import AbstractChatClient
from edge_api.adapters.upstream import UpstreamResult
from edge_api.core.app_factory import create_app
from edge_api.core.config import (
    CalendarSettings,
    EmailSettings,
    LLMSettings,
    LogSettings,
    RateLimitSettings,
    Settings,
)
from edge_api.core.dependencies import (
    get_calendar_client_provider,
    get_chat_client_provider,
    get_email_client_provider,
)
from edge_api.utils.validators import BookingPayload


class FakeChatClient(AbstractChatClient):
    """Chat client returning a canned result and recording prompts."""

    def __init__(self) -> None:
        self.result: UpstreamResult[str] = UpstreamResult.success("Hello! How can I help?")
        self.messages: list[str] = []

    async def complete(self, message: str) -> UpstreamResult[str]:
        self.messages.append(message)
        return self.result


class FakeEmailClient(AbstractEmailClient):
    """Email client recording messages; results are consumed in order."""

    def __init__(self) -> None:
        self.results: list[UpstreamResult[None]] = []
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> UpstreamResult[None]:
        self.sent.append(message)
        if self.results:
            return self.results.pop(0)
        return UpstreamResult.success(None)


class FakeCalendarClient(AbstractCalendarClient):
    """Calendar client with settable results and recorded calls."""

    def __init__(self) -> None:
        self.availability_result: UpstreamResult[Any] = UpstreamResult.success(
            {"2024-01-02": [{"time": "2024-01-02T15:00:00Z"}]}
        )
        self.event_types_result: UpstreamResult[Any] = UpstreamResult.success(
            [{"id": 42, "title": "Strategy Call", "length": 30}]
        )
        self.booking_result: UpstreamResult[Any] = UpstreamResult.success({"id": 7, "uid": "abc"})
        self.availability_calls: list[tuple[str, str, str]] = []
        self.bookings: list[BookingPayload] = []

    async def get_availability(self, event_type_id: str, start_time: str, end_time: str):
        self.availability_calls.append((event_type_id, start_time, end_time))
        return self.availability_result

    async def get_event_types(self):
        return self.event_types_result

    async def create_booking(self, booking: BookingPayload):
        self.bookings.append(booking)
        return self.booking_result


@pytest.fixture
def settings() -> Settings:
    """Settings with every provider secret missing and an in-memory store."""
    return Settings(
        llm=LLMSettings(api_key=None),
        email=EmailSettings(
            api_key=None,
            sender_email="hello@example.com",
            sender_name="Acme",
            admin_email="admin@example.com",
            booking_url="https://cal.com/acme",
            site_url="https://acme.example",
        ),
        calendar=CalendarSettings(api_key=None),
        rate_limit=RateLimitSettings(backend="memory", contact_limit=5, subscribe_limit=3),
        log=LogSettings(format="plain", level="WARNING"),
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def fake_chat() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def fake_email() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture
def fake_calendar() -> FakeCalendarClient:
    return FakeCalendarClient()


@pytest.fixture
def fake_providers(
    app: FastAPI,
    fake_chat: FakeChatClient,
    fake_email: FakeEmailClient,
    fake_calendar: FakeCalendarClient,
):
    """Route every provider dependency to the in-process fakes."""
    app.dependency_overrides[get_chat_client_provider] = lambda: (lambda: fake_chat)
    app.dependency_overrides[get_email_client_provider] = lambda: (lambda: fake_email)
    app.dependency_overrides[get_calendar_client_provider] = lambda: (lambda: fake_calendar)
    yield
    app.dependency_overrides.clear()
