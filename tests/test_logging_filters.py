"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from edge_api.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    RedactionFilter,
    clear_request_id,
    scrub_secrets,
    set_request_id,
)


def _logger(name: str, stream: StringIO) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(RedactionFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


def test_sensitive_filter_redacts_provider_secrets():
    """Ensure API keys and auth headers never reach the output."""

    stream = StringIO()
    logger = _logger("test_secret_redaction", stream)

    logger.info(
        "test_event",
        extra={
            "api_key": "sk-secret-123",
            "authorization": "Bearer sg-secret",
            "redis_url": "redis://:hunter2@cache:6379/0",
            "safe_field": "visible",
        },
    )

    output = stream.getvalue()

    assert "sk-secret-123" not in output
    assert "sg-secret" not in output
    assert "hunter2" not in output
    assert "[REDACTED]" in output
    assert "visible" in output


def test_sensitive_filter_redacts_visitor_content():
    """Ensure chat prompts, replies and visitor emails are redacted."""

    stream = StringIO()
    logger = _logger("test_content_redaction", stream)

    logger.info(
        "chat_event",
        extra={
            "prompt": "My phone number is 555-0100",
            "reply": "Thanks, we will call you",
            "email": "jane@example.com",
            "message_length": 27,
        },
    )

    output = stream.getvalue()

    assert "555-0100" not in output
    assert "we will call you" not in output
    assert "jane@example.com" not in output
    assert "message_length" in output


def test_nested_values_are_redacted():
    stream = StringIO()
    logger = _logger("test_nested_redaction", stream)

    logger.info("nested", extra={"context": {"headers": {"x-api-key": "abc123"}, "scope": "contact"}})

    data = json.loads(stream.getvalue())
    assert data["context"]["headers"]["x-api-key"] == "[REDACTED]"
    assert data["context"]["scope"] == "contact"


def test_request_id_is_attached_from_context():
    stream = StringIO()
    logger = _logger("test_request_id", stream)

    set_request_id("req-42")
    try:
        logger.info("with_request")
    finally:
        clear_request_id()

    assert json.loads(stream.getvalue())["request_id"] == "req-42"


def test_calendar_api_key_is_scrubbed_from_logged_urls():
    stream = StringIO()
    logger = _logger("test_url_scrubbing", stream)

    logger.info(
        "HTTP Request: %s %s",
        "GET",
        "https://api.cal.com/v1/slots?apiKey=cal_live_abc&eventTypeId=7",
    )

    data = json.loads(stream.getvalue())
    assert "cal_live_abc" not in data["message"]
    assert "eventTypeId=7" in data["message"]


def test_secret_query_params_are_scrubbed_inside_extras():
    stream = StringIO()
    logger = _logger("test_extra_url_scrubbing", stream)

    logger.warning("calendar.upstream_error", extra={"url": "https://api.cal.com/v1/bookings?apiKey=cal_live_xyz"})

    data = json.loads(stream.getvalue())
    assert data["url"] == "https://api.cal.com/v1/bookings?apiKey=[REDACTED]"


def test_booking_notes_and_phone_are_redacted():
    stream = StringIO()
    logger = _logger("test_booking_redaction", stream)

    logger.info("calendar.booking", extra={"notes": "Gate code 4411", "phone": "555-0199", "event_type_id": 7})

    data = json.loads(stream.getvalue())
    assert data["notes"] == "[REDACTED]"
    assert data["phone"] == "[REDACTED]"
    assert data["event_type_id"] == 7


def test_scrub_secrets_leaves_plain_text_alone():
    assert scrub_secrets("no secrets here, key points only") == "no secrets here, key points only"
    assert scrub_secrets("/path?token=abc&x=1") == "/path?token=[REDACTED]&x=1"
