"""Request validators for the public endpoints.

Every validator takes the decoded JSON body as-is (any type) and returns a
``ValidationResult``; none of them raise. The contact validator accumulates
all errors so the form can show every problem at once. Chat, subscribe and
booking validators stop at the first violation.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from edge_api.utils.sanitizer import detect_suspicious_patterns, sanitize_text

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_EMAIL_LENGTH = 254
MAX_MESSAGE_LENGTH = 5000
MIN_MESSAGE_LENGTH = 10
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MAX_SUBJECT_LENGTH = 200
MAX_SOURCE_LENGTH = 100
MAX_NOTES_LENGTH = 1000
MAX_START_LENGTH = 64

DEFAULT_CONTACT_SUBJECT = "New Contact Form Submission"
DEFAULT_SUBSCRIBE_SOURCE = "lead-magnet"

BOOKING_REQUIRED_FIELDS = ("eventTypeId", "start", "name", "email")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of validating one request body.

    Attributes:
        valid: True when ``data`` holds a sanitized payload.
        data: Sanitized payload (None when invalid).
        errors: Human-readable problems (empty when valid).
    """

    valid: bool
    data: T | None = None
    errors: tuple[str, ...] = ()

    @property
    def error(self) -> str | None:
        """First error, as reported by the fail-fast validators."""
        return self.errors[0] if self.errors else None

    @classmethod
    def ok(cls, data: T) -> ValidationResult[T]:
        return cls(valid=True, data=data)

    @classmethod
    def invalid(cls, *errors: str) -> ValidationResult[T]:
        return cls(valid=False, errors=tuple(errors))


@dataclass(frozen=True)
class ContactPayload:
    name: str
    email: str
    message: str
    subject: str


@dataclass(frozen=True)
class SubscribePayload:
    email: str
    source: str


@dataclass(frozen=True)
class BookingPayload:
    event_type_id: int
    start: str
    name: str
    email: str
    notes: str
    time_zone: str
    language: str


def is_valid_email(email: Any) -> bool:
    """Check ``local@domain.tld`` shape and the 254 character limit."""

    if not isinstance(email, str):
        return False
    return len(email) <= MAX_EMAIL_LENGTH and bool(_EMAIL_RE.match(email))


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_chat(body: Any) -> ValidationResult[str]:
    """Validate a chat request and return the sanitized message.

    Suspicious prompt-injection patterns are logged but never rejected.
    """

    if not isinstance(body, dict):
        return ValidationResult.invalid("Invalid request body")

    raw = body.get("message")
    if not raw:
        return ValidationResult.invalid("Message is required")
    if not isinstance(raw, str):
        return ValidationResult.invalid("Message must be a string")

    message = sanitize_text(raw, MAX_MESSAGE_LENGTH)
    if not message:
        return ValidationResult.invalid("Message cannot be empty")

    # role labels need the raw newlines
    matched = detect_suspicious_patterns(raw[:MAX_MESSAGE_LENGTH])
    if matched:
        logger.warning(
            "chat.suspicious_input",
            extra={"patterns": matched, "message_length": len(raw)},
        )

    return ValidationResult.ok(message)


def validate_contact(body: Any) -> ValidationResult[ContactPayload]:
    """Validate a contact form submission, collecting every error."""

    if not isinstance(body, dict):
        return ValidationResult.invalid("Invalid request body")

    errors: list[str] = []

    name = body.get("name")
    if not name or not isinstance(name, str):
        errors.append("Name is required")
    elif not MIN_NAME_LENGTH <= len(name.strip()) <= MAX_NAME_LENGTH:
        errors.append(f"Name must be between {MIN_NAME_LENGTH}-{MAX_NAME_LENGTH} characters")

    email = body.get("email")
    if not isinstance(email, str) or not is_valid_email(email.strip()):
        errors.append("Valid email address is required")

    message = body.get("message")
    if not message or not isinstance(message, str):
        errors.append("Message is required")
    elif not MIN_MESSAGE_LENGTH <= len(message.strip()) <= MAX_MESSAGE_LENGTH:
        errors.append(
            f"Message must be between {MIN_MESSAGE_LENGTH}-{MAX_MESSAGE_LENGTH} characters"
        )

    subject = body.get("subject")
    if isinstance(subject, str) and len(subject) > MAX_SUBJECT_LENGTH:
        errors.append(f"Subject must be under {MAX_SUBJECT_LENGTH} characters")

    if errors:
        return ValidationResult.invalid(*errors)

    clean_name = sanitize_text(name, MAX_NAME_LENGTH)
    clean_message = sanitize_text(message, MAX_MESSAGE_LENGTH)
    if not clean_name:
        errors.append("Name is required")
    if not clean_message:
        errors.append("Message is required")
    if errors:
        return ValidationResult.invalid(*errors)

    clean_subject = sanitize_text(subject, MAX_SUBJECT_LENGTH) if isinstance(subject, str) else ""

    return ValidationResult.ok(
        ContactPayload(
            name=clean_name,
            email=_normalize_email(email),
            message=clean_message,
            subject=clean_subject or DEFAULT_CONTACT_SUBJECT,
        )
    )


def validate_subscribe(body: Any) -> ValidationResult[SubscribePayload]:
    """Validate a newsletter/lead-magnet subscription."""

    if not isinstance(body, dict):
        return ValidationResult.invalid("Invalid request body")

    email = body.get("email")
    if not isinstance(email, str) or not is_valid_email(email.strip()):
        return ValidationResult.invalid("Valid email address is required")

    source = sanitize_text(body.get("source"), MAX_SOURCE_LENGTH)

    return ValidationResult.ok(
        SubscribePayload(
            email=_normalize_email(email),
            source=source or DEFAULT_SUBSCRIBE_SOURCE,
        )
    )


def _parse_event_type_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def validate_booking(
    body: Any,
    *,
    default_time_zone: str = "America/New_York",
    default_language: str = "en",
) -> ValidationResult[BookingPayload]:
    """Validate a booking request for the scheduling provider.

    Args:
        body: Decoded JSON body.
        default_time_zone: Used when ``timeZone`` is omitted.
        default_language: Used when ``language`` is omitted.
    """

    if not isinstance(body, dict):
        return ValidationResult.invalid("Invalid request body")

    for field_name in BOOKING_REQUIRED_FIELDS:
        if not body.get(field_name):
            return ValidationResult.invalid(f"Missing required field: {field_name}")

    email = body["email"]
    if not isinstance(email, str) or not is_valid_email(email.strip()):
        return ValidationResult.invalid("Invalid email address")

    event_type_id = _parse_event_type_id(body["eventTypeId"])
    if event_type_id is None:
        return ValidationResult.invalid("eventTypeId must be an integer")

    start = sanitize_text(body["start"], MAX_START_LENGTH)
    if not start:
        return ValidationResult.invalid("start must be an ISO-8601 date-time string")

    name = sanitize_text(body["name"], MAX_NAME_LENGTH)
    if not name:
        return ValidationResult.invalid("Missing required field: name")

    time_zone = sanitize_text(body.get("timeZone"), MAX_SOURCE_LENGTH)
    language = sanitize_text(body.get("language"), 16)

    return ValidationResult.ok(
        BookingPayload(
            event_type_id=event_type_id,
            start=start,
            name=name,
            email=_normalize_email(email),
            notes=sanitize_text(body.get("notes"), MAX_NOTES_LENGTH),
            time_zone=time_zone or default_time_zone,
            language=language or default_language,
        )
    )
