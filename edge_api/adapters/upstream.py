"""Result values returned by upstream provider clients.

Clients never raise for provider or network failures. They classify every
call into one ``UpstreamResult`` so services decide how each outcome maps to
an HTTP response.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import httpx

T = TypeVar("T")


class UpstreamOutcome(str, Enum):
    SUCCESS = "success"
    AUTH_ERROR = "auth_error"
    UPSTREAM_ERROR = "upstream_error"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class UpstreamResult(Generic[T]):
    """Classified outcome of one provider call.

    Attributes:
        outcome: Classification of the call.
        payload: Parsed provider payload on success.
        status_code: Provider HTTP status for auth/upstream errors.
        message: Provider or transport message for failures (server-side).
    """

    outcome: UpstreamOutcome
    payload: T | None = None
    status_code: int | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is UpstreamOutcome.SUCCESS

    @classmethod
    def success(cls, payload: T) -> UpstreamResult[T]:
        return cls(outcome=UpstreamOutcome.SUCCESS, payload=payload)

    @classmethod
    def auth_error(cls, status_code: int, message: str) -> UpstreamResult[T]:
        return cls(outcome=UpstreamOutcome.AUTH_ERROR, status_code=status_code, message=message)

    @classmethod
    def upstream_error(cls, status_code: int, message: str) -> UpstreamResult[T]:
        return cls(
            outcome=UpstreamOutcome.UPSTREAM_ERROR,
            status_code=status_code,
            message=message,
        )

    @classmethod
    def network_error(cls, message: str) -> UpstreamResult[T]:
        return cls(outcome=UpstreamOutcome.NETWORK_ERROR, message=message)

    @classmethod
    def timeout(cls, message: str) -> UpstreamResult[T]:
        return cls(outcome=UpstreamOutcome.TIMEOUT, message=message)


def extract_error_message(body: Any, fallback: str) -> str:
    """Pull a human-readable message out of a provider error body.

    Handles the common ``{"error": {"message": ...}}``, ``{"message": ...}``
    and ``{"errors": [{"message": ...}]}`` shapes.
    """

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if body.get("message"):
            return str(body["message"])
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, dict) and first.get("message"):
                return str(first["message"])
        if body:
            return json.dumps(body)
    if isinstance(body, str) and body:
        return body
    return fallback


def classify_http_response(response: httpx.Response, *, parse_json: bool = True) -> UpstreamResult[Any]:
    """Classify an httpx response from a REST provider.

    401 maps to ``auth_error``; any other non-2xx to ``upstream_error``.
    Success bodies are parsed as JSON when ``parse_json`` is set; an empty or
    non-JSON success body yields ``None`` (or the raw text).
    """

    if response.status_code == 401:
        return UpstreamResult.auth_error(401, "API authentication failed")

    if not response.is_success:
        try:
            body: Any = response.json()
        except ValueError:
            body = response.text
        message = extract_error_message(body, f"HTTP {response.status_code}")
        return UpstreamResult.upstream_error(response.status_code, message)

    if not parse_json or not response.content:
        return UpstreamResult.success(None)
    try:
        return UpstreamResult.success(response.json())
    except ValueError:
        return UpstreamResult.success(response.text)
