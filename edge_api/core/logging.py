"""Structured logging for the edge API.

Every record leaves the process as one JSON line on stdout (or a plain text
line for local runs) carrying the request id of the HTTP request that
produced it. Two kinds of data never reach the sink:

* provider credentials, including the Cal.com ``apiKey`` query parameter that
  appears inside request URLs logged by httpx;
* visitor content: chat messages and replies, contact details and booking
  notes. Only lengths and counts of those are logged.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from edge_api.core.config import LogSettings

REDACTED = "[REDACTED]"

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

# Field names whose values are replaced wholesale, compared case-insensitively.
REDACTED_FIELDS: frozenset[str] = frozenset(
    {
        # credentials
        "api_key",
        "apikey",
        "x-api-key",
        "authorization",
        "cookie",
        "set-cookie",
        "redis_url",
        # visitor content
        "message_text",
        "prompt",
        "reply",
        "email",
        "phone",
        "company",
        "notes",
    }
)

_SECRET_QUERY_PARAM = re.compile(r"([?&](?:apiKey|api_key|key|token)=)[^&#\s\"']+", re.IGNORECASE)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def set_request_id(request_id: str | None) -> None:
    _request_id_var.set(request_id)


def get_request_id() -> str | None:
    return _request_id_var.get()


def clear_request_id() -> None:
    _request_id_var.set(None)


def scrub_secrets(text: str) -> str:
    """Mask credential query parameters embedded in URLs inside ``text``."""

    return _SECRET_QUERY_PARAM.sub(rf"\1{REDACTED}", text)


def _redact(value: Any, fields: frozenset[str]) -> Any:
    if isinstance(value, Mapping):
        return {
            key: REDACTED if str(key).lower() in fields else _redact(item, fields)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(_redact(item, fields) for item in value)
    if isinstance(value, str):
        return scrub_secrets(value)
    return value


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class RequestIdFilter(logging.Filter):
    """Stamp records with the request id of the current context."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            request_id = get_request_id()
            if request_id:
                record.request_id = request_id
        return True


class RedactionFilter(logging.Filter):
    """Redact extras and scrub secret query strings from the message.

    The message is rendered once and its args dropped, so both the JSON and
    the plain formatter see the scrubbed text.
    """

    def __init__(self, fields: Iterable[str] | None = None) -> None:
        super().__init__()
        self.fields = frozenset(f.lower() for f in fields) if fields else REDACTED_FIELDS

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = scrub_secrets(record.getMessage())
        record.args = None
        for key, value in _extras(record).items():
            if key.lower() in self.fields:
                setattr(record, key, REDACTED)
            else:
                setattr(record, key, _redact(value, self.fields))
        return True


class JsonFormatter(logging.Formatter):
    """Render a record and its extras as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None) or get_request_id()
        if request_id:
            payload["request_id"] = request_id
        payload.update(_extras(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(log_settings: LogSettings | None = None) -> None:
    """Install the stdout handler on the root logger.

    Safe to call more than once: existing root handlers are replaced.
    """

    cfg = log_settings or LogSettings()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(RedactionFilter())
    if cfg.format.lower() == "plain":
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, cfg.level.upper(), logging.INFO))

    # uvicorn installs its own handlers
    for name in ("uvicorn", "uvicorn.access"):
        logging.getLogger(name).propagate = False
