"""Text sanitization for untrusted browser input.

Strips markup and script vectors before anything is forwarded to a provider
or rendered into an email. Nothing here talks to a database; the SQL
keyword pass only strips the words.
"""

from __future__ import annotations

import re
from typing import Any, Callable

DEFAULT_MAX_LENGTH = 5000

_SCRIPT_BLOCK = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_HTML_TAG = re.compile(r"<[^>]*>")
_EVENT_HANDLER = re.compile(r"\bon\w+\s*=\s*(['\"]?).*?\1", re.IGNORECASE)
_URI_SCHEME = re.compile(r"(?:javascript|data|vbscript)\s*:", re.IGNORECASE)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_SQL_KEYWORDS = re.compile(
    r"\b(?:SELECT|INSERT|UPDATE|DELETE|DROP|UNION|ALTER|CREATE|TRUNCATE)\b",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")

_ROLE_LABEL = re.compile(r"(?:system|assistant|user):\s*\n", re.IGNORECASE)
_IGNORE_INSTRUCTIONS = re.compile(r"ignore (?:previous|all|above) instructions", re.IGNORECASE)


def _has_nested_braces(text: str) -> bool:
    """True when a ``{`` follows a closed ``{...}`` group."""

    opening = text.find("{")
    if opening < 0:
        return False
    closing = text.find("}", opening + 1)
    return closing >= 0 and text.find("{", closing + 1) >= 0


# Prompt-injection heuristics for chat input; matches are logged, never rejected.
SUSPICIOUS_PATTERNS: dict[str, Callable[[str], bool]] = {
    "nested_braces": _has_nested_braces,
    "role_label": lambda text: _ROLE_LABEL.search(text) is not None,
    "ignore_instructions": lambda text: _IGNORE_INSTRUCTIONS.search(text) is not None,
}


def _clean_once(text: str, max_length: int) -> str:
    text = _SCRIPT_BLOCK.sub("", text)
    text = _HTML_TAG.sub("", text)
    text = _EVENT_HANDLER.sub("", text)
    text = _URI_SCHEME.sub("", text)
    text = _CONTROL_CHARS.sub("", text)
    text = _SQL_KEYWORDS.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:max_length].rstrip()


def sanitize_text(text: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Clean untrusted text and bound its length.

    Removes script blocks, HTML tags, inline event handlers, ``javascript:``,
    ``data:`` and ``vbscript:`` schemes, control characters and common SQL
    keywords, collapses whitespace and truncates to ``max_length``.

    Removing one pattern can splice together another (``javajavascript:script:``),
    so the pass repeats until the text stops changing. This makes the function
    idempotent.

    Args:
        text: Untrusted value; anything that is not a string yields ``""``.
        max_length: Maximum length of the returned string.

    Returns:
        The sanitized string, at most ``max_length`` characters long.
    """
    if not isinstance(text, str):
        return ""
    if max_length < 0:
        raise ValueError("max_length must be >= 0")

    previous = None
    cleaned = text
    while cleaned != previous:
        previous = cleaned
        cleaned = _clean_once(cleaned, max_length)
    return cleaned


def detect_suspicious_patterns(text: str) -> list[str]:
    """Return the names of prompt-injection heuristics matching ``text``."""

    return [name for name, matches in SUSPICIOUS_PATTERNS.items() if matches(text)]
