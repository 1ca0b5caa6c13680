"""OpenAPI metadata and customization utilities.

Adds tag descriptions to the generated schema and documents the shared
error envelope, keeping documentation concerns out of the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {"name": "Chat", "description": "AI assistant replies proxied to the LLM provider."},
    {"name": "Forms", "description": "Contact form and newsletter subscription (rate limited per IP)."},
    {"name": "Calendar", "description": "Availability, event types and bookings."},
    {"name": "Health", "description": "Liveness check."},
]

ERROR_SCHEMA = {
    "type": "object",
    "required": ["error"],
    "properties": {
        "error": {"type": "string"},
        "details": {"type": "array", "items": {"type": "string"}},
        "retryAfter": {"type": "integer", "description": "Seconds until the window resets."},
    },
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and the error schema.

    - Adds tags metadata if not present
    - Registers ``components.schemas.ErrorResponse``
    """

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        components = schema.setdefault("components", {})
        components.setdefault("schemas", {}).setdefault("ErrorResponse", ERROR_SCHEMA)

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
