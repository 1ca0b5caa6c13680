"""Pydantic schema for the health endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field("ok", description="Always 'ok' while the process serves requests.")
    message: str = Field(..., description="Human-readable status line.")
