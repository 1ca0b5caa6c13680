"""Pydantic schemas for the chat endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    reply: str = Field(..., description="Assistant reply text.")
