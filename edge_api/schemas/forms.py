"""Pydantic schemas for the contact and subscribe endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ContactResponse(BaseModel):
    success: bool = True
    message: str = Field(..., description="Confirmation shown to the visitor.")
    remaining: int = Field(..., description="Submissions left in the current rate-limit window.")


class SubscribeResponse(BaseModel):
    success: bool = True
    message: str = Field(..., description="Confirmation shown to the visitor.")
