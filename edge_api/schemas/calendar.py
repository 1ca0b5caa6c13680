"""Pydantic schemas for the calendar endpoints.

Provider payloads (slots, event types, bookings) are passed through as-is.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AvailabilityResponse(BaseModel):
    slots: Any = Field(..., description="Free slots as returned by the scheduling provider.")


class EventTypesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_types: Any = Field(..., alias="eventTypes", description="Bookable event types.")


class BookingResponse(BaseModel):
    success: bool = True
    message: str = "Booking confirmed!"
    booking: Any = Field(..., description="Booking record returned by the provider.")
