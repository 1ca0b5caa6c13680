"""Calendar service: availability lookup, event types and bookings."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from edge_api.adapters.calendar.base import AbstractCalendarClient
from edge_api.core.config import CalendarSettings
from edge_api.core.errors import ValidationAppError
from edge_api.schemas.calendar import AvailabilityResponse, BookingResponse, EventTypesResponse
from edge_api.services.upstream_errors import raise_for_upstream
from edge_api.utils.sanitizer import sanitize_text
from edge_api.utils.validators import validate_booking

logger = logging.getLogger(__name__)

CONNECT_FAILED_MESSAGE = "Failed to connect to calendar service"


def _iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


class CalendarService:
    """Proxy scheduling requests to the calendar provider.

    Unlike the form endpoints, the client is resolved first: every calendar
    route answers 500 when the provider key is missing.
    """

    def __init__(
        self,
        *,
        client_provider: Callable[[], AbstractCalendarClient],
        config: CalendarSettings,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.client_provider = client_provider
        self.config = config
        self.clock = clock

    async def availability(
        self,
        event_type_id: str | None,
        start_date: str | None,
        end_date: str | None,
    ) -> AvailabilityResponse:
        """Return free slots; the range defaults to now → now + N days.

        Raises:
            ConfigurationAppError: Calendar key not configured.
            ValidationAppError: ``eventTypeId`` missing.
        """
        client = self.client_provider()

        event_type_id = sanitize_text(event_type_id, 32)
        if not event_type_id:
            raise ValidationAppError(code="missing_event_type_id", message="eventTypeId is required")

        now = self.clock()
        start = sanitize_text(start_date, 64) or _iso(now)
        end = sanitize_text(end_date, 64) or _iso(now + timedelta(days=self.config.availability_days))

        result = await client.get_availability(event_type_id, start, end)
        raise_for_upstream(
            result,
            upstream="calendar",
            error_message=f"Failed to fetch availability: {result.status_code}",
            unavailable_message=CONNECT_FAILED_MESSAGE,
            http_status=500,
        )
        return AvailabilityResponse(slots=result.payload)

    async def event_types(self) -> EventTypesResponse:
        """Return the bookable event types."""
        client = self.client_provider()

        result = await client.get_event_types()
        raise_for_upstream(
            result,
            upstream="calendar",
            error_message=f"Failed to fetch event types: {result.status_code}",
            unavailable_message=CONNECT_FAILED_MESSAGE,
            http_status=500,
        )
        return EventTypesResponse(event_types=result.payload)

    async def book(self, body: Any) -> BookingResponse:
        """Create a booking.

        Raises:
            ConfigurationAppError: Calendar key not configured.
            ValidationAppError: First problem found in the booking request.
        """
        client = self.client_provider()

        validation = validate_booking(
            body,
            default_time_zone=self.config.default_time_zone,
            default_language=self.config.default_language,
        )
        if not validation.valid:
            raise ValidationAppError(code="invalid_booking_request", message=validation.error)

        result = await client.create_booking(validation.data)
        raise_for_upstream(
            result,
            upstream="calendar",
            error_message=f"Failed to create booking: {result.status_code}",
            unavailable_message=CONNECT_FAILED_MESSAGE,
            http_status=500,
        )

        logger.info("calendar.booked", extra={"event_type_id": validation.data.event_type_id})
        return BookingResponse(booking=result.payload)
