from __future__ import annotations

from fastapi import APIRouter, Query

from edge_api.core.dependencies import CalendarClientProviderDep, JsonBodyDep, SettingsDep
from edge_api.schemas.calendar import AvailabilityResponse, BookingResponse, EventTypesResponse
from edge_api.services.calendar_service import CalendarService

router = APIRouter(prefix="/calendar", tags=["Calendar"])


def _service(client_provider: CalendarClientProviderDep, settings: SettingsDep) -> CalendarService:
    return CalendarService(client_provider=client_provider, config=settings.calendar)


@router.get("/availability", response_model=AvailabilityResponse)
async def availability(
    client_provider: CalendarClientProviderDep,
    settings: SettingsDep,
    event_type_id: str | None = Query(None, alias="eventTypeId"),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
) -> AvailabilityResponse:
    """List free slots for an event type.

    ``startDate`` defaults to now and ``endDate`` to now plus the configured
    number of days (ISO-8601).
    """
    service = _service(client_provider, settings)
    return await service.availability(event_type_id, start_date, end_date)


@router.get("/event-types", response_model=EventTypesResponse)
async def event_types(
    client_provider: CalendarClientProviderDep,
    settings: SettingsDep,
) -> EventTypesResponse:
    """List bookable event types."""
    return await _service(client_provider, settings).event_types()


@router.post("/book", response_model=BookingResponse)
async def book(
    body: JsonBodyDep,
    client_provider: CalendarClientProviderDep,
    settings: SettingsDep,
) -> BookingResponse:
    """Create a booking.

    Body: ``{"eventTypeId", "start", "name", "email", "notes"?, "timeZone"?,
    "language"?}``.
    """
    return await _service(client_provider, settings).book(body)
