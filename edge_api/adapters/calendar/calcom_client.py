"""Cal.com v1 API adapter.

Cal.com v1 authenticates with an ``apiKey`` query parameter, so request URLs
contain the secret and are never logged.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from edge_api.adapters.calendar.base import AbstractCalendarClient
from edge_api.adapters.upstream import UpstreamResult, classify_http_response
from edge_api.utils.validators import BookingPayload

logger = logging.getLogger(__name__)


class CalComClient(AbstractCalendarClient):
    """Client for Cal.com availability, event types and bookings."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.cal.com/v1",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Cal.com API key.
            base_url: API base URL including the version segment.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport (tests use ``MockTransport``).
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> UpstreamResult[Any]:
        query = {"apiKey": self._api_key, **(params or {})}
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    path,
                    params=query,
                    json=json,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TimeoutException:
            logger.warning(
                "calendar.upstream_timeout",
                extra={"operation": operation, "timeout_s": self._timeout},
            )
            return UpstreamResult.timeout("Calendar service timed out")
        except httpx.RequestError as exc:
            logger.error(
                "calendar.upstream_unreachable",
                extra={"operation": operation, "error_type": type(exc).__name__},
            )
            return UpstreamResult.network_error("Failed to connect to calendar service")

        result = classify_http_response(response)
        if not result.ok:
            logger.error(
                "calendar.upstream_error",
                extra={
                    "operation": operation,
                    "upstream_status": result.status_code,
                    "error_msg": result.message,
                },
            )
        return result

    async def get_availability(
        self,
        event_type_id: str,
        start_time: str,
        end_time: str,
    ) -> UpstreamResult[Any]:
        result = await self._request(
            "availability",
            "GET",
            "/availability",
            params={
                "eventTypeId": event_type_id,
                "startTime": start_time,
                "endTime": end_time,
            },
        )
        if not result.ok:
            return result
        data = result.payload
        if isinstance(data, dict) and "slots" in data:
            return UpstreamResult.success(data["slots"])
        return UpstreamResult.success(data)

    async def get_event_types(self) -> UpstreamResult[Any]:
        result = await self._request("event_types", "GET", "/event-types")
        if not result.ok:
            return result
        data = result.payload
        if isinstance(data, dict) and "event_types" in data:
            return UpstreamResult.success(data["event_types"])
        return UpstreamResult.success(data)

    async def create_booking(self, booking: BookingPayload) -> UpstreamResult[Any]:
        return await self._request(
            "create_booking",
            "POST",
            "/bookings",
            json=build_booking_request(booking),
        )


def build_booking_request(booking: BookingPayload) -> dict[str, Any]:
    """Map a sanitized booking onto the Cal.com booking body."""

    return {
        "eventTypeId": booking.event_type_id,
        "start": booking.start,
        "responses": {
            "name": booking.name,
            "email": booking.email,
            "notes": booking.notes,
        },
        "timeZone": booking.time_zone,
        "language": booking.language,
        "metadata": {},
    }
