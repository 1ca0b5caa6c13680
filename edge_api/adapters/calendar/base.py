"""Scheduling provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from edge_api.adapters.upstream import UpstreamResult
from edge_api.utils.validators import BookingPayload


class AbstractCalendarClient(ABC):
    """Interface for availability lookup and booking creation.

    All methods return ``UpstreamResult`` values and never raise for provider
    failures.
    """

    @abstractmethod
    async def get_availability(
        self,
        event_type_id: str,
        start_time: str,
        end_time: str,
    ) -> UpstreamResult[Any]:
        """Return free slots for an event type between two ISO timestamps."""
        raise NotImplementedError

    @abstractmethod
    async def get_event_types(self) -> UpstreamResult[Any]:
        """Return the bookable event types."""
        raise NotImplementedError

    @abstractmethod
    async def create_booking(self, booking: BookingPayload) -> UpstreamResult[Any]:
        """Create a booking and return the provider's booking record."""
        raise NotImplementedError
