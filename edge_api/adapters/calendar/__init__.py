"""Scheduling (booking/availability) adapters."""

from edge_api.adapters.calendar.base import AbstractCalendarClient
from edge_api.adapters.calendar.calcom_client import CalComClient, build_booking_request
from edge_api.adapters.calendar.factory import create_calendar_client

__all__ = [
    "AbstractCalendarClient",
    "CalComClient",
    "build_booking_request",
    "create_calendar_client",
]
