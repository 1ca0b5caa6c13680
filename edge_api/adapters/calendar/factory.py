"""Factory for the scheduling client."""

import logging

from edge_api.adapters.calendar.base import AbstractCalendarClient
from edge_api.adapters.calendar.calcom_client import CalComClient
from edge_api.core.config import CalendarSettings
from edge_api.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)


def create_calendar_client(config: CalendarSettings) -> AbstractCalendarClient:
    """Instantiate the calendar client from settings.

    Raises:
        ConfigurationAppError: If CALENDAR_API_KEY is missing.
    """
    if not config.api_key:
        logger.error("calendar.missing_api_key")
        raise ConfigurationAppError(
            code="calendar_missing_api_key",
            message="Calendar service is not configured",
            details={"hint": "Set CALENDAR_API_KEY"},
        )
    return CalComClient(
        config.api_key,
        base_url=config.base_url,
        timeout_seconds=config.timeout_seconds,
    )
