"""Factory for the transactional email client."""

import logging

from edge_api.adapters.email.base import AbstractEmailClient
from edge_api.adapters.email.sendgrid_client import SendGridEmailClient
from edge_api.core.config import EmailSettings
from edge_api.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)


def create_email_client(config: EmailSettings) -> AbstractEmailClient:
    """Instantiate the email client from settings.

    Raises:
        ConfigurationAppError: If EMAIL_API_KEY is missing.
    """
    if not config.api_key:
        logger.error("email.missing_api_key")
        raise ConfigurationAppError(
            code="email_missing_api_key",
            message="Email service is not properly configured",
            details={"hint": "Set EMAIL_API_KEY"},
        )
    return SendGridEmailClient(
        config.api_key,
        sender_email=config.sender_email,
        sender_name=config.sender_name,
        base_url=config.base_url,
        timeout_seconds=config.timeout_seconds,
    )
