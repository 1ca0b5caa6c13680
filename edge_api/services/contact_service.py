"""Contact form service: validation, rate limiting and email delivery."""

from __future__ import annotations

import logging
from typing import Any, Callable

from edge_api.adapters.email.base import AbstractEmailClient
from edge_api.adapters.rate_limit.base import AbstractRateLimiter
from edge_api.core.config import EmailSettings, RateLimitSettings
from edge_api.core.errors import ValidationAppError
from edge_api.core.rate_limit import CONTACT_SCOPE, enforce_rate_limit
from edge_api.schemas.forms import ContactResponse
from edge_api.services.email_templates import contact_confirmation, contact_notification
from edge_api.services.upstream_errors import raise_for_upstream
from edge_api.utils.validators import validate_contact

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thank you for your inquiry! We will contact you soon."
DELIVERY_FAILED_MESSAGE = "Failed to send your message. Please try again."


class ContactService:
    """Handle one contact form submission.

    Steps: validate (all errors at once) → consume the ``contact`` budget →
    resolve the email client → forward the submission to the admin inbox →
    send the confirmation to the visitor.
    """

    def __init__(
        self,
        *,
        limiter: AbstractRateLimiter,
        rate_limit_config: RateLimitSettings,
        email_provider: Callable[[], AbstractEmailClient],
        email_config: EmailSettings,
    ) -> None:
        self.limiter = limiter
        self.rate_limit_config = rate_limit_config
        self.email_provider = email_provider
        self.email_config = email_config

    async def submit(self, body: Any, *, client_id: str) -> ContactResponse:
        """Process a submission from ``client_id``.

        Raises:
            ValidationAppError: With every field error in ``details.errors``.
            RateLimitAppError: Budget for the window exhausted.
            ConfigurationAppError: Email key not configured.
            UpstreamAuthAppError / UpstreamAppError /
            UpstreamUnavailableAppError: Email delivery failed.
        """
        validation = validate_contact(body)
        if not validation.valid:
            raise ValidationAppError(
                code="contact_validation_failed",
                message="Validation failed",
                details={"errors": list(validation.errors)},
            )

        budget = await enforce_rate_limit(
            self.limiter,
            scope=CONTACT_SCOPE,
            client_id=client_id,
            config=self.rate_limit_config,
        )

        client = self.email_provider()
        contact = validation.data

        for message in (
            contact_notification(contact, self.email_config),
            contact_confirmation(contact, self.email_config),
        ):
            result = await client.send(message)
            raise_for_upstream(
                result,
                upstream="email",
                error_message=DELIVERY_FAILED_MESSAGE,
                unavailable_message=DELIVERY_FAILED_MESSAGE,
            )

        logger.info("contact.submitted", extra={"remaining": budget.remaining})
        return ContactResponse(message=SUCCESS_MESSAGE, remaining=budget.remaining)
