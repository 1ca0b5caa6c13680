"""Subscription service: welcome email plus a detached admin notification."""

from __future__ import annotations

import logging
from typing import Any, Callable

from edge_api.adapters.email.base import AbstractEmailClient
from edge_api.adapters.rate_limit.base import AbstractRateLimiter
from edge_api.core.background import BackgroundTaskRunner
from edge_api.core.config import EmailSettings, RateLimitSettings
from edge_api.core.errors import ValidationAppError
from edge_api.core.rate_limit import SUBSCRIBE_SCOPE, enforce_rate_limit
from edge_api.schemas.forms import SubscribeResponse
from edge_api.services.email_templates import subscriber_notification, welcome_email
from edge_api.services.upstream_errors import raise_for_upstream
from edge_api.utils.validators import SubscribePayload, validate_subscribe

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Success! Check your inbox for the starter kit."
WELCOME_FAILED_MESSAGE = "Failed to send welcome email. Please try again."


class SubscribeService:
    """Handle one newsletter/lead-magnet subscription.

    The welcome email is part of the response path; the admin notification is
    scheduled on the background runner and its outcome never reaches the
    client.
    """

    def __init__(
        self,
        *,
        limiter: AbstractRateLimiter,
        rate_limit_config: RateLimitSettings,
        email_provider: Callable[[], AbstractEmailClient],
        email_config: EmailSettings,
        background: BackgroundTaskRunner,
    ) -> None:
        self.limiter = limiter
        self.rate_limit_config = rate_limit_config
        self.email_provider = email_provider
        self.email_config = email_config
        self.background = background

    async def subscribe(self, body: Any, *, client_id: str) -> SubscribeResponse:
        """Register a subscriber from ``client_id``.

        Raises:
            ValidationAppError: Email missing or malformed.
            RateLimitAppError: Budget for the window exhausted.
            ConfigurationAppError: Email key not configured.
            UpstreamAuthAppError / UpstreamAppError /
            UpstreamUnavailableAppError: Welcome email failed.
        """
        validation = validate_subscribe(body)
        if not validation.valid:
            raise ValidationAppError(code="invalid_subscribe_request", message=validation.error)

        await enforce_rate_limit(
            self.limiter,
            scope=SUBSCRIBE_SCOPE,
            client_id=client_id,
            config=self.rate_limit_config,
        )

        client = self.email_provider()
        subscriber = validation.data

        result = await client.send(welcome_email(subscriber.email, self.email_config))
        raise_for_upstream(
            result,
            upstream="email",
            error_message=WELCOME_FAILED_MESSAGE,
            unavailable_message=WELCOME_FAILED_MESSAGE,
            http_status=500,
        )

        self.background.schedule(
            self._notify_admin(client, subscriber),
            name="subscribe.admin_notification",
        )

        logger.info("subscribe.completed", extra={"source": subscriber.source})
        return SubscribeResponse(message=SUCCESS_MESSAGE)

    async def _notify_admin(self, client: AbstractEmailClient, subscriber: SubscribePayload) -> None:
        result = await client.send(
            subscriber_notification(subscriber.email, subscriber.source, self.email_config)
        )
        if not result.ok:
            logger.warning(
                "subscribe.admin_notification_failed",
                extra={"outcome": result.outcome.value, "upstream_status": result.status_code},
            )
