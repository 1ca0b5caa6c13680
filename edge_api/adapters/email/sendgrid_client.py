"""SendGrid v3 mail-send adapter."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from edge_api.adapters.email.base import AbstractEmailClient, EmailMessage
from edge_api.adapters.upstream import UpstreamResult, classify_http_response

logger = logging.getLogger(__name__)

MAIL_SEND_PATH = "/v3/mail/send"


class SendGridEmailClient(AbstractEmailClient):
    """Send HTML email through the SendGrid v3 API.

    A fresh ``httpx.AsyncClient`` is opened per call; the API is called a
    handful of times per form submission at most.
    """

    def __init__(
        self,
        api_key: str,
        *,
        sender_email: str,
        sender_name: str,
        base_url: str = "https://api.sendgrid.com",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: SendGrid API key (sent as a bearer token).
            sender_email: From address, also the default Reply-To.
            sender_name: From display name.
            base_url: API base URL.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport (tests use ``MockTransport``).
        """
        self._api_key = api_key
        self._sender_email = sender_email
        self._sender_name = sender_name
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        """Build the SendGrid request body for ``message``."""

        recipient: dict[str, str] = {"email": message.to_email}
        if message.to_name:
            recipient["name"] = message.to_name

        payload: dict[str, Any] = {
            "personalizations": [{"to": [recipient], "subject": message.subject}],
            "from": {
                "email": self._sender_email,
                "name": message.sender_name or self._sender_name,
            },
            "content": [{"type": "text/html", "value": message.html}],
        }
        if message.reply_to_email:
            reply_to: dict[str, str] = {"email": message.reply_to_email}
            if message.reply_to_name:
                reply_to["name"] = message.reply_to_name
            payload["reply_to"] = reply_to
        return payload

    async def send(self, message: EmailMessage) -> UpstreamResult[None]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    MAIL_SEND_PATH,
                    json=self.build_payload(message),
                    headers=headers,
                )
        except httpx.TimeoutException:
            logger.warning("email.upstream_timeout", extra={"timeout_s": self._timeout})
            return UpstreamResult.timeout("Email service timed out")
        except httpx.RequestError as exc:
            logger.error("email.upstream_unreachable", extra={"error_type": type(exc).__name__})
            return UpstreamResult.network_error("Failed to connect to email service")

        result = classify_http_response(response, parse_json=False)
        if not result.ok:
            logger.error(
                "email.upstream_error",
                extra={
                    "upstream_status": result.status_code,
                    "error_msg": result.message,
                    "outcome": result.outcome.value,
                },
            )
        return result
