"""Transactional email interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from edge_api.adapters.upstream import UpstreamResult


@dataclass(frozen=True)
class EmailMessage:
    """One outgoing HTML email.

    Attributes:
        to_email: Recipient address.
        subject: Subject line.
        html: Rendered HTML body.
        to_name: Optional recipient display name.
        reply_to_email: Optional Reply-To address (defaults to the sender).
        reply_to_name: Optional Reply-To display name.
        sender_name: Optional override of the configured sender name.
    """

    to_email: str
    subject: str
    html: str
    to_name: str | None = None
    reply_to_email: str | None = None
    reply_to_name: str | None = None
    sender_name: str | None = None


class AbstractEmailClient(ABC):
    """Interface for transactional email providers."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> UpstreamResult[None]:
        """Send one email.

        Returns:
            UpstreamResult[None]: ``success`` when the provider accepted the
            message, the classified failure otherwise. Never raises for
            provider failures.
        """
        raise NotImplementedError
