"""Transactional email adapters."""

from edge_api.adapters.email.base import AbstractEmailClient, EmailMessage
from edge_api.adapters.email.factory import create_email_client
from edge_api.adapters.email.sendgrid_client import SendGridEmailClient

__all__ = [
    "AbstractEmailClient",
    "EmailMessage",
    "SendGridEmailClient",
    "create_email_client",
]
