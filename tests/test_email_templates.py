"""Tests for HTML email templates."""

from edge_api.core.config import EmailSettings
from edge_api.services.email_templates import (
    STARTER_KIT_RESOURCES,
    contact_confirmation,
    contact_notification,
    subscriber_notification,
    welcome_email,
)
from edge_api.utils.validators import ContactPayload

CONFIG = EmailSettings(
    api_key="k",
    sender_name="Acme",
    admin_email="admin@example.com",
    booking_url="https://cal.com/acme",
    site_url="https://acme.example/",
)

CONTACT = ContactPayload(
    name='Tom & "Jerry"',
    email="tom@example.com",
    message="Need help with <automation>",
    subject="Hello",
)


def test_notification_escapes_values_and_replies_to_submitter():
    message = contact_notification(CONTACT, CONFIG, sent_at="2024-01-01T00:00:00+00:00")

    assert message.to_email == "admin@example.com"
    assert message.reply_to_email == "tom@example.com"
    assert message.reply_to_name == 'Tom & "Jerry"'
    assert "Tom &amp; &quot;Jerry&quot;" in message.html
    assert "&lt;automation&gt;" in message.html
    assert "2024-01-01T00:00:00+00:00" in message.html


def test_confirmation_goes_to_submitter():
    message = contact_confirmation(CONTACT, CONFIG)

    assert message.to_email == "tom@example.com"
    assert message.to_name == 'Tom & "Jerry"'
    assert "Thank you for contacting Acme!" in message.html


def test_welcome_email_lists_resources_and_links():
    message = welcome_email("jane@example.com", CONFIG)

    assert message.to_email == "jane@example.com"
    for title, _ in STARTER_KIT_RESOURCES:
        assert title in message.html
    assert 'href="https://cal.com/acme"' in message.html
    assert 'href="https://acme.example/unsubscribe"' in message.html


def test_subscriber_notification_uses_system_sender():
    message = subscriber_notification("jane@example.com", "footer", CONFIG)

    assert message.subject == "New Subscriber: jane@example.com"
    assert message.sender_name == "Acme System"
    assert "footer" in message.html
