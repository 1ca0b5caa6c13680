"""HTML email templates.

Payloads are sanitized before they get here; values are still HTML-escaped
because they are rendered into markup.
"""

from __future__ import annotations

from datetime import datetime, timezone
from html import escape

from edge_api.adapters.email.base import EmailMessage
from edge_api.core.config import EmailSettings
from edge_api.utils.validators import ContactPayload

_WELCOME_STYLE = """
    body { font-family: Arial, sans-serif; background: #080a0f; color: #f2f4fa; padding: 40px 20px; }
    .container { max-width: 600px; margin: 0 auto; border-radius: 24px; padding: 40px; border: 1px solid rgba(255,255,255,0.1); }
    .resource { border-radius: 12px; padding: 20px; margin: 15px 0; border-left: 3px solid #4a6cf7; }
    .cta { display: inline-block; background: #4a6cf7; color: #fff; padding: 14px 28px; border-radius: 12px; text-decoration: none; }
    .footer { margin-top: 40px; font-size: 13px; color: rgba(242,244,250,0.6); }
"""

STARTER_KIT_RESOURCES = (
    ("5 GPT Prompt Templates", "Ready-to-use prompts for content, support, analysis, code review and meeting summaries."),
    ("Automation Playbook", "Step-by-step guide to finding automation opportunities and shipping a first workflow."),
    ("AI Tools Comparison Cheat Sheet", "Side-by-side comparison of AI tools with pricing and use cases."),
    ("Workflow Optimization Checklist", "Audit current processes and spot quick wins for automation."),
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def contact_confirmation(contact: ContactPayload, config: EmailSettings) -> EmailMessage:
    """Acknowledgement sent to the person who submitted the contact form."""

    html = (
        f"<h2>Thank you for contacting {escape(config.sender_name)}!</h2>"
        f"<p>Hi {escape(contact.name)},</p>"
        "<p>We received your message and will get back to you within 24 hours.</p>"
        "<p><strong>Your Message:</strong></p>"
        f"<p>{escape(contact.message)}</p>"
        f"<p>Best regards,<br>{escape(config.sender_name)} Team</p>"
    )
    return EmailMessage(
        to_email=contact.email,
        to_name=contact.name,
        subject=f"We received your inquiry - {config.sender_name}",
        html=html,
    )


def contact_notification(
    contact: ContactPayload,
    config: EmailSettings,
    *,
    sent_at: str | None = None,
) -> EmailMessage:
    """Submission forwarded to the admin inbox; replies go to the submitter."""

    html = (
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>Name:</strong> {escape(contact.name)}</p>"
        f"<p><strong>Email:</strong> {escape(contact.email)}</p>"
        f"<p><strong>Subject:</strong> {escape(contact.subject)}</p>"
        "<p><strong>Message:</strong></p>"
        f"<p>{escape(contact.message)}</p>"
        f"<p><em>Sent at: {escape(sent_at or _now_iso())}</em></p>"
    )
    return EmailMessage(
        to_email=config.admin_email,
        to_name="Admin",
        subject=f"New Contact Form Submission: {contact.subject}",
        html=html,
        reply_to_email=contact.email,
        reply_to_name=contact.name,
    )


def welcome_email(email: str, config: EmailSettings) -> EmailMessage:
    """Lead-magnet welcome email with the starter kit and a booking link."""

    resources = "".join(
        f'<div class="resource"><h3>{escape(title)}</h3><p>{escape(blurb)}</p></div>'
        for title, blurb in STARTER_KIT_RESOURCES
    )
    html = (
        "<!DOCTYPE html><html><head>"
        f"<style>{_WELCOME_STYLE}</style>"
        '</head><body><div class="container">'
        f"<h1>Welcome to {escape(config.sender_name)}!</h1>"
        "<p>Thank you for downloading the AI Automation Starter Kit.</p>"
        "<p><strong>Here's what's inside your kit:</strong></p>"
        f"{resources}"
        "<p><strong>Ready to take it further?</strong></p>"
        "<p>Book a free 30-minute strategy call and we'll help you find the "
        "highest-impact automation opportunities for your business.</p>"
        f'<a href="{escape(config.booking_url)}" class="cta">Book Your Free Strategy Call</a>'
        '<div class="footer">'
        f"<p>{escape(config.sender_name)}</p>"
        f'<p>Questions? Reply to this email or visit <a href="{escape(config.site_url)}">'
        f"{escape(config.site_url)}</a></p>"
        f'<p><a href="{escape(config.site_url.rstrip("/"))}/unsubscribe">Unsubscribe</a></p>'
        "</div></div></body></html>"
    )
    return EmailMessage(
        to_email=email,
        subject="Your AI Automation Starter Kit is Ready!",
        html=html,
    )


def subscriber_notification(
    email: str,
    source: str,
    config: EmailSettings,
    *,
    sent_at: str | None = None,
) -> EmailMessage:
    """Admin notice about a new subscriber."""

    html = (
        "<h2>New Lead Magnet Subscriber</h2>"
        f"<p><strong>Email:</strong> {escape(email)}</p>"
        f"<p><strong>Source:</strong> {escape(source)}</p>"
        f"<p><strong>Timestamp:</strong> {escape(sent_at or _now_iso())}</p>"
    )
    return EmailMessage(
        to_email=config.admin_email,
        subject=f"New Subscriber: {email}",
        html=html,
        sender_name=f"{config.sender_name} System",
    )
