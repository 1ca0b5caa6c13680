from __future__ import annotations

from fastapi import APIRouter

from edge_api.core.dependencies import (
    ClientIpDep,
    EmailClientProviderDep,
    JsonBodyDep,
    RateLimiterDep,
    SettingsDep,
)
from edge_api.schemas.forms import ContactResponse
from edge_api.services.contact_service import ContactService

router = APIRouter(tags=["Forms"])


@router.post("/contact", response_model=ContactResponse)
async def contact(
    body: JsonBodyDep,
    settings: SettingsDep,
    limiter: RateLimiterDep,
    email_provider: EmailClientProviderDep,
    client_id: ClientIpDep,
) -> ContactResponse:
    """Submit the contact form.

    Body: ``{"name", "email", "message", "subject"?}``. Answers 400 with
    every validation error in ``details``, 429 with ``retryAfter`` once the
    per-IP budget is spent, 500 when email is not configured.
    """
    service = ContactService(
        limiter=limiter,
        rate_limit_config=settings.rate_limit,
        email_provider=email_provider,
        email_config=settings.email,
    )
    return await service.submit(body, client_id=client_id)
