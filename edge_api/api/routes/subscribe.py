from __future__ import annotations

from fastapi import APIRouter

from edge_api.core.dependencies import (
    BackgroundDep,
    ClientIpDep,
    EmailClientProviderDep,
    JsonBodyDep,
    RateLimiterDep,
    SettingsDep,
)
from edge_api.schemas.forms import SubscribeResponse
from edge_api.services.subscribe_service import SubscribeService

router = APIRouter(tags=["Forms"])


@router.post("/subscribe", response_model=SubscribeResponse)
async def subscribe(
    body: JsonBodyDep,
    settings: SettingsDep,
    limiter: RateLimiterDep,
    email_provider: EmailClientProviderDep,
    background: BackgroundDep,
    client_id: ClientIpDep,
) -> SubscribeResponse:
    """Subscribe to the newsletter and receive the starter kit.

    Body: ``{"email", "source"?}``.
    """
    service = SubscribeService(
        limiter=limiter,
        rate_limit_config=settings.rate_limit,
        email_provider=email_provider,
        email_config=settings.email,
        background=background,
    )
    return await service.subscribe(body, client_id=client_id)
