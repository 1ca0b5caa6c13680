from __future__ import annotations

from fastapi import APIRouter

from edge_api.core.dependencies import SettingsDep
from edge_api.schemas.health import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check(settings: SettingsDep) -> HealthResponse:
    """Health check endpoint.

    Returns a simple status response to verify the API is operational.
    Used by load balancers and monitoring systems to determine service health.
    """

    return HealthResponse(status="ok", message=f"{settings.app.service_name} is running")
