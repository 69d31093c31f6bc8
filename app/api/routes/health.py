# app/api/routes/health.py
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.api.dependencies.zoom import get_optional_zoom_client
from app.core.config import get_settings
from app.services.zoom_client import ZoomClient

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """
    Liveness plus the configuration facts the dashboard needs to pick between
    real Zoom data and fallback analytics.
    """

    status: str = Field(..., examples=["ok"])
    app_name: str = Field(..., examples=["Zoom Engagement Dashboard"])
    environment: str = Field(..., description="APP_ENV of the running service.", examples=["local"])
    zoom_configured: bool = Field(
        ...,
        description=(
            "True when Zoom Server-to-Server OAuth credentials are set. When False, "
            "analytics endpoints answer with basic fallback data and the listing / "
            "transcript endpoints respond 503."
        ),
    )
    default_interval_minutes: int = Field(
        ..., description="Bucket width used when a request does not pass interval_minutes."
    )
    timestamp_utc: datetime


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check for the engagement dashboard backend",
    description=(
        "Reports that the service is up and whether Zoom credentials are configured.\n\n"
        "No Zoom API call is made: credentials are checked for presence only. Use "
        "`GET /connection-test` to verify that they are accepted by Zoom."
    ),
    responses={
        200: {
            "description": "Service is up.",
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "app_name": "Zoom Engagement Dashboard",
                        "environment": "local",
                        "zoom_configured": True,
                        "default_interval_minutes": 5,
                        "timestamp_utc": "2025-01-01T10:30:00Z",
                    }
                }
            },
        }
    },
)
async def health_check(
    zoom_client: Optional[ZoomClient] = Depends(get_optional_zoom_client),
) -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="ok",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        zoom_configured=zoom_client is not None,
        default_interval_minutes=settings.DEFAULT_INTERVAL_MINUTES,
        timestamp_utc=datetime.now(tz=timezone.utc),
    )
