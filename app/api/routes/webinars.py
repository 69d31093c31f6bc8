# app/api/routes/webinars.py
from http import HTTPStatus
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from app.api.dependencies.zoom import get_analytics_service, get_meeting_catalog
from app.core.config import get_settings
from app.schemas.analytics import SessionAnalytics
from app.schemas.meeting import SessionList
from app.services.analytics_service import AnalyticsService
from app.services.meeting_catalog import MeetingCatalog

router = APIRouter(
    prefix="/webinars",
    tags=["Webinars"],
)


@router.get(
    "",
    response_model=SessionList,
    status_code=HTTPStatus.OK,
    summary="List webinars of the Zoom account",
    description=(
        "Returns an overview of `/users/me/webinars`: upcoming and completed counts "
        "plus one summary per webinar."
    ),
    responses={
        503: {"description": "Zoom credentials are not configured."},
    },
)
async def list_webinars(
    catalog: MeetingCatalog = Depends(get_meeting_catalog),
) -> SessionList:
    return await catalog.list_webinars()


@router.get(
    "/{webinar_id}/analytics",
    response_model=SessionAnalytics,
    status_code=HTTPStatus.OK,
    summary="Engagement analytics for a past webinar",
    description=(
        "Drains the webinar's participant list and runs the engagement engine over "
        "the webinar's scheduled duration (DEFAULT_WEBINAR_DURATION_MINUTES when "
        "unknown).\n\n"
        "Synthetic numbers are returned, flagged by `data_source`, when participant "
        "data is unavailable."
    ),
    responses={
        422: {"description": "interval_minutes is not a positive integer."},
    },
)
async def get_webinar_analytics(
    webinar_id: str = Path(..., description="Zoom webinar id."),
    interval_minutes: Optional[int] = Query(
        None,
        gt=0,
        description="Bucket width in minutes. Defaults to DEFAULT_INTERVAL_MINUTES.",
        examples=[5],
    ),
    service: AnalyticsService = Depends(get_analytics_service),
) -> SessionAnalytics:
    interval = interval_minutes or get_settings().DEFAULT_INTERVAL_MINUTES
    return await service.get_webinar_analytics(webinar_id, interval)
