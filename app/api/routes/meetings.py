# app/api/routes/meetings.py
from http import HTTPStatus
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from app.api.dependencies.zoom import get_analytics_service, get_meeting_catalog
from app.core.config import get_settings
from app.schemas.analytics import SessionAnalytics
from app.schemas.meeting import ConnectionTestResult, MeetingDetails, SessionList
from app.services.analytics_service import AnalyticsService
from app.services.meeting_catalog import MeetingCatalog

router = APIRouter(tags=["Meetings"])


@router.get(
    "/connection-test",
    response_model=ConnectionTestResult,
    status_code=HTTPStatus.OK,
    summary="Verify Zoom Server-to-Server OAuth credentials",
    description=(
        "Requests a fresh access token with the configured account credentials.\n\n"
        "A failed token exchange is reported with `success=false` and the provider "
        "error rather than an HTTP error status."
    ),
    responses={
        503: {"description": "Zoom credentials are not configured."},
    },
)
async def connection_test(
    catalog: MeetingCatalog = Depends(get_meeting_catalog),
) -> ConnectionTestResult:
    return await catalog.test_connection()


@router.get(
    "/meetings",
    response_model=SessionList,
    status_code=HTTPStatus.OK,
    summary="List scheduled meetings of the Zoom account",
    description=(
        "Returns an overview of `/users/me/meetings`: upcoming and completed counts "
        "plus one summary per meeting."
    ),
    responses={
        200: {
            "description": "Meeting overview (success=false when Zoom could not be reached).",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "error": None,
                        "message": None,
                        "total_records": 1,
                        "upcoming": 0,
                        "completed": 1,
                        "summaries": [
                            {
                                "id": "85746352143",
                                "topic": "Weekly Team Sync",
                                "start_time": "2025-01-06T10:00:00Z",
                                "duration": 30,
                                "join_url": "https://zoom.us/j/85746352143",
                                "type": 2,
                            }
                        ],
                    }
                }
            },
        },
        503: {"description": "Zoom credentials are not configured."},
    },
)
async def list_meetings(
    catalog: MeetingCatalog = Depends(get_meeting_catalog),
) -> SessionList:
    return await catalog.list_meetings()


@router.get(
    "/meetings/{meeting_id}",
    response_model=MeetingDetails,
    status_code=HTTPStatus.OK,
    summary="Get the raw Zoom payload of one meeting",
    responses={
        503: {"description": "Zoom credentials are not configured."},
    },
)
async def get_meeting(
    meeting_id: str = Path(..., description="Zoom meeting id."),
    catalog: MeetingCatalog = Depends(get_meeting_catalog),
) -> MeetingDetails:
    return await catalog.get_meeting_details(meeting_id)


@router.get(
    "/meetings/{meeting_id}/analytics",
    response_model=SessionAnalytics,
    status_code=HTTPStatus.OK,
    summary="Engagement analytics for a past meeting",
    description=(
        "Drains the meeting's participant report and runs the engagement engine "
        "over the configured meeting window, bucketed by `interval_minutes`.\n\n"
        "When participant data is unavailable the response carries synthetic "
        "numbers, flagged by `data_source` (`simulated` or `basic_fallback`). "
        "The transcript locator is attached when a cloud recording transcript exists."
    ),
    responses={
        422: {"description": "interval_minutes is not a positive integer."},
    },
)
async def get_meeting_analytics(
    meeting_id: str = Path(..., description="Zoom meeting id or UUID."),
    interval_minutes: Optional[int] = Query(
        None,
        gt=0,
        description="Bucket width in minutes. Defaults to DEFAULT_INTERVAL_MINUTES.",
        examples=[5],
    ),
    service: AnalyticsService = Depends(get_analytics_service),
) -> SessionAnalytics:
    interval = interval_minutes or get_settings().DEFAULT_INTERVAL_MINUTES
    return await service.get_meeting_analytics(meeting_id, interval)
