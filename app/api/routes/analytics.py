# app/api/routes/analytics.py
from http import HTTPStatus

from fastapi import APIRouter, HTTPException

from app.schemas.engagement import EngagementReport, EngagementRequest
from app.services.engagement_report import compute_engagement_report
from app.services.time_bucketizer import EngagementConfigurationError

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
)


@router.post(
    "/engagement",
    response_model=EngagementReport,
    status_code=HTTPStatus.OK,
    summary="Run the engagement engine on caller-supplied attendance records",
    description=(
        "Computes the time-bucketed engagement report for a list of participant "
        "records (Zoom participant report shape).\n\n"
        "- Offsets are measured from the earliest parsable join time.\n"
        "- Join/leave minutes are clamped to `[0, total_minutes - 1]`.\n"
        "- An empty record list yields `success=false` with "
        "`error=\"No participant data available\"`.\n"
        "- Records whose timestamps do not parse are counted in `skipped_records` "
        "and left out of the timeline."
    ),
    responses={
        200: {
            "description": "Report computed (check `success` for data problems).",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "error": None,
                        "interval_minutes": 5,
                        "total_minutes": 10,
                        "window_start": "2024-01-01T10:00:00",
                        "total_participants": 3,
                        "peak_concurrent_users": 2,
                        "final_active_users": 2,
                        "total_joined": 3,
                        "total_left": 3,
                        "skipped_records": 0,
                        "engagement_over_time": {
                            "labels": ["00:00", "00:05", "00:10"],
                            "active_participants": [1, 1, 0],
                            "engagement_rate": [33, 33, 0],
                            "users_joined": [2, 1, 0],
                            "users_left": [1, 2, 0],
                            "peak_active_users": [2, 2, 0],
                        },
                    }
                }
            },
        },
        400: {"description": "Invalid analysis window or bucket width."},
        422: {"description": "Validation error in the request body."},
    },
)
async def compute_engagement(payload: EngagementRequest) -> EngagementReport:
    try:
        return compute_engagement_report(
            payload.records,
            payload.total_minutes,
            payload.interval_minutes,
        )
    except EngagementConfigurationError as exc:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=str(exc)) from exc
