# app/schemas/analytics.py
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from app.schemas.engagement import EngagementReport
from app.schemas.transcript import TranscriptLocation


class DataSource(str, Enum):
    """
    Where the numbers of a SessionAnalytics response come from.
    """

    ZOOM_API = "zoom_api"
    SIMULATED = "simulated"
    BASIC_FALLBACK = "basic_fallback"


class SessionType(str, Enum):
    MEETING = "meeting"
    WEBINAR = "webinar"


class SessionAnalytics(BaseModel):
    """
    Dashboard payload for one meeting or webinar: the engagement report plus
    (for meetings) the transcript locator attached as an opaque payload.
    """

    session_id: str = Field(..., examples=["85746352143"])
    session_type: SessionType
    success: bool
    error: str | None = None
    message: str | None = None
    note: str | None = None
    data_source: DataSource | None = Field(
        None,
        description=(
            "zoom_api for real participant data; simulated/basic_fallback when "
            "the numbers were synthesised because real data was unavailable."
        ),
    )
    interval_minutes: int
    session_duration: int | None = Field(
        None, description="Window length (minutes) the report was computed over."
    )
    topic: str | None = None
    start_time: datetime | None = None

    report: EngagementReport | None = None

    transcript: TranscriptLocation | None = None
    transcript_available: bool = False
    transcript_download_url: str | None = None
    transcript_error: str | None = None
