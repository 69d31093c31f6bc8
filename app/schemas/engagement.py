# app/schemas/engagement.py
from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.attendance import AttendanceRecord


class AnalysisWindow(BaseModel):
    """
    Time frame of one engagement analysis.

    `anchor` is the zero point every minute offset is measured from. It is
    resolved once per analysis (earliest parsable join time, see
    `app.services.anchor_resolver`).
    """

    total_minutes: int = Field(..., gt=0, description="Length of the analysed session.")
    bucket_width_minutes: int = Field(5, gt=0, description="Width of each time bucket.")
    anchor: datetime | None = Field(None, description="Resolved window start (UTC, naive).")


class EngagementSeries(BaseModel):
    """
    Per-bucket series, aligned index by index with `labels`.
    """

    labels: list[str] = Field(
        default_factory=list,
        description="Bucket start offsets from window start, formatted HH:MM.",
        examples=[["00:00", "00:05", "00:10"]],
    )
    active_participants: list[int] = Field(
        default_factory=list,
        description="Average concurrent participants per bucket (floor division).",
    )
    engagement_rate: list[int] = Field(
        default_factory=list,
        description="active_participants * 100 // total_participants, per bucket.",
    )
    users_joined: list[int] = Field(
        default_factory=list,
        description="Participants whose clamped join minute falls in the bucket.",
    )
    users_left: list[int] = Field(
        default_factory=list,
        description="Participants whose clamped leave minute falls in the bucket.",
    )
    peak_active_users: list[int] = Field(
        default_factory=list,
        description="Highest per-minute concurrency observed inside the bucket.",
    )


class ParticipantDetail(BaseModel):
    user_id: str = ""
    name: str = ""
    email: str = ""
    join_time: str | None = None
    leave_time: str | None = None
    duration_seconds: int = 0
    duration_minutes: float = 0.0
    join_minute: int = Field(..., description="Clamped join offset in minutes.")
    leave_minute: int = Field(..., description="Clamped leave offset in minutes.")
    join_segment: int = Field(..., description="Index of the bucket containing join_minute.")
    leave_segment: int = Field(..., description="Index of the bucket containing leave_minute.")
    attentiveness_score: str = ""


class UserTimeline(BaseModel):
    user_id: str = ""
    name: str = ""
    email: str = ""
    join_time: str | None = None
    leave_time: str | None = None
    duration_minutes: float = 0.0
    join_minute: int
    leave_minute: int
    presence_by_segment: list[int] = Field(
        default_factory=list,
        description="1 if the participant overlaps the bucket, 0 otherwise.",
    )


class EngagementReport(BaseModel):
    """
    Result of one engagement analysis.

    Always returned for data-quality problems: when no attendance records are
    supplied, `success` is False and `error` explains why, with every series
    left empty.
    """

    success: bool = Field(..., description="False when no usable input was supplied.")
    error: str | None = Field(None, description="Explicit error marker for failed analyses.")

    interval_minutes: int = Field(..., description="Bucket width used for the series.")
    total_minutes: int = Field(..., description="Analysis window length in minutes.")
    window_start: datetime | None = Field(
        None, description="Resolved anchor every offset is relative to."
    )
    window: AnalysisWindow | None = Field(
        None, description="Window length, bucket width and anchor the report was computed over."
    )

    total_participants: int = 0
    average_participation_minutes: float = 0.0
    max_participation_minutes: float = 0.0
    min_participation_minutes: float = 0.0
    total_meeting_minutes: float = 0.0

    peak_concurrent_users: int = 0
    final_active_users: int = 0
    total_joined: int = 0
    total_left: int = 0
    skipped_records: int = Field(
        0,
        description="Records excluded from the timeline because a timestamp did not parse.",
    )

    engagement_over_time: EngagementSeries = Field(default_factory=EngagementSeries)
    participant_details: list[ParticipantDetail] = Field(default_factory=list)
    user_timelines: list[UserTimeline] = Field(default_factory=list)


class EngagementRequest(BaseModel):
    """
    Body of POST /analytics/engagement: run the engine on caller-supplied data.
    """

    records: list[AttendanceRecord] = Field(
        default_factory=list,
        description="Fully drained participant list for one session.",
    )
    total_minutes: int = Field(60, gt=0, description="Length of the session in minutes.")
    interval_minutes: int = Field(5, gt=0, description="Bucket width in minutes.")
