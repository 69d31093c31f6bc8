# app/schemas/meeting.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ZoomSession(BaseModel):
    """
    Fields shared by Zoom meetings and webinars as returned by the
    /users/me/meetings and /users/me/webinars listings.
    """

    model_config = ConfigDict(extra="ignore")

    uuid: str | None = None
    id: str = Field(..., description="Zoom numeric id, kept as a string.", examples=["85746352143"])
    topic: str = Field("", description="Session topic.")
    type: int | None = Field(None, description="Zoom session type code.")
    duration: int = Field(0, description="Scheduled duration in minutes.")
    start_time: datetime | None = Field(
        None, description="Scheduled start time (absent for no-fixed-time sessions)."
    )
    timezone: str | None = None
    join_url: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("topic", mode="before")
    @classmethod
    def _topic_blank_if_missing(cls, value: Any) -> Any:
        return value or ""

    @field_validator("duration", mode="before")
    @classmethod
    def _duration_zero_if_missing(cls, value: Any) -> Any:
        return value or 0


class ZoomMeeting(ZoomSession):
    pass


class ZoomWebinar(ZoomSession):
    host_id: str | None = None
    created_at: datetime | None = None
    is_simulive: bool = False


class SessionSummary(BaseModel):
    id: str
    topic: str
    start_time: datetime | None = None
    duration: int = 0
    join_url: str | None = None
    type: int | None = None


class SessionList(BaseModel):
    """
    Overview returned by GET /meetings and GET /webinars.
    """

    success: bool = Field(..., description="False when the listing could not be fetched.")
    error: str | None = None
    message: str | None = None
    total_records: int = Field(0, description="total_records reported by Zoom.")
    upcoming: int = Field(0, description="Sessions whose start time is in the future.")
    completed: int = Field(0, description="Sessions that already started.")
    summaries: list[SessionSummary] = Field(default_factory=list)


class MeetingDetails(BaseModel):
    success: bool
    error: str | None = None
    meeting: dict | None = Field(
        None,
        description="Raw Zoom meeting payload (GET /meetings/{meeting_id}).",
    )


class ConnectionTestResult(BaseModel):
    success: bool
    message: str | None = None
    error: str | None = None
    token_type: str | None = None
    expires_in: int | None = None
    scope: str | None = None
