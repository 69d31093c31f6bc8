# app/schemas/attendance.py
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AttendanceRecord(BaseModel):
    """
    One participant-session as reported by the Zoom participants report.

    Join/leave timestamps are kept as the raw provider strings: the analytics
    engine decides whether they parse, so an unparsable value never prevents
    the record itself from being loaded (it still counts for duration
    statistics and for the participant total).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field("", description="Participant identifier for this session.")
    user_id: str = Field("", description="Zoom user identifier (may be empty).")
    name: str = Field("", description="Display name (may be empty).", examples=["Jane Doe"])
    user_email: str = Field("", description="Email address (may be empty).")
    join_time: str | None = Field(
        None,
        description="Join timestamp in provider format (yyyy-MM-ddTHH:mm:ssZ).",
        examples=["2025-01-10T10:00:00Z"],
    )
    leave_time: str | None = Field(
        None,
        description="Leave timestamp in provider format (yyyy-MM-ddTHH:mm:ssZ).",
        examples=["2025-01-10T10:45:00Z"],
    )
    duration_seconds: int = Field(
        0,
        alias="duration",
        ge=0,
        description=(
            "Provider-reported attendance in seconds. Not required to equal "
            "leave_time - join_time; only used for duration statistics."
        ),
        examples=[2700],
    )
    attentiveness_score: str | None = Field(
        None,
        description="Opaque attentiveness score, passed through untouched.",
    )

    registrant_id: str | None = None
    status: str | None = None
    internal_user: bool | None = None
    customer_key: str | None = None
    participant_user_id: str | None = None

    @field_validator("id", "user_id", "name", "user_email", mode="before")
    @classmethod
    def _blank_if_missing(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value

    @field_validator("duration_seconds", mode="before")
    @classmethod
    def _non_negative_duration(cls, value: Any) -> Any:
        # Zoom occasionally omits the duration or reports negative values for
        # failover sessions; both are treated as zero seconds attended.
        if value is None:
            return 0
        if isinstance(value, (int, float)) and value < 0:
            return 0
        return value


class ParticipantsPage(BaseModel):
    """
    A single page of the participants report endpoints.
    """

    model_config = ConfigDict(extra="ignore")

    participants: list[Any] = Field(
        default_factory=list,
        description="Raw participant entries; each is validated as an AttendanceRecord by the fetcher.",
    )
    page_count: int = 0
    page_size: int = 0
    total_records: int = 0
    next_page_token: str | None = None

    @field_validator("participants", mode="before")
    @classmethod
    def _empty_if_missing(cls, value: Any) -> Any:
        return value or []

    @field_validator("page_count", "page_size", "total_records", mode="before")
    @classmethod
    def _zero_if_missing(cls, value: Any) -> Any:
        return value or 0
