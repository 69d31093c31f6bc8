# app/services/meeting_catalog.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import ValidationError

from app.schemas.meeting import (
    ConnectionTestResult,
    MeetingDetails,
    SessionList,
    SessionSummary,
    ZoomMeeting,
    ZoomSession,
    ZoomWebinar,
)
from app.services.zoom_client import ZoomClient, ZoomClientError

logger = logging.getLogger(__name__)

SessionT = TypeVar("SessionT", bound=ZoomSession)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_sessions(
    model: Type[SessionT], payload: Dict[str, Any], key: str
) -> List[SessionT]:
    try:
        return [model.model_validate(item) for item in payload.get(key) or []]
    except ValidationError as exc:
        raise ZoomClientError(f"Unexpected {key} payload from Zoom: {exc}") from exc


def summarize_sessions(
    sessions: Sequence[ZoomSession],
    total_records: int,
    now: Optional[datetime] = None,
    empty_message: str = "No sessions found",
) -> SessionList:
    """
    Build the listing overview: upcoming/completed counts plus one summary
    per session. Sessions without a start time count as completed.
    """
    if not sessions:
        return SessionList(success=True, total_records=total_records, message=empty_message)

    now = _as_utc(now or datetime.now(tz=timezone.utc))
    upcoming = sum(
        1 for session in sessions if session.start_time and _as_utc(session.start_time) > now
    )

    return SessionList(
        success=True,
        total_records=total_records,
        upcoming=upcoming,
        completed=len(sessions) - upcoming,
        summaries=[
            SessionSummary(
                id=session.id,
                topic=session.topic,
                start_time=session.start_time,
                duration=session.duration,
                join_url=session.join_url,
                type=session.type,
            )
            for session in sessions
        ],
    )


class MeetingCatalog:
    """
    Read-only access to the account's scheduled meetings and webinars.

    Provider failures are not propagated from the listing helpers: they are
    embedded as `success=False` with the error message so the dashboard can
    render an empty state.
    """

    def __init__(self, zoom_client: ZoomClient) -> None:
        self.zoom = zoom_client

    async def fetch_meetings(self) -> List[ZoomMeeting]:
        payload = await self.zoom.get_json("/users/me/meetings")
        return _parse_sessions(ZoomMeeting, payload, "meetings")

    async def fetch_webinars(self) -> List[ZoomWebinar]:
        payload = await self.zoom.get_json("/users/me/webinars")
        return _parse_sessions(ZoomWebinar, payload, "webinars")

    async def list_meetings(self) -> SessionList:
        try:
            payload = await self.zoom.get_json("/users/me/meetings")
            meetings = _parse_sessions(ZoomMeeting, payload, "meetings")
        except ZoomClientError as exc:
            logger.error("Failed to fetch meetings: %s", exc)
            return SessionList(success=False, error=f"Failed to fetch meetings: {exc}")

        return summarize_sessions(
            meetings,
            total_records=payload.get("total_records") or len(meetings),
            empty_message="No meetings found",
        )

    async def list_webinars(self) -> SessionList:
        try:
            payload = await self.zoom.get_json("/users/me/webinars")
            webinars = _parse_sessions(ZoomWebinar, payload, "webinars")
        except ZoomClientError as exc:
            logger.error("Failed to fetch webinars: %s", exc)
            return SessionList(success=False, error=f"Failed to fetch webinars: {exc}")

        return summarize_sessions(
            webinars,
            total_records=payload.get("total_records") or len(webinars),
            empty_message="No webinars found",
        )

    async def get_meeting_details(self, meeting_id: str) -> MeetingDetails:
        try:
            payload = await self.zoom.get_json(f"/meetings/{meeting_id}")
        except ZoomClientError as exc:
            logger.error("Failed to fetch meeting %s: %s", meeting_id, exc)
            return MeetingDetails(success=False, error=f"Failed to fetch meeting details: {exc}")
        return MeetingDetails(success=True, meeting=payload)

    async def get_webinar_duration(self, webinar_id: str, default: int) -> int:
        """
        Scheduled duration of a webinar in minutes, or `default` when Zoom
        cannot be reached or reports no positive duration.
        """
        try:
            payload = await self.zoom.get_json(f"/webinars/{webinar_id}")
        except ZoomClientError as exc:
            logger.warning("Could not fetch duration of webinar %s (%s); using %d", webinar_id, exc, default)
            return default

        duration = payload.get("duration")
        if isinstance(duration, int) and duration > 0:
            return duration
        return default

    async def test_connection(self) -> ConnectionTestResult:
        try:
            token = await self.zoom.get_token()
        except ZoomClientError as exc:
            return ConnectionTestResult(success=False, error=f"Zoom API connection failed: {exc}")

        return ConnectionTestResult(
            success=True,
            message="Zoom API connection successful",
            token_type=token.token_type,
            expires_in=token.expires_in,
            scope=token.scope,
        )
