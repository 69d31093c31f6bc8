# app/services/analytics_service.py
from __future__ import annotations

import logging
from typing import Optional

from app.schemas.analytics import DataSource, SessionAnalytics, SessionType
from app.services.attendance_fetcher import AttendanceFetcher
from app.services.engagement_report import compute_engagement_report
from app.services.meeting_catalog import MeetingCatalog
from app.services.synthetic_engagement import (
    BASIC_MEETING_PROFILE,
    BASIC_WEBINAR_PROFILE,
    WEBINAR_PROFILE,
    meeting_profile_for_topic,
    simulate_engagement,
)
from app.services.transcript_service import TranscriptService
from app.services.zoom_client import ZoomClient, ZoomClientError

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Builds dashboard analytics for meetings and webinars.

    Real participant data always goes through the engagement engine. When it
    cannot be fetched, the service degrades in two steps, mirroring what the
    dashboard can still show:

    0) A meeting transcript was located but participants failed -> a
       success=False response that still carries the transcript.
    1) Session metadata is available -> seeded synthetic data shaped after
       the session (data_source=simulated).
    2) Nothing is available (or no Zoom client is configured) -> generic
       synthetic data (data_source=basic_fallback).
    """

    def __init__(
        self,
        zoom_client: Optional[ZoomClient],
        default_meeting_duration: int = 60,
        default_webinar_duration: int = 180,
        page_size: int = 300,
        transcript_service: Optional[TranscriptService] = None,
    ) -> None:
        self.zoom = zoom_client
        self.default_meeting_duration = default_meeting_duration
        self.default_webinar_duration = default_webinar_duration

        self.fetcher: Optional[AttendanceFetcher] = None
        self.catalog: Optional[MeetingCatalog] = None
        self.transcripts: Optional[TranscriptService] = transcript_service
        if zoom_client is not None:
            self.fetcher = AttendanceFetcher(zoom_client, page_size=page_size)
            self.catalog = MeetingCatalog(zoom_client)
            if self.transcripts is None:
                self.transcripts = TranscriptService(zoom_client)

    async def get_meeting_analytics(self, meeting_id: str, interval_minutes: int) -> SessionAnalytics:
        """
        Engagement analytics for a past meeting with its transcript locator
        attached. The participants report carries no meeting length, so the
        configured default window is used.
        """
        if self.fetcher is None or self.transcripts is None:
            return self._basic_meeting_fallback(meeting_id, interval_minutes)

        transcript = await self.transcripts.locate_transcript(meeting_id)

        try:
            records = await self.fetcher.fetch_meeting_participants(meeting_id)
        except ZoomClientError as exc:
            logger.error("Error getting participants of meeting %s: %s", meeting_id, exc)
            if transcript.success:
                # Zoom is reachable for this meeting; report the failure and keep the transcript.
                return SessionAnalytics(
                    session_id=meeting_id,
                    session_type=SessionType.MEETING,
                    success=False,
                    error="Analytics failed but transcript available",
                    interval_minutes=interval_minutes,
                    transcript=transcript,
                    transcript_available=transcript.transcript_available,
                    transcript_download_url=transcript.download_url,
                )
            return await self._simulated_meeting(meeting_id, interval_minutes)

        duration = self.default_meeting_duration
        report = compute_engagement_report(records, duration, interval_minutes)

        return SessionAnalytics(
            session_id=meeting_id,
            session_type=SessionType.MEETING,
            success=report.success,
            error=report.error,
            message=(
                "Real participant data analyzed with individual user tracking"
                if transcript.success
                else "Real participant data analyzed (transcript unavailable)"
            ),
            data_source=DataSource.ZOOM_API,
            interval_minutes=interval_minutes,
            session_duration=duration,
            report=report,
            transcript=transcript,
            transcript_available=transcript.transcript_available,
            transcript_download_url=transcript.download_url,
            transcript_error=transcript.error,
        )

    async def get_webinar_analytics(self, webinar_id: str, interval_minutes: int) -> SessionAnalytics:
        """
        Engagement analytics for a past webinar over its scheduled duration.
        """
        if self.fetcher is None or self.catalog is None:
            return self._basic_webinar_fallback(webinar_id, interval_minutes)

        try:
            records = await self.fetcher.fetch_webinar_participants(webinar_id)
        except ZoomClientError as exc:
            logger.error("Error getting participants of webinar %s: %s", webinar_id, exc)
            return await self._simulated_webinar(webinar_id, interval_minutes)

        duration = await self.catalog.get_webinar_duration(
            webinar_id, default=self.default_webinar_duration
        )
        report = compute_engagement_report(records, duration, interval_minutes)

        return SessionAnalytics(
            session_id=webinar_id,
            session_type=SessionType.WEBINAR,
            success=report.success,
            error=report.error,
            message="Real participant data analyzed with real-time join/leave tracking",
            data_source=DataSource.ZOOM_API,
            interval_minutes=interval_minutes,
            session_duration=duration,
            report=report,
        )

    async def _simulated_meeting(self, meeting_id: str, interval_minutes: int) -> SessionAnalytics:
        if self.catalog is None:
            return self._basic_meeting_fallback(meeting_id, interval_minutes)
        try:
            meetings = await self.catalog.fetch_meetings()
        except ZoomClientError as exc:
            logger.error("Error listing meetings for simulated analytics: %s", exc)
            return self._basic_meeting_fallback(meeting_id, interval_minutes)

        meeting = next((m for m in meetings if m.id == meeting_id), None)
        if meeting is None:
            return SessionAnalytics(
                session_id=meeting_id,
                session_type=SessionType.MEETING,
                success=False,
                error="Meeting not found",
                interval_minutes=interval_minutes,
            )

        duration = meeting.duration or self.default_meeting_duration
        report = simulate_engagement(
            meeting_id, duration, interval_minutes, meeting_profile_for_topic(meeting.topic)
        )
        return SessionAnalytics(
            session_id=meeting_id,
            session_type=SessionType.MEETING,
            success=True,
            message="Simulated analytics (real participant data not available)",
            note="Real participant data is only available for recent meetings via Zoom API",
            data_source=DataSource.SIMULATED,
            interval_minutes=interval_minutes,
            session_duration=duration,
            topic=meeting.topic,
            start_time=meeting.start_time,
            report=report,
        )

    async def _simulated_webinar(self, webinar_id: str, interval_minutes: int) -> SessionAnalytics:
        if self.catalog is None:
            return self._basic_webinar_fallback(webinar_id, interval_minutes)
        try:
            webinars = await self.catalog.fetch_webinars()
        except ZoomClientError as exc:
            logger.error("Error listing webinars for simulated analytics: %s", exc)
            return self._basic_webinar_fallback(webinar_id, interval_minutes)

        webinar = next((w for w in webinars if w.id == webinar_id), None)
        if webinar is None:
            return SessionAnalytics(
                session_id=webinar_id,
                session_type=SessionType.WEBINAR,
                success=False,
                error="Webinar not found",
                interval_minutes=interval_minutes,
            )

        duration = webinar.duration or self.default_webinar_duration
        report = simulate_engagement(webinar_id, duration, interval_minutes, WEBINAR_PROFILE)
        return SessionAnalytics(
            session_id=webinar_id,
            session_type=SessionType.WEBINAR,
            success=True,
            message="Simulated analytics (real participant data not available)",
            note="Real participant data is only available for recent webinars via Zoom API",
            data_source=DataSource.SIMULATED,
            interval_minutes=interval_minutes,
            session_duration=duration,
            topic=webinar.topic,
            start_time=webinar.start_time,
            report=report,
        )

    def _basic_meeting_fallback(self, meeting_id: str, interval_minutes: int) -> SessionAnalytics:
        duration = self.default_meeting_duration
        return SessionAnalytics(
            session_id=meeting_id,
            session_type=SessionType.MEETING,
            success=True,
            message="Basic simulated analytics (fallback data)",
            data_source=DataSource.BASIC_FALLBACK,
            interval_minutes=interval_minutes,
            session_duration=duration,
            report=simulate_engagement(meeting_id, duration, interval_minutes, BASIC_MEETING_PROFILE),
        )

    def _basic_webinar_fallback(self, webinar_id: str, interval_minutes: int) -> SessionAnalytics:
        duration = self.default_webinar_duration
        return SessionAnalytics(
            session_id=webinar_id,
            session_type=SessionType.WEBINAR,
            success=True,
            message="Basic simulated webinar analytics (fallback data)",
            data_source=DataSource.BASIC_FALLBACK,
            interval_minutes=interval_minutes,
            session_duration=duration,
            report=simulate_engagement(webinar_id, duration, interval_minutes, BASIC_WEBINAR_PROFILE),
        )
