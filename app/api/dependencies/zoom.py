# app/api/dependencies/zoom.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status

from app.core.config import get_settings
from app.services.analytics_service import AnalyticsService
from app.services.meeting_catalog import MeetingCatalog
from app.services.transcript_service import TranscriptService
from app.services.zoom_client import ZoomClient, ZoomClientError, get_zoom_client

logger = logging.getLogger(__name__)


def get_optional_zoom_client() -> Optional[ZoomClient]:
    """
    Shared ZoomClient, or None when Zoom credentials are not configured.

    Analytics endpoints still answer without credentials (with fallback data),
    so they depend on this instead of `require_zoom_client`.
    """
    try:
        return get_zoom_client()
    except ZoomClientError as exc:
        logger.warning("Zoom client unavailable: %s", exc)
        return None


def require_zoom_client(
    zoom_client: Optional[ZoomClient] = Depends(get_optional_zoom_client),
) -> ZoomClient:
    """
    Dependency for endpoints that are meaningless without Zoom access.

    Responds 503 when the credentials are missing.
    """
    if zoom_client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Zoom API credentials are not configured.",
        )
    return zoom_client


def get_meeting_catalog(zoom_client: ZoomClient = Depends(require_zoom_client)) -> MeetingCatalog:
    return MeetingCatalog(zoom_client)


def get_transcript_service(
    zoom_client: ZoomClient = Depends(require_zoom_client),
) -> TranscriptService:
    settings = get_settings()
    return TranscriptService(
        zoom_client,
        download_timeout_seconds=settings.TRANSCRIPT_DOWNLOAD_TIMEOUT_SECONDS,
    )


def get_analytics_service(
    zoom_client: Optional[ZoomClient] = Depends(get_optional_zoom_client),
) -> AnalyticsService:
    settings = get_settings()
    transcripts = None
    if zoom_client is not None:
        transcripts = TranscriptService(
            zoom_client,
            download_timeout_seconds=settings.TRANSCRIPT_DOWNLOAD_TIMEOUT_SECONDS,
        )
    return AnalyticsService(
        zoom_client,
        default_meeting_duration=settings.DEFAULT_MEETING_DURATION_MINUTES,
        default_webinar_duration=settings.DEFAULT_WEBINAR_DURATION_MINUTES,
        page_size=settings.PARTICIPANTS_PAGE_SIZE,
        transcript_service=transcripts,
    )
