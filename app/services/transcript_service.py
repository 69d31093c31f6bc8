# app/services/transcript_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from pydantic import ValidationError

from app.schemas.transcript import RecordingFile, TranscriptContent, TranscriptLocation
from app.services.zoom_client import ZoomClient, ZoomClientError

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 1000


@dataclass(frozen=True)
class DownloadStrategy:
    """
    One way of requesting a transcript file. Strategies are tried in order
    until one returns a non-empty body.
    """

    name: str
    headers: Dict[str, str] = field(default_factory=dict)
    authenticate: bool = True
    follow_redirects: bool = False


DEFAULT_DOWNLOAD_STRATEGIES: tuple[DownloadStrategy, ...] = (
    DownloadStrategy(
        name="authorized_vtt",
        headers={"Accept": "text/vtt, text/plain, */*"},
    ),
    DownloadStrategy(
        name="anonymous_browser",
        headers={
            "Accept": "text/vtt, text/plain, */*",
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        },
        authenticate=False,
        follow_redirects=True,
    ),
    DownloadStrategy(
        name="minimal",
        headers={"Accept": "*/*"},
        authenticate=False,
        follow_redirects=True,
    ),
)


class TranscriptService:
    """
    Locates and downloads meeting transcripts from Zoom cloud recordings.

    The transcript is independent from the engagement analytics; it is only
    attached to analytics responses as an opaque payload.
    """

    def __init__(
        self,
        zoom_client: ZoomClient,
        strategies: Sequence[DownloadStrategy] = DEFAULT_DOWNLOAD_STRATEGIES,
        download_timeout_seconds: float = 120.0,
    ) -> None:
        self.zoom = zoom_client
        self.strategies = tuple(strategies)
        self.download_timeout_seconds = download_timeout_seconds

    async def locate_transcript(self, meeting_id: str) -> TranscriptLocation:
        """
        Find the TRANSCRIPT file among the meeting's cloud recordings.
        """
        try:
            payload = await self.zoom.get_json(f"/meetings/{meeting_id}/recordings")
        except ZoomClientError as exc:
            logger.warning("Failed to list recordings for meeting %s: %s", meeting_id, exc)
            return TranscriptLocation(
                success=False,
                meeting_id=meeting_id,
                error=f"Failed to get transcript: {exc}",
            )

        try:
            files = [RecordingFile.model_validate(item) for item in payload.get("recording_files") or []]
        except ValidationError as exc:
            logger.warning("Unexpected recordings payload for meeting %s: %s", meeting_id, exc)
            return TranscriptLocation(
                success=False,
                meeting_id=meeting_id,
                error=f"Failed to get transcript: {exc}",
            )

        transcript = next((f for f in files if f.file_type == "TRANSCRIPT"), None)

        if transcript is None or not transcript.download_url:
            return TranscriptLocation(
                success=False,
                meeting_id=meeting_id,
                error="No transcript file available for this meeting",
            )

        return TranscriptLocation(
            success=True,
            meeting_id=meeting_id,
            transcript_available=True,
            download_url=transcript.download_url,
            file_id=transcript.id,
            file_type=transcript.file_type,
            file_extension=transcript.file_extension,
        )

    async def download_transcript(
        self,
        meeting_id: str,
        download_url: Optional[str] = None,
    ) -> TranscriptContent:
        """
        Download the transcript text, locating it first when no URL is given.

        Each strategy is attempted in order. The first one that returns a
        2xx response with a non-blank body wins. If an attempt answers with
        a redirect and no later strategy produces content, the redirect
        location is reported so the client can fetch it directly.
        """
        if download_url is None:
            location = await self.locate_transcript(meeting_id)
            if not location.success or not location.download_url:
                return TranscriptContent(
                    success=False,
                    meeting_id=meeting_id,
                    transcript_available=False,
                    error=location.error,
                )
            download_url = location.download_url

        redirect_url: Optional[str] = None
        last_status: Optional[int] = None
        last_error: Optional[str] = None

        for strategy in self.strategies:
            try:
                resp = await self.zoom.download(
                    download_url,
                    headers=strategy.headers,
                    authenticate=strategy.authenticate,
                    follow_redirects=strategy.follow_redirects,
                    timeout_seconds=self.download_timeout_seconds,
                )
            except ZoomClientError as exc:
                logger.warning("Transcript download strategy %s failed: %s", strategy.name, exc)
                last_error = str(exc)
                continue

            last_status = resp.status_code

            if resp.status_code // 100 == 3:
                redirect_url = resp.headers.get("location") or redirect_url
                continue

            if resp.status_code // 100 == 2 and resp.text.strip():
                content = resp.text
                logger.info(
                    "Downloaded transcript for meeting %s via %s (%d chars)",
                    meeting_id,
                    strategy.name,
                    len(content),
                )
                return TranscriptContent(
                    success=True,
                    meeting_id=meeting_id,
                    content=content,
                    content_length=len(content),
                    has_content=True,
                    content_preview=content[:PREVIEW_LENGTH],
                    download_method=strategy.name,
                    http_status=resp.status_code,
                )

            logger.warning(
                "Transcript download strategy %s returned status %s without content",
                strategy.name,
                resp.status_code,
            )

        if redirect_url:
            return TranscriptContent(
                success=True,
                meeting_id=meeting_id,
                download_method="redirect",
                redirect_url=redirect_url,
                http_status=last_status,
            )

        error = f"HTTP {last_status}" if last_status is not None else f"Download failed: {last_error}"
        return TranscriptContent(
            success=False,
            meeting_id=meeting_id,
            error=error,
            http_status=last_status,
        )
