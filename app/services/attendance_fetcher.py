# app/services/attendance_fetcher.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.schemas.attendance import AttendanceRecord, ParticipantsPage
from app.services.zoom_client import ZoomClient, ZoomClientError

logger = logging.getLogger(__name__)


class AttendanceFetcher:
    """
    Retrieves the complete participant list of a past meeting or webinar.

    The Zoom report endpoints are paginated through `next_page_token`; every
    page is drained before returning, so the analytics engine always sees the
    full attendance list of a session:

        GET /report/meetings/{meeting_id}/participants
        GET /past_webinars/{webinar_id}/participants

    Entries that do not validate as AttendanceRecord are logged and skipped;
    a page whose envelope does not validate raises ZoomClientError. Errors
    from the client are propagated; callers decide whether to
    fall back to other data.
    """

    def __init__(self, zoom_client: ZoomClient, page_size: int = 300) -> None:
        self.zoom = zoom_client
        self.page_size = page_size

    async def fetch_meeting_participants(self, meeting_id: str) -> List[AttendanceRecord]:
        return await self._drain(f"/report/meetings/{meeting_id}/participants")

    async def fetch_webinar_participants(self, webinar_id: str) -> List[AttendanceRecord]:
        return await self._drain(f"/past_webinars/{webinar_id}/participants")

    async def _drain(self, path: str) -> List[AttendanceRecord]:
        records: List[AttendanceRecord] = []
        next_page_token: Optional[str] = None
        seen_tokens: set[str] = set()
        pages = 0
        invalid = 0

        while True:
            params: Dict[str, Any] = {"page_size": self.page_size}
            if next_page_token:
                params["next_page_token"] = next_page_token

            payload = await self.zoom.get_json(path, params=params)
            try:
                page = ParticipantsPage.model_validate(payload)
            except ValidationError as exc:
                raise ZoomClientError(f"Unexpected participants payload from {path}: {exc}") from exc

            for item in page.participants:
                try:
                    records.append(AttendanceRecord.model_validate(item))
                except ValidationError as exc:
                    invalid += 1
                    logger.warning("Skipping invalid participant entry on %s: %s", path, exc)
            pages += 1

            logger.debug(
                "%s page %d: %d participants (total_records=%d, next_page_token=%r)",
                path,
                pages,
                len(page.participants),
                page.total_records,
                page.next_page_token,
            )

            next_page_token = page.next_page_token or None
            if next_page_token is None:
                break
            if next_page_token in seen_tokens:
                # Zoom has been seen to repeat the last token; stop instead of looping.
                logger.warning("Repeated next_page_token on %s; stopping pagination", path)
                break
            seen_tokens.add(next_page_token)

        logger.info(
            "Fetched %d participants from %s in %d page(s), %d invalid entries skipped",
            len(records),
            path,
            pages,
            invalid,
        )
        return records
