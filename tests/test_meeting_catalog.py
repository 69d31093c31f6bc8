# tests/test_meeting_catalog.py
from datetime import datetime, timedelta, timezone

import pytest

from app.schemas.meeting import ZoomMeeting
from app.services.meeting_catalog import MeetingCatalog, summarize_sessions
from app.services.zoom_client import ZoomClientError, ZoomToken


class FakeZoomClient:
    """
    Stub ZoomClient returning canned payloads per path.
    """

    def __init__(self, payloads=None, raise_error: bool = False):
        self.payloads = payloads or {}
        self.raise_error = raise_error

    async def get_json(self, path: str, params=None):
        if self.raise_error:
            raise ZoomClientError("Simulated Zoom failure")
        return self.payloads[path]

    async def get_token(self):
        if self.raise_error:
            raise ZoomClientError("invalid_client")
        return ZoomToken(
            access_token="abc",
            token_type="bearer",
            expires_in=3600,
            scope="meeting:read:admin",
            expires_at=datetime.now(tz=timezone.utc) + timedelta(hours=1),
        )


def test_summarize_sessions_counts_upcoming_and_completed():
    now = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)
    sessions = [
        ZoomMeeting.model_validate({"id": 1, "topic": "Past", "start_time": "2025-01-09T10:00:00Z"}),
        ZoomMeeting.model_validate({"id": 2, "topic": "Future", "start_time": "2025-01-11T10:00:00Z"}),
        ZoomMeeting.model_validate({"id": 3, "topic": None, "type": 3}),
    ]

    summary = summarize_sessions(sessions, total_records=3, now=now)

    assert summary.success is True
    assert summary.upcoming == 1
    assert summary.completed == 2
    assert [s.id for s in summary.summaries] == ["1", "2", "3"]
    assert summary.summaries[2].topic == ""


def test_summarize_sessions_empty_list():
    summary = summarize_sessions([], total_records=0, empty_message="No meetings found")

    assert summary.success is True
    assert summary.message == "No meetings found"
    assert summary.summaries == []


@pytest.mark.asyncio
async def test_list_meetings_parses_payload():
    fake = FakeZoomClient(
        {
            "/users/me/meetings": {
                "total_records": 1,
                "meetings": [
                    {
                        "uuid": "abc==",
                        "id": 85746352143,
                        "topic": "Weekly Team Sync",
                        "type": 2,
                        "duration": 30,
                        "start_time": "2020-01-06T10:00:00Z",
                        "join_url": "https://zoom.us/j/85746352143",
                    }
                ],
            }
        }
    )

    listing = await MeetingCatalog(fake).list_meetings()

    assert listing.success is True
    assert listing.total_records == 1
    assert listing.completed == 1
    assert listing.summaries[0].id == "85746352143"
    assert listing.summaries[0].duration == 30


@pytest.mark.asyncio
async def test_list_meetings_embeds_provider_error():
    listing = await MeetingCatalog(FakeZoomClient(raise_error=True)).list_meetings()

    assert listing.success is False
    assert listing.error == "Failed to fetch meetings: Simulated Zoom failure"


@pytest.mark.asyncio
async def test_list_webinars_empty():
    fake = FakeZoomClient({"/users/me/webinars": {"total_records": 0, "webinars": []}})

    listing = await MeetingCatalog(fake).list_webinars()

    assert listing.success is True
    assert listing.message == "No webinars found"


@pytest.mark.asyncio
async def test_get_webinar_duration_falls_back_to_default():
    ok = FakeZoomClient({"/webinars/1": {"duration": 90}})
    zero = FakeZoomClient({"/webinars/1": {"duration": 0}})
    broken = FakeZoomClient(raise_error=True)

    assert await MeetingCatalog(ok).get_webinar_duration("1", default=180) == 90
    assert await MeetingCatalog(zero).get_webinar_duration("1", default=180) == 180
    assert await MeetingCatalog(broken).get_webinar_duration("1", default=180) == 180


@pytest.mark.asyncio
async def test_get_meeting_details_returns_raw_payload():
    payload = {"id": 123, "topic": "Retro", "settings": {"auto_recording": "cloud"}}
    details = await MeetingCatalog(FakeZoomClient({"/meetings/123": payload})).get_meeting_details("123")

    assert details.success is True
    assert details.meeting == payload


@pytest.mark.asyncio
async def test_connection_test_success_and_failure():
    ok = await MeetingCatalog(FakeZoomClient()).test_connection()
    failed = await MeetingCatalog(FakeZoomClient(raise_error=True)).test_connection()

    assert ok.success is True
    assert ok.message == "Zoom API connection successful"
    assert ok.expires_in == 3600
    assert failed.success is False
    assert failed.error == "Zoom API connection failed: invalid_client"


@pytest.mark.asyncio
async def test_list_meetings_with_malformed_entry_reports_failure():
    fake = FakeZoomClient({"/users/me/meetings": {"meetings": [{"topic": "No id"}]}})

    listing = await MeetingCatalog(fake).list_meetings()

    assert listing.success is False
    assert listing.error.startswith("Failed to fetch meetings:")


@pytest.mark.asyncio
async def test_fetch_webinars_converts_validation_errors():
    fake = FakeZoomClient({"/users/me/webinars": {"webinars": [{"id": 1, "duration": "soon"}]}})

    with pytest.raises(ZoomClientError):
        await MeetingCatalog(fake).fetch_webinars()
