# tests/test_synthetic_engagement.py
from datetime import datetime

from app.services.synthetic_engagement import (
    BASIC_WEBINAR_PROFILE,
    MEETING_PROFILE,
    WEBINAR_PROFILE,
    meeting_profile_for_topic,
    simulate_engagement,
)

NOW = datetime(2025, 1, 10, 12, 0, 0)


def test_simulation_is_reproducible_per_session():
    """
    The same session id always renders the same numbers.
    """
    first = simulate_engagement("85746352143", 60, 5, MEETING_PROFILE, now=NOW)
    second = simulate_engagement("85746352143", 60, 5, MEETING_PROFILE, now=NOW)

    assert first == second


def test_simulation_series_follow_bucket_labels():
    report = simulate_engagement("w-1", 180, 15, WEBINAR_PROFILE, now=NOW)
    series = report.engagement_over_time

    assert series.labels[0] == "00:00"
    assert len(series.labels) == 13
    for values in (
        series.active_participants,
        series.engagement_rate,
        series.users_joined,
        series.users_left,
        series.peak_active_users,
    ):
        assert len(values) == len(series.labels)

    assert 50 <= report.total_participants < 150
    assert series.users_joined[0] == report.total_participants
    assert min(series.engagement_rate) >= WEBINAR_PROFILE.rate_floor
    assert min(series.active_participants) >= 1


def test_basic_profile_has_fixed_audience():
    report = simulate_engagement("anything", 180, 5, BASIC_WEBINAR_PROFILE, now=NOW)

    assert report.success is True
    assert report.total_participants == 85
    assert len(report.participant_details) == 85
    assert report.participant_details[0].user_id == "basic_attendee_0"
    assert report.participant_details[0].join_time == "2025-01-10T09:00:00Z"
    assert report.participant_details[0].leave_time == "2025-01-10T12:00:00Z"


def test_meeting_profile_depends_on_topic():
    assert meeting_profile_for_topic("Sprint Review").base_participants == 8
    assert meeting_profile_for_topic("Team sync").base_participants == 8
    assert meeting_profile_for_topic("One on one with Sam").base_participants == 2
    assert meeting_profile_for_topic("All hands") is MEETING_PROFILE
