# tests/test_engagement_report.py
from datetime import datetime

import pytest

from app.schemas.engagement import EngagementReport
from app.services.engagement_report import (
    NO_DATA_MESSAGE,
    compute_engagement_report,
    round_half_up,
)
from app.services.time_bucketizer import EngagementConfigurationError


def _at(minute: int) -> str:
    return f"2024-01-01T10:{minute:02d}:00Z"


@pytest.fixture
def three_participants(make_record):
    """
    A present for the whole 10-minute window, B briefly at the start,
    C from minute 6 until after the window ends.
    """
    return [
        make_record("A", _at(0), _at(9), duration=540),
        make_record("B", _at(2), _at(4), duration=120),
        make_record("C", _at(6), _at(12), duration=360),
    ]


def test_report_for_three_participants(three_participants):
    report = compute_engagement_report(three_participants, 10, 5)

    assert isinstance(report, EngagementReport)
    assert report.success is True
    assert report.error is None
    assert report.window_start == datetime(2024, 1, 1, 10, 0, 0)

    series = report.engagement_over_time
    assert series.labels == ["00:00", "00:05", "00:10"]
    assert series.active_participants == [1, 1, 0]
    assert series.peak_active_users == [2, 2, 0]
    assert series.engagement_rate == [33, 33, 0]
    assert series.users_joined == [2, 1, 0]
    assert series.users_left == [1, 2, 0]

    assert report.total_participants == 3
    assert report.peak_concurrent_users == 2
    assert report.final_active_users == 2
    assert report.total_joined == 3
    assert report.total_left == 3
    assert report.skipped_records == 0


def test_report_participant_details_and_timelines(three_participants):
    report = compute_engagement_report(three_participants, 10, 5)

    details = {d.name: d for d in report.participant_details}
    assert details["C"].join_minute == 6
    assert details["C"].leave_minute == 9
    assert details["C"].join_segment == 1
    assert details["C"].leave_segment == 1
    assert details["C"].duration_minutes == 6.0
    assert details["B"].email == "b@example.com"

    timelines = {t.name: t for t in report.user_timelines}
    assert timelines["A"].presence_by_segment == [1, 1, 0]
    assert timelines["B"].presence_by_segment == [1, 0, 0]
    assert timelines["C"].presence_by_segment == [0, 1, 0]


def test_report_duration_statistics_are_rounded_half_up(make_record):
    records = [
        make_record("A", _at(0), _at(5), duration=100),
        make_record("B", _at(0), _at(5), duration=50),
        make_record("C", _at(0), _at(5), duration=0),
    ]

    report = compute_engagement_report(records, 10, 5)

    # 150s / 3 = 50s = 0.8333 min
    assert report.average_participation_minutes == 0.83
    assert report.max_participation_minutes == 1.67
    assert report.min_participation_minutes == 0.0
    assert report.total_meeting_minutes == 2.5


def test_empty_list_returns_failure_report():
    report = compute_engagement_report([], 60, 5)

    assert report.success is False
    assert report.error == NO_DATA_MESSAGE
    assert report.engagement_over_time.labels == []
    assert report.participant_details == []


def test_none_list_returns_failure_report():
    report = compute_engagement_report(None, 60, 5)

    assert report.success is False
    assert report.error == NO_DATA_MESSAGE


@pytest.mark.parametrize("total_minutes,width", [(60, 0), (60, -1), (0, 5)])
def test_invalid_window_raises_configuration_error(make_record, total_minutes, width):
    records = [make_record("A", _at(0), _at(5))]

    with pytest.raises(EngagementConfigurationError):
        compute_engagement_report(records, total_minutes, width)


def test_unparsable_record_is_skipped_but_still_counted(make_record):
    """
    A bad timestamp drops the record from the timeline, while it still
    counts towards the participant total and duration statistics.
    """
    records = [
        make_record("A", _at(0), _at(9), duration=600),
        make_record("B", "not-a-time", _at(9), duration=300),
    ]

    report = compute_engagement_report(records, 10, 5)

    assert report.success is True
    assert report.skipped_records == 1
    assert report.total_participants == 2
    assert report.total_joined == 1
    assert [d.name for d in report.participant_details] == ["A"]
    assert report.engagement_over_time.engagement_rate == [50, 50, 0]
    assert report.total_meeting_minutes == 15.0


def test_join_equals_leave_equals_anchor(make_record):
    records = [make_record("A", _at(0), _at(0))]

    report = compute_engagement_report(records, 10, 5)

    assert report.participant_details[0].join_minute == 0
    assert report.participant_details[0].leave_minute == 0
    assert report.user_timelines[0].presence_by_segment == [1, 0, 0]
    assert report.engagement_over_time.peak_active_users == [1, 0, 0]
    assert report.final_active_users == 0


def test_report_is_idempotent(three_participants):
    first = compute_engagement_report(three_participants, 10, 5)
    second = compute_engagement_report(three_participants, 10, 5)

    assert first.model_dump_json() == second.model_dump_json()


def test_fallback_anchor_is_pinned_by_clock(make_record):
    records = [make_record("A", "bad", "bad", duration=60)]
    clock = lambda: datetime(2024, 1, 1, 12, 0, 0)  # noqa: E731

    first = compute_engagement_report(records, 30, 5, now=clock)
    second = compute_engagement_report(records, 30, 5, now=clock)

    assert first.window_start == datetime(2024, 1, 1, 11, 30, 0)
    assert first == second
    assert first.skipped_records == 1
    assert first.engagement_over_time.active_participants == [0] * 7


def test_peak_concurrent_matches_busiest_minute(make_record):
    records = [
        make_record("A", _at(0), _at(59)),
        make_record("B", _at(10), _at(20)),
        make_record("C", _at(15), _at(30)),
        make_record("D", _at(18), _at(19)),
    ]

    report = compute_engagement_report(records, 60, 10)

    assert report.peak_concurrent_users == 4
    assert max(report.engagement_over_time.peak_active_users) == 4


def test_round_half_up():
    assert round_half_up(0.125) == 0.13
    assert round_half_up(2.5, places=0) == 3.0
    assert round_half_up(1.004) == 1.0


def test_report_carries_its_analysis_window(three_participants):
    report = compute_engagement_report(three_participants, 10, 5)

    assert report.window is not None
    assert report.window.total_minutes == 10
    assert report.window.bucket_width_minutes == 5
    assert report.window.anchor == datetime(2024, 1, 1, 10, 0)
    assert report.window.anchor == report.window_start


def test_failure_report_window_has_no_anchor():
    report = compute_engagement_report([], 60, 15)

    assert report.window.total_minutes == 60
    assert report.window.bucket_width_minutes == 15
    assert report.window.anchor is None
