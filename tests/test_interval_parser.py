# tests/test_interval_parser.py
from datetime import datetime

from app.services.interval_parser import ClampedInterval, clamp_interval

ANCHOR = datetime(2024, 1, 1, 10, 0, 0)


def test_interval_inside_window_is_unchanged(make_record):
    record = make_record("A", "2024-01-01T10:02:00Z", "2024-01-01T10:04:30Z")

    assert clamp_interval(record, ANCHOR, 10) == ClampedInterval(join_minute=2, leave_minute=4)


def test_interval_is_clamped_to_window_bounds(make_record):
    """
    Offsets before the anchor pull to 0; offsets past the window pull to T-1.
    """
    record = make_record("C", "2024-01-01T09:50:00Z", "2024-01-01T10:12:00Z")

    assert clamp_interval(record, ANCHOR, 10) == ClampedInterval(join_minute=0, leave_minute=9)


def test_interval_join_after_leave_is_kept(make_record):
    """
    Each end is clamped independently; a join after the leave survives as-is.
    """
    record = make_record("X", "2024-01-01T10:20:00Z", "2024-01-01T10:05:00Z")

    interval = clamp_interval(record, ANCHOR, 10)

    assert interval == ClampedInterval(join_minute=9, leave_minute=5)
    assert interval.join_minute > interval.leave_minute


def test_unparsable_timestamps_return_none(make_record):
    assert clamp_interval(make_record("A", "bad", "2024-01-01T10:05:00Z"), ANCHOR, 10) is None
    assert clamp_interval(make_record("B", "2024-01-01T10:05:00Z", None), ANCHOR, 10) is None
