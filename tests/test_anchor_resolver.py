# tests/test_anchor_resolver.py
from datetime import datetime

from app.services.anchor_resolver import resolve_anchor
from app.services.timestamps import TimestampFormat


def test_anchor_is_earliest_join_time(make_record):
    records = [
        make_record("B", "2024-01-01T10:07:00Z", "2024-01-01T10:20:00Z"),
        make_record("A", "2024-01-01T10:02:00Z", "2024-01-01T10:30:00Z"),
        make_record("C", "2024-01-01T10:15:00Z", "2024-01-01T10:30:00Z"),
    ]

    assert resolve_anchor(records, 60) == datetime(2024, 1, 1, 10, 2, 0)


def test_anchor_skips_unparsable_join_times(make_record):
    """
    Invalid join times are ignored, not treated as the earliest value.
    """
    records = [
        make_record("A", "garbage", "2024-01-01T10:30:00Z"),
        make_record("B", None, "2024-01-01T10:30:00Z"),
        make_record("C", "2024-01-01T10:15:00Z", "2024-01-01T10:30:00Z"),
    ]

    assert resolve_anchor(records, 60) == datetime(2024, 1, 1, 10, 15, 0)


def test_anchor_falls_back_to_now_minus_window(make_record):
    """
    When no join time parses, the window is assumed to have just ended.
    """
    records = [make_record("A", "garbage", "garbage")]
    fixed_now = datetime(2024, 1, 1, 12, 0, 0)

    anchor = resolve_anchor(records, 45, now=lambda: fixed_now)

    assert anchor == datetime(2024, 1, 1, 11, 15, 0)


def test_anchor_uses_injected_format(make_record):
    records = [make_record("A", "2024/01/01 09:30", "2024/01/01 10:00")]
    fmt = TimestampFormat(pattern="%Y/%m/%d %H:%M")

    assert resolve_anchor(records, 60, fmt) == datetime(2024, 1, 1, 9, 30)
