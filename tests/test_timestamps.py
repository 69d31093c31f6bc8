# tests/test_timestamps.py
from datetime import datetime

from app.services.timestamps import ZOOM_TIMESTAMP_FORMAT, TimestampFormat, minutes_between


def test_zoom_format_parses_utc_timestamp():
    assert ZOOM_TIMESTAMP_FORMAT.parse("2024-01-01T10:05:30Z") == datetime(2024, 1, 1, 10, 5, 30)


def test_zoom_format_rejects_malformed_values():
    """
    Missing or non-matching values yield None instead of raising.
    """
    assert ZOOM_TIMESTAMP_FORMAT.parse(None) is None
    assert ZOOM_TIMESTAMP_FORMAT.parse("") is None
    assert ZOOM_TIMESTAMP_FORMAT.parse("2024-01-01 10:05:30") is None
    assert ZOOM_TIMESTAMP_FORMAT.parse("2024-01-01T10:05:30.123Z") is None
    assert ZOOM_TIMESTAMP_FORMAT.parse("not a date") is None


def test_zoom_format_requires_zero_padded_fields():
    assert ZOOM_TIMESTAMP_FORMAT.parse("2024-1-5T9:2:3Z") is None
    assert ZOOM_TIMESTAMP_FORMAT.parse("2024-01-05T09:02:3Z") is None
    assert ZOOM_TIMESTAMP_FORMAT.parse("2024-01-05T09:02:03Z") == datetime(2024, 1, 5, 9, 2, 3)


def test_custom_format_is_injectable():
    fmt = TimestampFormat(pattern="%Y-%m-%d %H:%M")

    parsed = fmt.parse("2024-01-01 10:05")

    assert parsed == datetime(2024, 1, 1, 10, 5)
    assert fmt.format(parsed) == "2024-01-01 10:05"
    assert ZOOM_TIMESTAMP_FORMAT.format(parsed) == "2024-01-01T10:05:00Z"


def test_minutes_between_truncates_toward_zero():
    anchor = datetime(2024, 1, 1, 10, 0, 0)

    assert minutes_between(anchor, datetime(2024, 1, 1, 10, 4, 59)) == 4
    assert minutes_between(anchor, datetime(2024, 1, 1, 10, 5, 0)) == 5
    assert minutes_between(anchor, datetime(2024, 1, 1, 9, 59, 1)) == 0
    assert minutes_between(anchor, datetime(2024, 1, 1, 9, 58, 30)) == -1
