# app/services/timestamps.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class TimestampFormat:
    """
    Read-only descriptor of a provider timestamp format.

    Instances are immutable and safe to share across concurrent analyses;
    pass a different instance to the engine to analyse data from a provider
    that formats timestamps differently.
    """

    pattern: str = "%Y-%m-%dT%H:%M:%SZ"

    def parse(self, value: Optional[str]) -> Optional[datetime]:
        """
        Parse `value` with this format.

        Returns None for missing or malformed input instead of raising, so
        callers can decide whether a bad timestamp is worth logging. Fields
        are fixed width: strptime alone accepts "2024-1-5T9:2:3Z", so the
        parsed value must format back to exactly `value`.
        """
        if not value:
            return None
        try:
            parsed = datetime.strptime(value, self.pattern)
        except (TypeError, ValueError):
            return None
        if parsed.strftime(self.pattern) != value:
            return None
        return parsed

    def format(self, value: datetime) -> str:
        return value.strftime(self.pattern)


# Zoom reports every timestamp as UTC with a literal trailing 'Z'.
ZOOM_TIMESTAMP_FORMAT = TimestampFormat()


def minutes_between(start: datetime, end: datetime) -> int:
    """
    Whole minutes from `start` to `end`, truncated toward zero.

    Sub-minute remainders are discarded in both directions: 59 seconds
    before the anchor is minute 0, not minute -1.
    """
    seconds = int((end - start).total_seconds())
    whole = abs(seconds) // 60
    return whole if seconds >= 0 else -whole
