# app/services/interval_parser.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.schemas.attendance import AttendanceRecord
from app.services.timestamps import ZOOM_TIMESTAMP_FORMAT, TimestampFormat, minutes_between

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClampedInterval:
    """
    A participant's join/leave offsets, each forced into [0, total_minutes - 1].

    Clamping is applied to both ends independently, so `join_minute` may end
    up greater than `leave_minute` (e.g. a leave time recorded before the
    anchor because of clock skew). Such intervals are kept as they are: they
    contribute no active minutes but still count as one join and one leave.
    """

    join_minute: int
    leave_minute: int


def _clamp(value: int, ceiling: int) -> int:
    return max(0, min(value, ceiling))


def clamp_interval(
    record: AttendanceRecord,
    anchor: datetime,
    total_minutes: int,
    timestamp_format: TimestampFormat = ZOOM_TIMESTAMP_FORMAT,
) -> Optional[ClampedInterval]:
    """
    Convert a record's join/leave strings into clamped minute offsets.

    Returns None (and logs) when either timestamp is missing or does not
    match the format; the record then stays out of the minute-level
    timeline but keeps counting for duration statistics.
    """
    join_time = timestamp_format.parse(record.join_time)
    leave_time = timestamp_format.parse(record.leave_time)

    if join_time is None or leave_time is None:
        logger.warning(
            "Skipping participant %r: unparsable join/leave time (%r, %r)",
            record.name,
            record.join_time,
            record.leave_time,
        )
        return None

    ceiling = total_minutes - 1
    return ClampedInterval(
        join_minute=_clamp(minutes_between(anchor, join_time), ceiling),
        leave_minute=_clamp(minutes_between(anchor, leave_time), ceiling),
    )
