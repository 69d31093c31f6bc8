# app/services/anchor_resolver.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

from app.schemas.attendance import AttendanceRecord
from app.services.timestamps import ZOOM_TIMESTAMP_FORMAT, TimestampFormat

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def resolve_anchor(
    records: Sequence[AttendanceRecord],
    total_minutes: int,
    timestamp_format: TimestampFormat = ZOOM_TIMESTAMP_FORMAT,
    now: Optional[Callable[[], datetime]] = None,
) -> datetime:
    """
    Determine the zero point of the analysis window.

    Policy
    ------
    1) The earliest join time that parses across all records.
    2) If none parse, the first record's join time parsed again with the
       same format. With a strict format this cannot succeed where step 1
       failed; it is kept so a more lenient format descriptor gets a chance.
    3) Otherwise `now - total_minutes`, i.e. the window is assumed to have
       just ended. Results built on this fallback depend on the wall clock
       and are therefore not reproducible; pass `now` to pin it.

    Records whose join time does not parse are skipped and logged.
    """
    earliest: Optional[datetime] = None

    for record in records:
        join_time = timestamp_format.parse(record.join_time)
        if join_time is None:
            logger.warning(
                "Invalid join time %r for participant %r; skipped for anchor",
                record.join_time,
                record.name,
            )
            continue
        if earliest is None or join_time < earliest:
            earliest = join_time

    if earliest is not None:
        return earliest

    if records:
        first_join = timestamp_format.parse(records[0].join_time)
        if first_join is not None:
            logger.warning("Using first participant's join time as window start: %s", first_join)
            return first_join

    clock = now or _utc_now
    fallback = clock() - timedelta(minutes=total_minutes)
    logger.warning("No parsable join time; using default window start %s", fallback)
    return fallback
