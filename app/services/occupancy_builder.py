# app/services/occupancy_builder.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Sequence

from app.schemas.attendance import AttendanceRecord
from app.services.interval_parser import ClampedInterval, clamp_interval
from app.services.time_bucketizer import Bucket
from app.services.timestamps import ZOOM_TIMESTAMP_FORMAT, TimestampFormat


@dataclass
class ParticipantOccupancy:
    """
    Per-participant outcome of the occupancy pass.
    """

    record: AttendanceRecord
    interval: ClampedInterval
    join_bucket: int
    leave_bucket: int
    presence: List[int]


@dataclass
class Occupancy:
    """
    Minute-level concurrency plus per-bucket join/leave tallies.
    """

    active_per_minute: List[int]
    joined_per_bucket: List[int]
    left_per_bucket: List[int]
    participants: List[ParticipantOccupancy] = field(default_factory=list)
    skipped: List[AttendanceRecord] = field(default_factory=list)


def presence_bitmap(interval: ClampedInterval, buckets: Sequence[Bucket]) -> List[int]:
    """
    1 for every bucket the clamped interval overlaps, 0 otherwise.
    """
    return [
        1
        if interval.join_minute <= bucket.end_minute
        and interval.leave_minute >= bucket.start_minute
        else 0
        for bucket in buckets
    ]


def build_occupancy(
    records: Sequence[AttendanceRecord],
    anchor: datetime,
    total_minutes: int,
    buckets: Sequence[Bucket],
    bucket_width: int,
    timestamp_format: TimestampFormat = ZOOM_TIMESTAMP_FORMAT,
) -> Occupancy:
    """
    Expand every valid participant interval into per-minute active counts.

    For each record with a clamped interval:
    - every minute in [join_minute, leave_minute] gains one active user
      (an interval with join > leave marks nothing),
    - the bucket containing join_minute gains one join and the bucket
      containing leave_minute gains one leave,
    - a presence bitmap over `buckets` is recorded.

    Both ends are inclusive. A participant present from minute 2 to minute 4
    still counts at minute 4, so A (0-9), B (2-4) and C (6-12) over a
    10-minute window give [1, 1, 2, 2, 2, 1, 2, 2, 2, 2] rather than a
    series that drops B at its leave minute.

    Records whose timestamps do not parse are collected in `skipped`.
    """
    bucket_count = len(buckets)
    occupancy = Occupancy(
        active_per_minute=[0] * total_minutes,
        joined_per_bucket=[0] * bucket_count,
        left_per_bucket=[0] * bucket_count,
    )

    for record in records:
        interval = clamp_interval(record, anchor, total_minutes, timestamp_format)
        if interval is None:
            occupancy.skipped.append(record)
            continue

        join_bucket = interval.join_minute // bucket_width
        leave_bucket = interval.leave_minute // bucket_width

        if join_bucket < bucket_count:
            occupancy.joined_per_bucket[join_bucket] += 1
        if leave_bucket < bucket_count:
            occupancy.left_per_bucket[leave_bucket] += 1

        for minute in range(interval.join_minute, interval.leave_minute + 1):
            if minute < total_minutes:
                occupancy.active_per_minute[minute] += 1

        occupancy.participants.append(
            ParticipantOccupancy(
                record=record,
                interval=interval,
                join_bucket=join_bucket,
                leave_bucket=leave_bucket,
                presence=presence_bitmap(interval, buckets),
            )
        )

    return occupancy
