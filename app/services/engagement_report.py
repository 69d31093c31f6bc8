# app/services/engagement_report.py
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, Optional, Sequence

from app.schemas.attendance import AttendanceRecord
from app.schemas.engagement import (
    AnalysisWindow,
    EngagementReport,
    EngagementSeries,
    ParticipantDetail,
    UserTimeline,
)
from app.services.anchor_resolver import resolve_anchor
from app.services.bucket_aggregator import aggregate_buckets
from app.services.occupancy_builder import ParticipantOccupancy, build_occupancy
from app.services.time_bucketizer import build_buckets, validate_window
from app.services.timestamps import ZOOM_TIMESTAMP_FORMAT, TimestampFormat

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No participant data available"


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round to `places` decimals, halves going up (0.125 -> 0.13).
    """
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def _seconds_to_minutes(seconds: int) -> float:
    return round_half_up(seconds / 60.0)


def _detail(entry: ParticipantOccupancy) -> ParticipantDetail:
    record = entry.record
    return ParticipantDetail(
        user_id=record.user_id,
        name=record.name,
        email=record.user_email,
        join_time=record.join_time,
        leave_time=record.leave_time,
        duration_seconds=record.duration_seconds,
        duration_minutes=_seconds_to_minutes(record.duration_seconds),
        join_minute=entry.interval.join_minute,
        leave_minute=entry.interval.leave_minute,
        join_segment=entry.join_bucket,
        leave_segment=entry.leave_bucket,
        attentiveness_score=record.attentiveness_score or "",
    )


def _timeline(entry: ParticipantOccupancy) -> UserTimeline:
    record = entry.record
    return UserTimeline(
        user_id=record.user_id,
        name=record.name,
        email=record.user_email,
        join_time=record.join_time,
        leave_time=record.leave_time,
        duration_minutes=_seconds_to_minutes(record.duration_seconds),
        join_minute=entry.interval.join_minute,
        leave_minute=entry.interval.leave_minute,
        presence_by_segment=list(entry.presence),
    )


def compute_engagement_report(
    records: Optional[Sequence[AttendanceRecord]],
    total_minutes: int,
    bucket_width: int = 5,
    *,
    timestamp_format: TimestampFormat = ZOOM_TIMESTAMP_FORMAT,
    now: Optional[Callable[[], datetime]] = None,
) -> EngagementReport:
    """
    Derive the time-bucketed engagement report for one session.

    Steps
    -----
    1) Validate the window (non-positive width/length raises
       EngagementConfigurationError).
    2) Resolve the anchor (earliest valid join time, with fallbacks).
    3) Build bucket boundaries and labels.
    4) Clamp every record's interval and expand it into per-minute
       occupancy, per-bucket joins/leaves and a presence bitmap.
    5) Aggregate minutes into per-bucket average/peak/engagement rate.
    6) Compute duration statistics over the *full* record list.

    Returns
    -------
    EngagementReport
        `success=False` with an error message when `records` is empty or
        None. Records with unparsable timestamps are skipped (and counted in
        `skipped_records`) without failing the analysis.
    """
    validate_window(total_minutes, bucket_width)

    if not records:
        return EngagementReport(
            success=False,
            error=NO_DATA_MESSAGE,
            interval_minutes=bucket_width,
            total_minutes=total_minutes,
            window=AnalysisWindow(total_minutes=total_minutes, bucket_width_minutes=bucket_width),
        )

    participants = list(records)
    total_participants = len(participants)

    logger.debug(
        "Analysing %d participants over %d minutes in %d-minute buckets",
        total_participants,
        total_minutes,
        bucket_width,
    )

    window = AnalysisWindow(
        total_minutes=total_minutes,
        bucket_width_minutes=bucket_width,
        anchor=resolve_anchor(participants, total_minutes, timestamp_format, now=now),
    )
    anchor = window.anchor
    buckets = build_buckets(total_minutes, bucket_width)
    occupancy = build_occupancy(
        participants,
        anchor,
        total_minutes,
        buckets,
        bucket_width,
        timestamp_format,
    )
    aggregates = aggregate_buckets(occupancy, buckets, total_participants)

    durations = [record.duration_seconds for record in participants]
    total_seconds = sum(durations)

    if occupancy.skipped:
        logger.info(
            "%d of %d participants skipped from the timeline (unparsable timestamps)",
            len(occupancy.skipped),
            total_participants,
        )

    return EngagementReport(
        success=True,
        interval_minutes=bucket_width,
        total_minutes=total_minutes,
        window_start=anchor,
        window=window,
        total_participants=total_participants,
        average_participation_minutes=round_half_up(total_seconds / total_participants / 60.0),
        max_participation_minutes=round_half_up(max(durations) / 60.0),
        min_participation_minutes=round_half_up(min(durations) / 60.0),
        total_meeting_minutes=round_half_up(total_seconds / 60.0),
        peak_concurrent_users=aggregates.peak_concurrent,
        final_active_users=aggregates.final_active_users,
        total_joined=aggregates.total_joined,
        total_left=aggregates.total_left,
        skipped_records=len(occupancy.skipped),
        engagement_over_time=EngagementSeries(
            labels=[bucket.label for bucket in buckets],
            active_participants=aggregates.active,
            engagement_rate=aggregates.engagement_rate,
            users_joined=aggregates.joined,
            users_left=aggregates.left,
            peak_active_users=aggregates.peak,
        ),
        participant_details=[_detail(entry) for entry in occupancy.participants],
        user_timelines=[_timeline(entry) for entry in occupancy.participants],
    )
