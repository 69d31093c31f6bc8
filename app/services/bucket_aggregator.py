# app/services/bucket_aggregator.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from app.services.occupancy_builder import Occupancy
from app.services.time_bucketizer import Bucket


@dataclass
class BucketAggregates:
    active: List[int]
    peak: List[int]
    engagement_rate: List[int]
    joined: List[int]
    left: List[int]
    peak_concurrent: int
    final_active_users: int
    total_joined: int
    total_left: int


def aggregate_buckets(
    occupancy: Occupancy,
    buckets: Sequence[Bucket],
    total_participants: int,
) -> BucketAggregates:
    """
    Reduce minute-level occupancy into per-bucket statistics.

    Rules
    -----
    - active[b]          = sum(minutes in b) // number of minutes in b
    - peak[b]            = max(minutes in b)
    - engagement_rate[b] = active[b] * 100 // total_participants
    - A bucket spanning no minutes reports 0 for all three.

    `total_participants` is the size of the full attendance list, including
    records that were skipped for unparsable timestamps, so the rate is a
    share of everyone who attended rather than of the timeline subset.
    """
    counts = occupancy.active_per_minute
    active: List[int] = []
    peak: List[int] = []
    rates: List[int] = []

    for bucket in buckets:
        window = counts[bucket.start_minute : bucket.end_minute + 1]
        average = sum(window) // len(window) if window else 0
        active.append(average)
        peak.append(max(window) if window else 0)
        rates.append(average * 100 // total_participants if total_participants > 0 else 0)

    return BucketAggregates(
        active=active,
        peak=peak,
        engagement_rate=rates,
        joined=list(occupancy.joined_per_bucket),
        left=list(occupancy.left_per_bucket),
        peak_concurrent=max(counts) if counts else 0,
        final_active_users=counts[-1] if counts else 0,
        total_joined=sum(occupancy.joined_per_bucket),
        total_left=sum(occupancy.left_per_bucket),
    )
