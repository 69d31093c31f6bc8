# app/services/time_bucketizer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List


class EngagementConfigurationError(ValueError):
    """
    Raised when an analysis is requested with a non-positive window length or
    bucket width. This is a caller contract violation, not a data problem.
    """


@dataclass(frozen=True)
class Bucket:
    """
    One time segment of the analysis window.

    `start_minute`/`end_minute` are the inclusive minute indices aggregated
    into this bucket. A trailing bucket that starts at the very end of the
    window has `end_minute < start_minute` and therefore spans no minutes.
    """

    index: int
    start_minute: int
    end_minute: int
    label: str

    @property
    def minute_count(self) -> int:
        return max(self.end_minute - self.start_minute + 1, 0)


def validate_window(total_minutes: int, bucket_width: int) -> None:
    if total_minutes <= 0:
        raise EngagementConfigurationError(
            f"total_minutes must be greater than 0 (got {total_minutes})"
        )
    if bucket_width <= 0:
        raise EngagementConfigurationError(
            f"bucket width must be greater than 0 (got {bucket_width})"
        )


def format_offset(offset_minutes: int) -> str:
    """Format a minute offset from window start as HH:MM."""
    return f"{offset_minutes // 60:02d}:{offset_minutes % 60:02d}"


def parse_offset(label: str) -> int:
    hours, minutes = label.split(":")
    return int(hours) * 60 + int(minutes)


def bucket_offsets(total_minutes: int, bucket_width: int) -> List[int]:
    """
    Start offsets of every bucket.

    Steps 0, w, 2w, ... while below `total_minutes`, then appends one more
    offset when `last + w <= total_minutes`. That extra bucket only appears
    when the window is an exact multiple of the width, so the series reaches
    the end of the window; it covers no minutes of its own.
    """
    validate_window(total_minutes, bucket_width)

    offsets = list(range(0, total_minutes, bucket_width))
    if offsets and offsets[-1] + bucket_width <= total_minutes:
        offsets.append(offsets[-1] + bucket_width)
    return offsets


def build_buckets(total_minutes: int, bucket_width: int) -> List[Bucket]:
    """
    Ordered buckets for a window of `total_minutes` split every `bucket_width`.
    """
    buckets: List[Bucket] = []
    for index, start in enumerate(bucket_offsets(total_minutes, bucket_width)):
        end = min((index + 1) * bucket_width - 1, total_minutes - 1)
        buckets.append(
            Bucket(index=index, start_minute=start, end_minute=end, label=format_offset(start))
        )
    return buckets


def bucket_labels(total_minutes: int, bucket_width: int) -> List[str]:
    return [bucket.label for bucket in build_buckets(total_minutes, bucket_width)]
