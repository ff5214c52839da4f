"""Timeframe policy and the fixed bucket grid anchored to now."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Literal

from predpricer.pricing.rounding import round_int

Timeframe = Literal["1H", "4H", "1D", "1W", "1M"]
TIMEFRAMES: tuple[Timeframe, ...] = ("1H", "4H", "1D", "1W", "1M")

BUCKET_MINUTES: dict[str, int] = {"1H": 1, "4H": 1, "1D": 10, "1W": 60, "1M": 240}
HOURS_BACK: dict[str, int] = {"1H": 1, "4H": 4, "1D": 24, "1W": 7 * 24, "1M": 30 * 24}
DEFAULT_BUCKET_MINUTES = 10
DEFAULT_HOURS_BACK = 24


def bucket_minutes(timeframe: str) -> int:
    return BUCKET_MINUTES.get(timeframe, DEFAULT_BUCKET_MINUTES)


def hours_back(timeframe: str) -> int:
    return HOURS_BACK.get(timeframe, DEFAULT_HOURS_BACK)


def bucket_start(ts: int, bucket_ms: int) -> int:
    """Start of the bucket containing ``ts`` (both ms)."""
    return (ts // bucket_ms) * bucket_ms


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class BucketRange:
    """Grid of bucket start times, oldest first; the last entry is the current bucket boundary."""

    start_ms: int
    bucket_ms: int
    bucket_times: list[int]

    @property
    def end_ms(self) -> int:
        return self.bucket_times[-1]


def build_bucket_range(hours: float, minutes_per_bucket: int, now: int | None = None) -> BucketRange:
    """Walk back ``round(hours * 60 / minutes_per_bucket)`` buckets from now truncated to the bucket width."""
    bucket_ms = minutes_per_bucket * 60 * 1000
    current = now_ms() if now is None else now
    end_ms = bucket_start(current, bucket_ms)
    points = max(1, round_int((hours * 60) / minutes_per_bucket))
    start_ms = end_ms - (points - 1) * bucket_ms
    return BucketRange(
        start_ms=start_ms,
        bucket_ms=bucket_ms,
        bucket_times=[start_ms + i * bucket_ms for i in range(points)],
    )


def timeframe_range(timeframe: str, now: int | None = None) -> BucketRange:
    return build_bucket_range(hours_back(timeframe), bucket_minutes(timeframe), now)
