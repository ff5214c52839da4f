"""Price history aggregation - one row per fixed bucket, forward-filled, rows renormalized to 100."""

from __future__ import annotations

from typing import Iterable, Sequence

import structlog

from predpricer.history.timeframes import Timeframe, bucket_minutes, bucket_start, timeframe_range
from predpricer.models.history import PriceHistoryBucket, PriceObservation, PricePoint
from predpricer.pricing.rounding import round_half_up

log = structlog.get_logger(__name__)


def _bucket_observations(observations: Iterable[PriceObservation], bucket_ms: int) -> dict[int, dict[str, float]]:
    """Assign observations to buckets in time order; the last write per (bucket, outcome) wins."""
    buckets: dict[int, dict[str, float]] = {}
    for obs in sorted(observations, key=lambda o: o.ts):
        buckets.setdefault(bucket_start(obs.ts, bucket_ms), {})[obs.outcome_id] = obs.price
    return buckets


class PriceHistoryAggregator:
    """Multi-outcome chart series for one market and timeframe.

    Holds the last known raw price per outcome so single realtime observations can
    update their bucket without replaying the full history. Outcome order is fixed
    at construction; the last outcome absorbs the rounding remainder of every row.
    One writer per instance.
    """

    def __init__(self, outcome_ids: Sequence[str], timeframe: Timeframe = "1D") -> None:
        self.outcome_ids = list(outcome_ids)
        self.timeframe = timeframe
        self.bucket_ms = bucket_minutes(timeframe) * 60 * 1000
        self._last_known: dict[str, float] = {}
        self._buckets: list[PriceHistoryBucket] = []
        self._reset_last_known()

    @property
    def initial_probability(self) -> float:
        return 1 / len(self.outcome_ids) if self.outcome_ids else 0.0

    @property
    def buckets(self) -> list[PriceHistoryBucket]:
        return list(self._buckets)

    @property
    def last_known(self) -> dict[str, float]:
        return dict(self._last_known)

    def _reset_last_known(self) -> None:
        self._last_known = {oid: self.initial_probability for oid in self.outcome_ids}

    def _normalized_row(self) -> dict[str, float]:
        """Percent per outcome from the last known prices; the row sums to 100."""
        count = len(self.outcome_ids)
        total = 0.0
        for oid in self.outcome_ids:
            total += self._last_known.get(oid, 0.0)
        if total <= 0:
            fallback = self.initial_probability
            for oid in self.outcome_ids:
                self._last_known[oid] = fallback
            total = fallback * count

        row: dict[str, float] = {}
        running = 0.0
        for index, oid in enumerate(self.outcome_ids):
            if index == count - 1:
                row[oid] = max(0.0, round_half_up(100 - running, 1))
                break
            rounded = round_half_up((self._last_known.get(oid, 0.0) / total) * 100, 1)
            row[oid] = rounded
            running += rounded
        return row

    def build(self, observations: Iterable[PriceObservation], now: int | None = None) -> list[PriceHistoryBucket]:
        """Rebuild the full grid for the timeframe's lookback window from ``observations``."""
        grid = timeframe_range(self.timeframe, now)
        by_bucket = _bucket_observations(observations, grid.bucket_ms)
        self._reset_last_known()

        rows = []
        for bucket_ts in grid.bucket_times:
            latest = by_bucket.get(bucket_ts, {})
            for oid in self.outcome_ids:
                if oid in latest:
                    self._last_known[oid] = latest[oid]
            rows.append(PriceHistoryBucket(ts=bucket_ts, prices=self._normalized_row()))
        self._buckets = rows
        log.debug(
            "price_history_built",
            timeframe=self.timeframe,
            buckets=len(rows),
            outcomes=len(self.outcome_ids),
        )
        return self.buckets

    def apply(self, observation: PriceObservation) -> PriceHistoryBucket | None:
        """Fold one realtime observation into its bucket. Unknown outcome ids are ignored."""
        if observation.outcome_id not in self._last_known:
            return None
        self._last_known[observation.outcome_id] = observation.price
        bucket_ts = bucket_start(observation.ts, self.bucket_ms)
        row = self._normalized_row()

        for index, existing in enumerate(self._buckets):
            if existing.ts == bucket_ts:
                updated = PriceHistoryBucket(ts=bucket_ts, prices={**existing.prices, **row})
                self._buckets[index] = updated
                return updated
        inserted = PriceHistoryBucket(ts=bucket_ts, prices=row)
        self._buckets.append(inserted)
        self._buckets.sort(key=lambda b: b.ts)
        return inserted


class OutcomePriceSeries:
    """Single-outcome chart series: raw prices on the same grid, forward-filled from 0."""

    def __init__(self, outcome_id: str, timeframe: Timeframe = "1D") -> None:
        self.outcome_id = outcome_id
        self.timeframe = timeframe
        self.bucket_ms = bucket_minutes(timeframe) * 60 * 1000
        self._points: list[PricePoint] = []

    @property
    def points(self) -> list[PricePoint]:
        return list(self._points)

    def build(self, observations: Iterable[PriceObservation], now: int | None = None) -> list[PricePoint]:
        grid = timeframe_range(self.timeframe, now)
        own = [o for o in observations if o.outcome_id == self.outcome_id]
        by_bucket = _bucket_observations(own, grid.bucket_ms)
        last_price = 0.0
        points = []
        for bucket_ts in grid.bucket_times:
            if bucket_ts in by_bucket:
                last_price = by_bucket[bucket_ts][self.outcome_id]
            points.append(PricePoint(ts=bucket_ts, price=last_price))
        self._points = points
        return self.points

    def apply(self, observation: PriceObservation) -> PricePoint | None:
        if observation.outcome_id != self.outcome_id:
            return None
        bucket_ts = bucket_start(observation.ts, self.bucket_ms)
        for index, existing in enumerate(self._points):
            if existing.ts == bucket_ts:
                updated = PricePoint(ts=bucket_ts, price=observation.price, volume=existing.volume)
                self._points[index] = updated
                return updated
        inserted = PricePoint(ts=bucket_ts, price=observation.price)
        self._points.append(inserted)
        self._points.sort(key=lambda p: p.ts)
        return inserted
