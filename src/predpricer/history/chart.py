"""Chart helpers - outcome keys, top-N selection, current prices, fallback history, y-axis domain."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Mapping, Sequence

from predpricer.history.timeframes import now_ms
from predpricer.models.history import PriceHistoryBucket
from predpricer.models.market import Outcome
from predpricer.pricing.odds import POOL_FLOOR, calculate_odds
from predpricer.pricing.rounding import round_int

MULTI_OUTCOME_THRESHOLD = 4
TOP_OUTCOMES = 4
FALLBACK_POINTS = 10
FALLBACK_STEP_MS = 6 * 60 * 1000
FULL_DOMAIN = (0.0, 100.0)


def has_positive(prices: Mapping[str, float]) -> bool:
    return any(p > 0 for p in prices.values())


@dataclass(frozen=True)
class ChartOutcome:
    """Outcome as a chart series: ``slug`` is the series key and is unique within the chart."""

    id: str
    label: str
    slug: str


def chart_outcomes(outcomes: Sequence[Outcome]) -> list[ChartOutcome]:
    """Series keys per outcome; empty or shared slugs fall back to the outcome id."""
    counts = Counter(o.outcome_slug for o in outcomes if o.outcome_slug)
    series = []
    for o in outcomes:
        slug = o.outcome_slug or ""
        duplicate = not slug or counts[slug] > 1
        series.append(ChartOutcome(id=o.id, label=o.label, slug=o.id if duplicate else slug))
    return series


def top_outcome_ids(
    outcomes: Sequence[Outcome],
    selected_outcome_id: str | None = None,
    limit: int = TOP_OUTCOMES,
) -> list[str]:
    """Outcome ids to draw: the selection alone, every outcome for small sets, else the ``limit`` deepest pools."""
    if selected_outcome_id:
        return [selected_outcome_id]
    if len(outcomes) <= MULTI_OUTCOME_THRESHOLD:
        return [o.id for o in outcomes]
    ranked = sorted(outcomes, key=lambda o: o.pool, reverse=True)
    return [o.id for o in ranked[:limit]]


def current_prices_from_pools(outcomes: Sequence[Outcome], pool_floor: float = POOL_FLOOR) -> dict[str, float]:
    """Percent per outcome id from inverse-pool odds, one decimal."""
    if not outcomes:
        return {}
    fallback = round_int((100 / len(outcomes)) * 10) / 10
    price_by_id = {o.id: o.price for o in calculate_odds(outcomes, pool_floor=pool_floor)}
    return {
        o.id: round_int(price_by_id[o.id] * 1000) / 10 if o.id in price_by_id else fallback
        for o in outcomes
    }


def current_prices(
    history: Sequence[PriceHistoryBucket],
    outcomes: Sequence[Outcome],
    pool_floor: float = POOL_FLOOR,
) -> dict[str, float]:
    """Latest percent per outcome id from the last history row; pool prices when history has nothing positive."""
    from_pools = current_prices_from_pools(outcomes, pool_floor)
    if not history:
        return from_pools
    last = history[-1].prices
    prices = {}
    for series in chart_outcomes(outcomes):
        raw = last.get(series.id, last.get(series.slug))
        prices[series.id] = float(raw or 0)
    return prices if has_positive(prices) else from_pools


def fallback_history(
    outcomes: Sequence[Outcome],
    now: int | None = None,
    pool_floor: float = POOL_FLOOR,
) -> list[PriceHistoryBucket]:
    """Flat series at the current pool prices, used when a market has no recorded history."""
    if not outcomes:
        return []
    current = now_ms() if now is None else now
    from_pools = current_prices_from_pools(outcomes, pool_floor)
    even = 100 / len(outcomes)
    row = {o.id: from_pools[o.id] if from_pools.get(o.id, 0) > 0 else even for o in outcomes}
    return [
        PriceHistoryBucket(ts=current - i * FALLBACK_STEP_MS, prices=dict(row))
        for i in range(FALLBACK_POINTS - 1, -1, -1)
    ]


def y_axis_domain(history: Sequence[PriceHistoryBucket], outcome_ids: Sequence[str]) -> tuple[float, float]:
    """Percent range to plot: positive values padded by max(15% of range, 5), snapped to 5s, at least 10 wide."""
    values = [
        value
        for bucket in history
        for oid in outcome_ids
        if (value := float(bucket.prices.get(oid) or 0)) > 0
    ]
    if not values:
        return FULL_DOMAIN
    low, high = min(values), max(values)
    padding = max((high - low) * 0.15, 5)
    domain_min = max(0, math.floor((low - padding) / 5) * 5)
    domain_max = min(100, math.ceil((high + padding) / 5) * 5)
    if domain_max - domain_min < 10:
        mid = (domain_min + domain_max) / 2
        return (max(0.0, mid - 5), min(100.0, mid + 5))
    return (float(domain_min), float(domain_max))


def chart_row(bucket: PriceHistoryBucket, outcomes: Sequence[ChartOutcome]) -> dict[str, float | str]:
    """Flatten a bucket for a chart library: ``time`` plus each value under both outcome id and series slug."""
    row: dict[str, float | str] = {"time": bucket.time}
    for series in outcomes:
        value = bucket.prices.get(series.id)
        if value is None:
            continue
        row[series.id] = value
        row[series.slug] = value
    return row


def series_label(key: str, outcomes: Sequence[ChartOutcome], home_name: str = "Home", away_name: str = "Away") -> str:
    """Legend label for a series key (id or slug)."""
    slug_by_id = {o.id: o.slug for o in outcomes}
    slug = slug_by_id.get(key, key)
    if slug in ("home", "yes"):
        return home_name
    if slug in ("away", "no"):
        return away_name
    if slug == "draw":
        return "Draw"
    label_by_id = {o.id: o.label for o in outcomes}
    label_by_slug = {o.slug: o.label for o in outcomes}
    return label_by_id.get(key) or label_by_slug.get(slug) or slug
