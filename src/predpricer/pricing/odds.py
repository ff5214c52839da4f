"""Inverse-pool outcome odds.

Each outcome's weight is the reciprocal of its liquidity pool, so an outcome with
*less* pool gets a *higher* price (thin outcomes price as favourites). This is not
a CPMM spot price; it is the pricing law every displayed price derives from.
"""

from __future__ import annotations

import math
from typing import Protocol, Sequence

from predpricer.models.market import PricedOutcome
from predpricer.pricing.rounding import fixed, left_sum, round_half_up, round_int

# Pools at or below this are clamped before taking the reciprocal.
POOL_FLOOR = 0.0001
BUY_MARKUP = 1.01
SELL_MARKDOWN = 0.99


class OutcomeLike(Protocol):
    id: str
    label: str
    pool: float
    outcome_slug: str | None


def _display(price: float) -> tuple[str, str]:
    return f"{round_int(price * 100)}¢", f"{fixed(price * 100, 1)}%"


def calculate_odds(outcomes: Sequence[OutcomeLike], pool_floor: float = POOL_FLOOR) -> list[PricedOutcome]:
    """Map outcome pools to prices: weight = 1 / max(pool, floor), price = weight / sum(weights).

    Prices are rounded to 2 decimals before the cents/percent strings are derived.
    If the total weight is zero or not finite, every outcome gets an even 1/n split.
    """
    if not outcomes:
        return []
    weights = [1 / max(o.pool, pool_floor) for o in outcomes]
    total_weight = left_sum(weights)

    if total_weight == 0 or not math.isfinite(total_weight):
        even = 1 / len(outcomes)
        cents, percent = _display(even)
        return [
            PricedOutcome(
                id=o.id,
                label=o.label,
                pool=o.pool if math.isfinite(o.pool) else 0.0,
                outcome_slug=o.outcome_slug,
                price=even,
                price_display=cents,
                probability=percent,
            )
            for o in outcomes
        ]

    priced = []
    for o, weight in zip(outcomes, weights):
        price = round_half_up(weight / total_weight, 2)
        cents, percent = _display(price)
        priced.append(
            PricedOutcome(
                id=o.id,
                label=o.label,
                pool=o.pool,
                outcome_slug=o.outcome_slug,
                price=price,
                price_display=cents,
                probability=percent,
            )
        )
    return priced


def calculate_buy_price(base_price: float, markup: float = BUY_MARKUP) -> float:
    return base_price * markup


def calculate_sell_price(base_price: float, markdown: float = SELL_MARKDOWN) -> float:
    return base_price * markdown


def calculate_single_price(outcome: OutcomeLike, all_outcomes: Sequence[OutcomeLike]) -> float:
    """Price of one outcome within its set; 0.0 if it is not part of the set."""
    for priced in calculate_odds(all_outcomes):
        if priced.id == outcome.id:
            return priced.price
    return 0.0


def format_price(price: float) -> tuple[str, str]:
    """(cents display, percent) with cents floored, e.g. 0.756 -> ('75¢', '75.6%')."""
    return f"{math.floor(price * 100)}¢", f"{fixed(price * 100, 1)}%"
