"""Fee-inclusive effective pricing built on top of inverse-pool odds."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from predpricer.models.market import EffectiveOutcome, Outcome, PricedOutcome
from predpricer.pricing.odds import POOL_FLOOR, calculate_odds
from predpricer.pricing.rounding import left_sum

# Price assumed for a selected outcome when the set is empty.
EMPTY_SET_PRICE = 0.33


@dataclass(frozen=True)
class SidePrices:
    """YES/NO prices for one selected outcome."""

    yes: float
    no: float


@dataclass
class EffectivePricing:
    """Result of one pricing pass over an outcome snapshot. Recompute on every snapshot change."""

    priced_outcomes: list[PricedOutcome] = field(default_factory=list)
    effective_outcomes: list[EffectiveOutcome] = field(default_factory=list)
    effective_by_id: dict[str, float] = field(default_factory=dict)
    normalized_by_id: dict[str, float] = field(default_factory=dict)
    total_effective: float = 0.0

    @property
    def fallback_price(self) -> float:
        n = len(self.priced_outcomes)
        return 1 / n if n else EMPTY_SET_PRICE

    def side_prices(self, outcome_id: str) -> SidePrices:
        """YES and NO prices for ``outcome_id``.

        YES is the effective price (falling back to normalized, raw, then 1/n).
        With more than two outcomes NO is every other outcome combined, fees
        included: ``max(0, total_effective - yes)``. With two or fewer it is the
        plain complement ``1 - normalized``.
        """
        priced = next((o for o in self.priced_outcomes if o.id == outcome_id), None)
        base_yes = priced.price if priced is not None and priced.price else self.fallback_price
        normalized_yes = self.normalized_by_id.get(outcome_id, base_yes)
        yes = self.effective_by_id.get(outcome_id, normalized_yes)
        if len(self.effective_outcomes) > 2:
            no = max(0.0, self.total_effective - yes)
        else:
            no = 1 - normalized_yes
        return SidePrices(yes=yes, no=no)

    def other_outcomes(self, outcome_id: str) -> list[EffectiveOutcome]:
        """Outcomes backing a NO position on ``outcome_id``."""
        return [o for o in self.effective_outcomes if o.id != outcome_id]

    def estimate_proceeds(self, shares_by_outcome: Mapping[str, float]) -> float:
        """Mark shares held per outcome at their effective prices (unknown ids at 1/n)."""
        return left_sum(
            shares * self.effective_by_id.get(outcome_id, self.fallback_price)
            for outcome_id, shares in shares_by_outcome.items()
        )


def _non_negative(price: float) -> float:
    if not math.isfinite(price):
        return 0.0
    return max(0.0, price)


def build_effective_outcome_pricing(outcomes: Sequence[Outcome], pool_floor: float = POOL_FLOOR) -> EffectivePricing:
    """Price ``outcomes``, rescale so raw prices sum to 1, then apply ``price * (1 + fee_rate)``.

    ``total_effective`` is the sum of effective prices and is allowed to exceed 1 (the vig).
    """
    priced_outcomes = calculate_odds(outcomes, pool_floor=pool_floor) if outcomes else []
    base_total = left_sum(_non_negative(o.price) for o in priced_outcomes)
    fee_by_id = {o.id: o.current_fee_rate or 0.0 for o in outcomes}

    effective_outcomes = []
    for priced in priced_outcomes:
        raw_price = _non_negative(priced.price)
        normalized = raw_price / base_total if base_total > 0 else raw_price
        fee_rate = fee_by_id.get(priced.id, 0.0)
        effective_outcomes.append(
            EffectiveOutcome(
                id=priced.id,
                label=priced.label,
                outcome_slug=priced.outcome_slug,
                price=raw_price,
                normalized_price=normalized,
                effective_price=normalized * (1 + fee_rate),
                fee_rate=fee_rate,
            )
        )

    return EffectivePricing(
        priced_outcomes=priced_outcomes,
        effective_outcomes=effective_outcomes,
        effective_by_id={o.id: o.effective_price for o in effective_outcomes},
        normalized_by_id={o.id: o.normalized_price for o in effective_outcomes},
        total_effective=left_sum(o.effective_price for o in effective_outcomes),
    )
