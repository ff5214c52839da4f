"""Market display shaping - market type, 1X2 match prices, default selection, outcome names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from predpricer.models.market import Outcome
from predpricer.pricing.effective import EffectivePricing, build_effective_outcome_pricing
from predpricer.pricing.rounding import round_int

MarketType = Literal["1X2", "BINARY", "MULTI"]

# Cents shown for every 1X2 leg when the market has no usable outcomes.
DEFAULT_LEG_CENTS = 33


@dataclass(frozen=True)
class LegPrice:
    yes: int
    no: int

    @classmethod
    def from_cents(cls, cents: int) -> LegPrice:
        return cls(yes=cents, no=100 - cents)


@dataclass(frozen=True)
class MatchPrices:
    """Home/draw/away YES and NO prices in cents (fees included)."""

    home: LegPrice
    draw: LegPrice
    away: LegPrice


@dataclass(frozen=True)
class OutcomeSummary:
    id: str
    slug: str | None
    label: str
    price: float
    position: int | None = None


def resolve_market_type(market_type: str | None, outcomes: Sequence[Outcome]) -> MarketType:
    """Type from the market's type string when it names one, else inferred from outcome slugs."""
    normalized = (market_type or "").upper()
    if "1X2" in normalized:
        return "1X2"
    if "BINARY" in normalized:
        return "BINARY"
    if "MULTI" in normalized:
        return "MULTI"

    slugs = {(o.outcome_slug or "").lower() for o in outcomes}
    if {"home", "away", "draw"} <= slugs:
        return "1X2"
    if len(outcomes) == 2 or {"yes", "no"} <= slugs:
        return "BINARY"
    if len(outcomes) > 2:
        return "MULTI"
    return "BINARY"


def _fee_price(pricing: EffectivePricing, outcome_id: str, price: float) -> float:
    return pricing.effective_by_id.get(outcome_id, price)


def match_prices(outcomes: Sequence[Outcome], pricing: EffectivePricing | None = None) -> MatchPrices:
    """1X2 card prices. Three or more outcomes pick legs by slug, falling back to position.

    Two outcomes map to home/away with the draw at 0; fewer show 33 on every leg.
    """
    pricing = pricing or build_effective_outcome_pricing(outcomes)
    priced = pricing.priced_outcomes
    home = draw = away = DEFAULT_LEG_CENTS

    if len(priced) >= 3:
        by_slug = {}
        for o in priced:
            by_slug.setdefault(o.outcome_slug, o)
        legs = [by_slug.get(slug) or priced[index] for index, slug in enumerate(("home", "draw", "away"))]
        home, draw, away = (round_int(_fee_price(pricing, leg.id, leg.price) * 100) for leg in legs)
    elif len(priced) == 2:
        home = round_int(_fee_price(pricing, priced[0].id, priced[0].price) * 100)
        away = round_int(_fee_price(pricing, priced[1].id, priced[1].price) * 100)
        draw = 0

    return MatchPrices(
        home=LegPrice.from_cents(home),
        draw=LegPrice.from_cents(draw),
        away=LegPrice.from_cents(away),
    )


def outcome_summaries(
    outcomes: Sequence[Outcome],
    positions: Sequence[str] = (),
    pricing: EffectivePricing | None = None,
) -> list[OutcomeSummary]:
    """Per-outcome fee-inclusive price plus 1-based standing from ``positions`` (ordered outcome ids)."""
    pricing = pricing or build_effective_outcome_pricing(outcomes)
    position_by_id = {oid: index + 1 for index, oid in enumerate(positions)}
    price_by_id = {o.id: _fee_price(pricing, o.id, o.price) for o in pricing.priced_outcomes}
    default_price = 1 / len(outcomes) if outcomes else 0.0
    return [
        OutcomeSummary(
            id=o.id,
            slug=o.outcome_slug,
            label=o.label,
            price=price_by_id.get(o.id, _fee_price(pricing, o.id, default_price)),
            position=position_by_id.get(o.id),
        )
        for o in outcomes
    ]


def sort_multi_outcomes(summaries: Sequence[OutcomeSummary]) -> list[OutcomeSummary]:
    """Ranked outcomes first by position, then the rest by price, highest first."""
    ranked = sorted((s for s in summaries if s.position is not None), key=lambda s: s.position)
    unranked = sorted((s for s in summaries if s.position is None), key=lambda s: s.price, reverse=True)
    return ranked + unranked


DEFAULT_SLUG_BY_TYPE = {"1X2": "home", "BINARY": "yes"}


def default_outcome_id(market_type: str, outcomes: Sequence[Outcome]) -> str | None:
    """Outcome preselected when a market opens: home for 1X2, yes for binary, else the first outcome."""
    if not outcomes:
        return None
    slug = DEFAULT_SLUG_BY_TYPE.get(market_type)
    if slug is not None:
        match = next((o for o in outcomes if o.outcome_slug == slug), None)
        if match is not None:
            return match.id
    return outcomes[0].id


def outcome_display_name(outcome: Outcome | None, home_name: str = "", away_name: str = "") -> str:
    """Team names for home/away, 'Draw' for draw, else the label or slug."""
    if outcome is None:
        return "Outcome"
    slug = outcome.outcome_slug or ""
    if slug == "home":
        return home_name or outcome.label or "Home"
    if slug == "away":
        return away_name or outcome.label or "Away"
    if slug == "draw":
        return "Draw"
    return outcome.label or slug or "Outcome"


def team_names(title: str, home_team: str | None = None, away_team: str | None = None) -> tuple[str, str]:
    """Home and away names, falling back to a 'Home vs Away' title split."""
    parts = [part.strip() for part in title.split(" vs ")]
    title_home = parts[0] if parts else ""
    title_away = parts[1] if len(parts) > 1 else ""
    return (home_team or title_home or "Home", away_team or title_away or "Away")
