"""Outcome pricing - inverse-pool odds, fee-inclusive effective prices, odds formats, trade limits."""

from predpricer.pricing.effective import EffectivePricing, SidePrices, build_effective_outcome_pricing
from predpricer.pricing.formats import OddsFormat, convert_odds, format_moneyline, format_outcome_price
from predpricer.pricing.odds import calculate_odds

__all__ = [
    "calculate_odds",
    "build_effective_outcome_pricing",
    "EffectivePricing",
    "SidePrices",
    "convert_odds",
    "format_outcome_price",
    "format_moneyline",
    "OddsFormat",
]
