"""Probability -> display odds (EU decimal, US moneyline, UK fractional)."""

from __future__ import annotations

import math
from typing import Literal

from predpricer.pricing.rounding import fixed, round_int

OddsFormat = Literal["EU", "US", "UK"]
Region = Literal["EU", "US"]

INFINITE_ODDS = "∞"
NO_LINE = "-"
# Fractional scan: first denominator in 1..MAX_DENOMINATOR within tolerance wins.
FRACTION_TOLERANCE = 0.0001
MAX_DENOMINATOR = 100


def _fractional(probability: float) -> str:
    decimal = (1 / probability) - 1
    numerator, denominator = 1, 1
    for d in range(1, MAX_DENOMINATOR + 1):
        n = round_int(decimal * d)
        if abs(decimal - n / d) < FRACTION_TOLERANCE:
            numerator, denominator = n, d
            break
    divisor = math.gcd(numerator, denominator) or 1
    return f"{numerator // divisor}/{denominator // divisor}"


def _moneyline(probability: float) -> str:
    if probability >= 0.5:
        return str(round_int(-100 * (probability / (1 - probability))))
    return "+" + str(round_int(100 * ((1 - probability) / probability)))


def convert_odds(probability: float, fmt: OddsFormat) -> str:
    """Convert a probability in (0, 1) to display odds.

    Outside the open interval the result is a sentinel: '∞' for EU/UK, '-' for US.
    """
    if not math.isfinite(probability) or probability <= 0 or probability >= 1:
        return NO_LINE if fmt == "US" else INFINITE_ODDS
    if fmt == "US":
        return _moneyline(probability)
    if fmt == "UK":
        return _fractional(probability)
    return fixed(1 / probability, 2)


def format_outcome_price(probability: float, region: Region = "EU", fallback: str = "--") -> str:
    """Headline price for an outcome button: cents in the US, decimal odds elsewhere."""
    if not math.isfinite(probability) or probability <= 0:
        return fallback
    if region == "US":
        return f"{round_int(probability * 100)}¢"
    return fixed(1 / probability, 2)


def format_moneyline(probability: float) -> str | None:
    """Moneyline shown under the US cents price; None when there is no line."""
    if not math.isfinite(probability) or probability <= 0 or probability >= 1:
        return None
    return convert_odds(probability, "US")
