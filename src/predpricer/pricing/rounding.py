"""Rounding helpers shared by every displayed price.

Prices are rounded half-up (ties toward +infinity), and fixed-point strings are
rendered from the exact binary value of the float, ties away from zero. Python's
``round`` and ``format`` round half-even, which drifts by a cent on ties.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with ties toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Nearest integer, ties toward +infinity."""
    return int(math.floor(value + 0.5))


def fixed(value: float, digits: int) -> str:
    """Fixed-point string with ``digits`` decimals (1.005 -> '1.00' since 1.005 is below the tie in binary)."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def left_sum(values) -> float:
    """Plain left-to-right float sum (no compensation), so totals match the server's arithmetic."""
    total = 0.0
    for v in values:
        total += v
    return total
