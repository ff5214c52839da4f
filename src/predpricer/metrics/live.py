"""Derived display metrics from a trade book - spread in cents, imbalance, depth bar widths."""

from __future__ import annotations

from typing import TYPE_CHECKING

from predpricer.pricing.rounding import fixed, round_int

if TYPE_CHECKING:
    from predpricer.orderbook.engine import TradeBook

DISPLAY_LEVELS = 8
NO_SPREAD = "N/A"


def spread_cents(book: TradeBook) -> str:
    """Spread in cents to one decimal, or 'N/A' unless both sides have a positive best price."""
    bb, ba = book.best_bid, book.best_ask
    if bb and ba and bb > 0 and ba > 0:
        return fixed((ba - bb) * 100, 1)
    return NO_SPREAD


def imbalance(book: TradeBook, levels: int = 5) -> float | None:
    """(bid_volume - ask_volume) / (bid_volume + ask_volume) over top N levels, in [-1, 1]."""
    bid_list, ask_list = book.depth_at_levels(n=levels)
    bid_vol = sum(s for _, s in bid_list)
    ask_vol = sum(s for _, s in ask_list)
    total = bid_vol + ask_vol
    if total == 0:
        return None
    return (bid_vol - ask_vol) / total


def depth_widths(book: TradeBook, n: int = DISPLAY_LEVELS) -> tuple[list[tuple[int, float]], list[tuple[int, float]]]:
    """Top N levels per side as (price in cents, bar width percent of the largest level).

    The largest level is taken across every level of both sides; an empty side counts as size 1.
    """
    sizes = list(book.bids.values()) or [1.0]
    sizes += list(book.asks.values()) or [1.0]
    max_size = max(sizes)
    bid_list, ask_list = book.depth_at_levels(n=n)
    return (
        [(round_int(price * 100), size / max_size * 100) for price, size in bid_list],
        [(round_int(price * 100), size / max_size * 100) for price, size in ask_list],
    )
