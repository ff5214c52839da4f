"""Trade-tape depth book - bucket executions into bid/ask levels, track best bid/ask/spread."""

from __future__ import annotations

from typing import Iterable

import structlog

from predpricer.models.orderbook import OrderBookView, PriceLevel
from predpricer.models.trade import TradePrint
from predpricer.pricing.rounding import round_half_up

log = structlog.get_logger(__name__)

TRADE_WINDOW = 100
PRICE_DECIMALS = 2


def level_price(price: float) -> float:
    """Level a print lands on: its price rounded half-up to 2 decimals."""
    return round_half_up(price, PRICE_DECIMALS)


class TradeBook:
    """Depth-style view of one outcome's trade tape. Buy prints are bids, sell prints are asks.

    Levels only grow: there is no cancel or expiry, so this is an execution-print
    aggregation rather than a live order book.
    """

    __slots__ = ("market_id", "outcome_id", "bids", "asks", "trade_count")

    def __init__(self, market_id: str | None = None, outcome_id: str | None = None) -> None:
        self.market_id = market_id
        self.outcome_id = outcome_id
        # rounded price -> summed shares
        self.bids: dict[float, float] = {}
        self.asks: dict[float, float] = {}
        self.trade_count = 0

    def apply_trade(self, trade: TradePrint) -> PriceLevel:
        """Add one print to its level (new levels are created on first print). Returns the updated level."""
        side = self.bids if trade.side == "buy" else self.asks
        price = level_price(trade.price)
        side[price] = side.get(price, 0.0) + trade.shares
        self.trade_count += 1
        return PriceLevel(price=price, size=side[price])

    def load(self, trades: Iterable[TradePrint]) -> None:
        """Replace the book with the given prints."""
        self.bids = {}
        self.asks = {}
        self.trade_count = 0
        for trade in trades:
            self.apply_trade(trade)

    @property
    def best_bid(self) -> float | None:
        return max(self.bids) if self.bids else None

    @property
    def best_ask(self) -> float | None:
        return min(self.asks) if self.asks else None

    @property
    def spread(self) -> float | None:
        bb, ba = self.best_bid, self.best_ask
        if bb is not None and ba is not None:
            return ba - bb
        return None

    def bid_levels(self) -> list[PriceLevel]:
        return [PriceLevel(price=p, size=s) for p, s in sorted(self.bids.items(), reverse=True)]

    def ask_levels(self) -> list[PriceLevel]:
        return [PriceLevel(price=p, size=s) for p, s in sorted(self.asks.items())]

    def to_view(self) -> OrderBookView:
        """Export as bids descending and asks ascending."""
        return OrderBookView(
            market_id=self.market_id,
            outcome_id=self.outcome_id,
            bids=self.bid_levels(),
            asks=self.ask_levels(),
        )

    def depth_at_levels(self, n: int = 5) -> tuple[list[tuple[float, float]], list[tuple[float, float]]]:
        """Return (top N bids, top N asks) as [(price, size), ...]."""
        bid_list = sorted(self.bids.items(), reverse=True)[:n]
        ask_list = sorted(self.asks.items())[:n]
        return (bid_list, ask_list)


def build_order_book(trades: Iterable[TradePrint], window: int = TRADE_WINDOW) -> OrderBookView:
    """Aggregate the most recent ``window`` prints (input newest first) into a depth view."""
    recent = list(trades)[:window]
    book = TradeBook()
    book.load(recent)
    log.debug("order_book_built", trades=len(recent), bids=len(book.bids), asks=len(book.asks))
    return book.to_view()
