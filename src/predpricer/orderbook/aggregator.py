"""Trade-tape aggregator - one TradeBook per (market_id, outcome_id), fed from decoded trade prints."""

from __future__ import annotations

from typing import Iterable

from predpricer.models.trade import TradePrint
from predpricer.orderbook.engine import TRADE_WINDOW, TradeBook


class OrderBookAggregator:
    """Holds a TradeBook per (market_id, outcome_id) and routes prints to it."""

    def __init__(self, window: int = TRADE_WINDOW) -> None:
        self.window = window
        self._books: dict[tuple[str | None, str | None], TradeBook] = {}

    def _book(self, market_id: str | None, outcome_id: str | None) -> TradeBook:
        key = (market_id, outcome_id)
        if key not in self._books:
            self._books[key] = TradeBook(market_id, outcome_id)
        return self._books[key]

    def load(self, trades: Iterable[TradePrint]) -> None:
        """Seed books from an initial fetch (newest first); only the first ``window`` prints count."""
        grouped: dict[tuple[str | None, str | None], list[TradePrint]] = {}
        for trade in list(trades)[: self.window]:
            grouped.setdefault((trade.market_id, trade.outcome_id), []).append(trade)
        for (market_id, outcome_id), prints in grouped.items():
            self._book(market_id, outcome_id).load(prints)

    def on_trade(self, trade: TradePrint) -> TradeBook:
        """Apply one realtime print to its book."""
        book = self._book(trade.market_id, trade.outcome_id)
        book.apply_trade(trade)
        return book

    def get_book(self, market_id: str | None, outcome_id: str | None) -> TradeBook | None:
        return self._books.get((market_id, outcome_id))

    def books(self) -> dict[tuple[str | None, str | None], TradeBook]:
        return dict(self._books)
