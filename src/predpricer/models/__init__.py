"""Canonical schema (Pydantic) - Market, Outcome, priced views, Trade, PriceLevel, history buckets."""

from predpricer.models.history import PriceHistoryBucket, PriceObservation, PricePoint
from predpricer.models.market import EffectiveOutcome, Market, Outcome, PricedOutcome
from predpricer.models.orderbook import OrderBookView, PriceLevel
from predpricer.models.trade import TradePrint

__all__ = [
    "Market",
    "Outcome",
    "PricedOutcome",
    "EffectiveOutcome",
    "OrderBookView",
    "PriceLevel",
    "TradePrint",
    "PriceObservation",
    "PriceHistoryBucket",
    "PricePoint",
]
