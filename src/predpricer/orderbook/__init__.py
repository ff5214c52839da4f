from predpricer.orderbook.aggregator import OrderBookAggregator
from predpricer.orderbook.engine import TradeBook, build_order_book

__all__ = ["OrderBookAggregator", "TradeBook", "build_order_book"]
