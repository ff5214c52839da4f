"""Chart price history - bucket grid, multi-outcome aggregation, single-outcome series, chart helpers."""

from predpricer.history.aggregator import OutcomePriceSeries, PriceHistoryAggregator
from predpricer.history.timeframes import TIMEFRAMES, Timeframe, build_bucket_range

__all__ = [
    "PriceHistoryAggregator",
    "OutcomePriceSeries",
    "Timeframe",
    "TIMEFRAMES",
    "build_bucket_range",
]
