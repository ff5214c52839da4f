"""Boundary layer - strict row decoding, change feed, outcome source resolution."""

from predpricer.ingestion.decode import DecodeError, Err, Ok, decode_rows, normalize_timestamp
from predpricer.ingestion.feed import ChangeEvent, ChangeFeed, Debouncer, FeedClosedError, InMemoryChangeFeed
from predpricer.ingestion.sources import OutcomeSource, ordered_sources, resolve_outcomes

__all__ = [
    "ChangeEvent",
    "ChangeFeed",
    "Debouncer",
    "DecodeError",
    "Err",
    "FeedClosedError",
    "InMemoryChangeFeed",
    "Ok",
    "OutcomeSource",
    "decode_rows",
    "normalize_timestamp",
    "ordered_sources",
    "resolve_outcomes",
]
