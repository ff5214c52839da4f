"""PriceObservation, PriceHistoryBucket, PricePoint - chart time series."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def iso_from_ms(ts: int) -> str:
    """Render epoch ms as ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T12:00:00.000Z."""
    dt = EPOCH + timedelta(milliseconds=ts)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PriceObservation(BaseModel):
    """One decoded price_history row: outcome price at a point in time."""

    outcome_id: str = Field(..., min_length=1)
    price: float = Field(..., allow_inf_nan=False)
    ts: int  # ms epoch, UTC


class PriceHistoryBucket(BaseModel):
    """One chart row: bucket start and the percentage per outcome id (row sums to 100)."""

    ts: int  # bucket start, ms epoch
    prices: dict[str, float] = Field(default_factory=dict)

    @property
    def time(self) -> str:
        return iso_from_ms(self.ts)


class PricePoint(BaseModel):
    """Single-outcome chart point (raw price, not a percentage)."""

    ts: int
    price: float
    volume: float = 0.0

    @property
    def time(self) -> str:
        return iso_from_ms(self.ts)
