"""PriceLevel, OrderBookView - depth-style view aggregated from trade prints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PriceLevel(BaseModel):
    """Single price level (price -> aggregated size)."""

    price: float = Field(..., ge=0)
    size: float = Field(..., ge=0)


class OrderBookView(BaseModel):
    """Bids (buy prints, best first) and asks (sell prints, best first)."""

    market_id: str | None = None
    outcome_id: str | None = None
    bids: list[PriceLevel] = Field(default_factory=list)
    asks: list[PriceLevel] = Field(default_factory=list)
