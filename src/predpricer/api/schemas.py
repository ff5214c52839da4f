"""Pydantic schemas for API request/response consistency and OpenAPI docs."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from predpricer.models.market import EffectiveOutcome, Outcome, PricedOutcome
from predpricer.models.orderbook import PriceLevel


# --- Health ---
class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


# --- Error (consistent shape for 4xx) ---
class ErrorResponse(BaseModel):
    detail: str = Field(..., description="Human-readable message")
    code: str | None = Field(None, description="Machine-readable code, e.g. unknown_outcome")


# --- Pricing ---
class PricingRequest(BaseModel):
    outcomes: list[Outcome]
    market_type: str | None = Field(None, description="Market type string; inferred from slugs when absent")
    selected_outcome_id: str | None = Field(None, description="Outcome to quote YES/NO prices for")
    odds_format: Literal["EU", "US", "UK"] | None = None


class SidePricesResponse(BaseModel):
    outcome_id: str
    yes: float
    no: float


class LegPriceResponse(BaseModel):
    yes: int
    no: int


class PricingResponse(BaseModel):
    market_type: str
    priced_outcomes: list[PricedOutcome]
    effective_outcomes: list[EffectiveOutcome]
    total_effective: float
    odds: dict[str, str] = Field(..., description="Outcome id -> odds string in the requested format")
    match_prices: dict[str, LegPriceResponse]
    default_outcome_id: str | None = None
    selected: SidePricesResponse | None = None


# --- Odds ---
class OddsResponse(BaseModel):
    probability: float
    format: str
    odds: str


# --- History ---
class HistoryRequest(BaseModel):
    outcomes: list[Outcome]
    rows: list[dict[str, Any]] = Field(default_factory=list, description="Raw price_history rows")
    timeframe: Literal["1H", "4H", "1D", "1W", "1M"] | None = None
    now_ms: int | None = Field(None, description="Anchor for the bucket grid (default: server time)")


class HistoryBucketResponse(BaseModel):
    time: str
    ts: int
    prices: dict[str, float]


class HistoryResponse(BaseModel):
    timeframe: str
    buckets: list[HistoryBucketResponse]
    current_prices: dict[str, float]
    y_domain: tuple[float, float]
    dropped_rows: int = 0


# --- Order book ---
class OrderBookRequest(BaseModel):
    trades: list[dict[str, Any]] = Field(default_factory=list, description="Raw trade rows, newest first")
    window: int | None = Field(None, ge=1, le=1000)


class OrderBookResponse(BaseModel):
    bids: list[PriceLevel]
    asks: list[PriceLevel]
    best_bid: float | None = None
    best_ask: float | None = None
    spread_cents: str
    imbalance: float | None = None
    dropped_rows: int = 0
