"""Market, Outcome and derived priced views - canonical entities."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Outcome(BaseModel):
    """One selectable result of a market, backed by a liquidity pool.

    Snapshots are immutable; updates produce a new instance (``model_copy``).
    ``outcome_slug`` is a role tag (home/away/draw/yes/no or free-form) and is not unique.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str = ""
    outcome_slug: str | None = None
    pool: float = Field(..., allow_inf_nan=False, description="Liquidity backing this outcome; may be <= 0")
    current_fee_rate: float | None = Field(None, ge=0, allow_inf_nan=False)
    market_id: str | None = None


class PricedOutcome(BaseModel):
    """Outcome with its inverse-pool price (no fees)."""

    id: str
    label: str = ""
    pool: float = 0.0
    outcome_slug: str | None = None
    price: float = Field(..., ge=0, le=1)
    price_display: str  # e.g. "75¢"
    probability: str  # e.g. "75.0%"


class EffectiveOutcome(BaseModel):
    """Priced outcome rescaled so the set sums to 1, then marked up by its fee rate."""

    id: str
    label: str = ""
    outcome_slug: str | None = None
    price: float
    normalized_price: float
    effective_price: float
    fee_rate: float = 0.0


class Market(BaseModel):
    """Market owning an ordered outcome set (order drives 1X2 display and default selection)."""

    id: str
    type: str = ""
    liquidity_usdc: float = 0.0
    risk_multiplier: float | None = None
    status: str = "OPEN"
    outcomes: list[Outcome] = Field(default_factory=list)

    @property
    def is_locked(self) -> bool:
        return bool(self.status) and self.status != "OPEN"
