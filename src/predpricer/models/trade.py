"""TradePrint - canonical trade execution row."""

from pydantic import BaseModel, Field


class TradePrint(BaseModel):
    """Executed trade (one print on the market's trade tape)."""

    price: float = Field(..., ge=0, allow_inf_nan=False)
    shares: float = Field(..., ge=0, allow_inf_nan=False)
    side: str = Field(..., pattern="^(buy|sell)$")
    market_id: str | None = None
    outcome_id: str | None = None
