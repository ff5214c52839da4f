"""Client-side trade limits: max bet, cooldown-free size, predicted cooldown, proceeds estimates."""

from __future__ import annotations

import math
from dataclasses import dataclass

from predpricer.models.market import Market

BASE_SLIPPAGE_LIMIT = 0.15
NO_COOLDOWN_PERCENT = 0.10
# Trades above this share of liquidity (in percent) trigger a cooldown.
COOLDOWN_FREE_PERCENT = 10
COOLDOWN_MINUTES_FACTOR = 0.8
MIN_COOLDOWN_SECONDS = 5


@dataclass(frozen=True)
class TradeLimits:
    """Limits derived from a market's liquidity and risk multiplier."""

    liquidity: float
    risk_multiplier: float = 1.0
    base_slippage_limit: float = BASE_SLIPPAGE_LIMIT
    no_cooldown_percent: float = NO_COOLDOWN_PERCENT

    @classmethod
    def for_market(
        cls,
        market: Market,
        base_slippage_limit: float = BASE_SLIPPAGE_LIMIT,
        no_cooldown_percent: float = NO_COOLDOWN_PERCENT,
    ) -> TradeLimits:
        risk = market.risk_multiplier if market.risk_multiplier is not None else 1.0
        return cls(
            liquidity=market.liquidity_usdc,
            risk_multiplier=risk,
            base_slippage_limit=base_slippage_limit,
            no_cooldown_percent=no_cooldown_percent,
        )

    @property
    def max_allowed_bet(self) -> float:
        return self.liquidity * self.base_slippage_limit * self.risk_multiplier

    @property
    def no_cooldown_limit(self) -> float:
        return min(self.liquidity * self.no_cooldown_percent, self.max_allowed_bet)

    @property
    def suspended(self) -> bool:
        return self.risk_multiplier <= 0

    def allows(self, investment: float) -> bool:
        """True if ``investment`` is positive and within the max allowed bet of a live market."""
        return not self.suspended and 0 < investment <= self.max_allowed_bet

    def cooldown_seconds(self, investment: float) -> int:
        """Predicted cooldown after buying ``investment`` USDC: 0.8 * (pct - 10)^2 minutes, at least 5 s."""
        if investment <= 0 or self.liquidity <= 0:
            return 0
        trade_percent = (investment / self.liquidity) * 100
        if trade_percent <= COOLDOWN_FREE_PERCENT:
            return 0
        minutes = COOLDOWN_MINUTES_FACTOR * (trade_percent - COOLDOWN_FREE_PERCENT) ** 2
        return max(MIN_COOLDOWN_SECONDS, math.floor(minutes * 60))


def shares_to_sell(position_shares: float, sell_percent: float) -> float:
    return position_shares * (sell_percent / 100)


def estimate_sell_proceeds(position_shares: float, sell_percent: float, price: float) -> float:
    """Proceeds of selling ``sell_percent`` of a position at ``price`` per share."""
    return shares_to_sell(position_shares, sell_percent) * price
