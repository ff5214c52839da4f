"""Per-market session - wires an injected ChangeFeed into pricing, history and trade-tape aggregators.

One session per market, and it is the only writer to its aggregators. Rows from the
feed are decoded strictly before they reach any aggregator; outcome changes are
debounced into a single pricing recompute.
"""

from __future__ import annotations

import bisect
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence

import structlog

from predpricer.history.aggregator import PriceHistoryAggregator
from predpricer.history.timeframes import Timeframe, timeframe_range
from predpricer.ingestion.decode import DECODERS, Ok, decode_price_history_row, decode_rows, decode_trade_row
from predpricer.ingestion.feed import DEFAULT_DEBOUNCE_SEC, ChangeEvent, ChangeFeed, Debouncer, Unsubscribe
from predpricer.models.history import PriceObservation
from predpricer.models.market import Outcome
from predpricer.orderbook.aggregator import OrderBookAggregator
from predpricer.orderbook.engine import TRADE_WINDOW
from predpricer.pricing.effective import EffectivePricing, build_effective_outcome_pricing
from predpricer.pricing.odds import POOL_FLOOR

if TYPE_CHECKING:
    from predpricer.config.settings import Settings

log = structlog.get_logger(__name__)

OUTCOMES_TABLE = "outcomes"
PRICE_HISTORY_TABLE = "price_history"
TRADES_TABLE = "trades"


def _observation_ts(obs: PriceObservation) -> int:
    return obs.ts


class MarketSession:
    """Live state for one market: outcome set, effective pricing, price history and trade books."""

    def __init__(
        self,
        feed: ChangeFeed,
        market_id: str,
        outcomes: Sequence[Outcome] = (),
        timeframe: Timeframe = "1D",
        debounce_sec: float = DEFAULT_DEBOUNCE_SEC,
        trade_window: int = TRADE_WINDOW,
        on_pricing: Callable[[EffectivePricing], None] | None = None,
        pool_floor: float = POOL_FLOOR,
    ) -> None:
        self.feed = feed
        self.market_id = market_id
        self.timeframe = timeframe
        self.pool_floor = pool_floor
        self.on_pricing = on_pricing
        self._outcomes: list[Outcome] = list(outcomes)
        # in-window observations, ascending by ts
        self._observations: list[PriceObservation] = []
        self.history = PriceHistoryAggregator([o.id for o in self._outcomes], timeframe)
        self.books = OrderBookAggregator(window=trade_window)
        self.pricing = build_effective_outcome_pricing(self._outcomes, pool_floor=pool_floor)
        self._debouncer = Debouncer(self._recompute_pricing, debounce_sec)
        self._unsubscribes: list[Unsubscribe] = []
        self._now: int | None = None

    @classmethod
    def from_settings(
        cls,
        feed: ChangeFeed,
        market_id: str,
        settings: Settings,
        outcomes: Sequence[Outcome] = (),
        on_pricing: Callable[[EffectivePricing], None] | None = None,
    ) -> MarketSession:
        """Session using the configured timeframe, debounce delay, trade window and pool floor."""
        return cls(
            feed,
            market_id,
            outcomes,
            timeframe=settings.default_timeframe,
            debounce_sec=settings.debounce_sec,
            trade_window=settings.trade_window,
            on_pricing=on_pricing,
            pool_floor=settings.pool_floor,
        )

    @property
    def outcomes(self) -> list[Outcome]:
        return list(self._outcomes)

    @property
    def observations(self) -> list[PriceObservation]:
        """Observations still inside the history window, oldest first."""
        return list(self._observations)

    @property
    def is_open(self) -> bool:
        return bool(self._unsubscribes)

    def open(
        self,
        history_rows: Iterable[dict[str, Any]] = (),
        trade_rows: Iterable[dict[str, Any]] = (),
        now: int | None = None,
    ) -> None:
        """Seed from an initial fetch, then subscribe to this market's tables on the feed."""
        self._now = now
        self._observations = sorted(decode_rows(history_rows, decode_price_history_row), key=_observation_ts)
        self._prune_observations()
        self.history.build(self._observations, now)
        self.books.load(decode_rows(trade_rows, decode_trade_row))
        self._recompute_pricing()

        match = {"market_id": self.market_id}
        self._unsubscribes = [
            self.feed.subscribe(OUTCOMES_TABLE, self._on_outcome_event, match=match),
            self.feed.subscribe(PRICE_HISTORY_TABLE, self._on_price_event, match=match),
            self.feed.subscribe(TRADES_TABLE, self._on_trade_event, match=match),
        ]
        log.info(
            "market_session_opened",
            market_id=self.market_id,
            outcomes=len(self._outcomes),
            observations=len(self._observations),
        )

    def close(self) -> None:
        """Unsubscribe from the feed and drop any pending recompute."""
        for unsubscribe in self._unsubscribes:
            unsubscribe()
        self._unsubscribes = []
        self._debouncer.cancel()
        log.info("market_session_closed", market_id=self.market_id)

    def flush(self) -> None:
        """Run a pending pricing recompute now."""
        self._debouncer.flush()

    def _window_start(self) -> int:
        return timeframe_range(self.timeframe, self._now).start_ms

    def _prune_observations(self) -> int:
        """Drop observations older than the history grid; returns the grid start."""
        start = self._window_start()
        stale = bisect.bisect_left(self._observations, start, key=_observation_ts)
        if stale:
            del self._observations[:stale]
        return start

    def _recompute_pricing(self) -> None:
        self.pricing = build_effective_outcome_pricing(self._outcomes, pool_floor=self.pool_floor)
        if self.on_pricing is not None:
            self.on_pricing(self.pricing)

    def _set_outcomes(self, outcomes: list[Outcome]) -> None:
        before = [o.id for o in self._outcomes]
        self._outcomes = outcomes
        after = [o.id for o in outcomes]
        if after != before:
            self._prune_observations()
            self.history = PriceHistoryAggregator(after, self.timeframe)
            self.history.build(self._observations, self._now)
        self._debouncer.trigger()

    def _decode(self, table: str, row: dict[str, Any]) -> Any | None:
        result = DECODERS[table](row)
        if isinstance(result, Ok):
            return result.value
        log.warning("row_decode_failed", table=table, reason=result.error.reason)
        return None

    def _merge_outcome(self, row: dict[str, Any]) -> Outcome | None:
        """Overlay the row's non-null fields on the known outcome, then decode the result strictly."""
        existing = next((o for o in self._outcomes if o.id == row.get("id")), None)
        merged = existing.model_dump() if existing is not None else {}
        merged.update({k: v for k, v in row.items() if v is not None})
        return self._decode(OUTCOMES_TABLE, merged)

    def _on_outcome_event(self, event: ChangeEvent) -> None:
        outcome_id = event.row.get("id")
        if event.kind == "DELETE":
            remaining = [o for o in self._outcomes if o.id != outcome_id]
            if len(remaining) != len(self._outcomes):
                self._set_outcomes(remaining)
            return

        outcome = self._merge_outcome(event.row)
        if outcome is None:
            return
        if outcome.market_id and outcome.market_id != self.market_id:
            return
        if any(o.id == outcome.id for o in self._outcomes):
            updated = [outcome if o.id == outcome.id else o for o in self._outcomes]
        else:
            updated = [*self._outcomes, outcome]
        self._set_outcomes(updated)

    def _on_price_event(self, event: ChangeEvent) -> None:
        if event.kind != "INSERT":
            return
        observation = self._decode(PRICE_HISTORY_TABLE, event.row)
        if observation is None:
            return
        if observation.ts < self._prune_observations():
            return
        bisect.insort(self._observations, observation, key=_observation_ts)
        self.history.apply(observation)

    def _on_trade_event(self, event: ChangeEvent) -> None:
        if event.kind != "INSERT":
            return
        trade = self._decode(TRADES_TABLE, event.row)
        if trade is not None:
            self.books.on_trade(trade)
