"""FastAPI backend exposing the pricing computations to UI layers."""

from __future__ import annotations

from typing import Literal

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from predpricer import __version__
from predpricer.api.schemas import (
    ErrorResponse,
    HealthResponse,
    HistoryBucketResponse,
    HistoryRequest,
    HistoryResponse,
    LegPriceResponse,
    OddsResponse,
    OrderBookRequest,
    OrderBookResponse,
    PricingRequest,
    PricingResponse,
    SidePricesResponse,
)
from predpricer.config import get_settings
from predpricer.history.aggregator import PriceHistoryAggregator
from predpricer.history.chart import current_prices, fallback_history, top_outcome_ids, y_axis_domain
from predpricer.ingestion.decode import decode_price_history_row, decode_rows, decode_trade_row
from predpricer.markets.display import default_outcome_id, match_prices, resolve_market_type
from predpricer.metrics.live import imbalance, spread_cents
from predpricer.orderbook.engine import TradeBook
from predpricer.pricing.effective import build_effective_outcome_pricing
from predpricer.pricing.formats import convert_odds

# Set by run_api() so request handlers read the same profile as the CLI.
_config_profile: str | None = None

app = FastAPI(title="predpricer API", version=__version__)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


def _error_json(code: str, message: str, status_code: int = 404) -> JSONResponse:
    """Return consistent error JSON: { detail, code }."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code},
    )


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@app.post(
    "/pricing",
    response_model=PricingResponse,
    responses={404: {"description": "Selected outcome is not in the set", "model": ErrorResponse}},
)
def pricing(req: PricingRequest):
    """Priced and fee-inclusive outcomes, odds strings, 1X2 card prices and optional YES/NO quote."""
    settings = get_settings(_config_profile)
    result = build_effective_outcome_pricing(req.outcomes, pool_floor=settings.pool_floor)
    fmt = req.odds_format or settings.odds_format
    market_type = resolve_market_type(req.market_type, req.outcomes)

    selected = None
    if req.selected_outcome_id is not None:
        if req.selected_outcome_id not in result.effective_by_id:
            return _error_json("unknown_outcome", f"Outcome not in set: {req.selected_outcome_id}")
        sides = result.side_prices(req.selected_outcome_id)
        selected = SidePricesResponse(outcome_id=req.selected_outcome_id, yes=sides.yes, no=sides.no)

    card = match_prices(req.outcomes, result)
    return PricingResponse(
        market_type=market_type,
        priced_outcomes=result.priced_outcomes,
        effective_outcomes=result.effective_outcomes,
        total_effective=result.total_effective,
        odds={o.id: convert_odds(o.effective_price, fmt) for o in result.effective_outcomes},
        match_prices={
            leg: LegPriceResponse(yes=price.yes, no=price.no)
            for leg, price in (("home", card.home), ("draw", card.draw), ("away", card.away))
        },
        default_outcome_id=default_outcome_id(market_type, req.outcomes),
        selected=selected,
    )


@app.get("/odds", response_model=OddsResponse)
def odds(
    probability: float = Query(..., description="Implied probability, usually in (0, 1)"),
    fmt: Literal["EU", "US", "UK"] | None = Query(None, alias="format"),
) -> OddsResponse:
    """Convert one probability to a decimal, moneyline or fractional odds string."""
    chosen = fmt or get_settings(_config_profile).odds_format
    return OddsResponse(probability=probability, format=chosen, odds=convert_odds(probability, chosen))


@app.post("/history", response_model=HistoryResponse)
def history(req: HistoryRequest) -> HistoryResponse:
    """Bucketed chart rows (percent per outcome) for a timeframe. Flat fallback when no row decodes."""
    settings = get_settings(_config_profile)
    timeframe = req.timeframe or settings.default_timeframe
    observations = decode_rows(req.rows, decode_price_history_row)
    if observations:
        aggregator = PriceHistoryAggregator([o.id for o in req.outcomes], timeframe)
        buckets = aggregator.build(observations, req.now_ms)
    else:
        buckets = fallback_history(req.outcomes, req.now_ms, pool_floor=settings.pool_floor)
    return HistoryResponse(
        timeframe=timeframe,
        buckets=[HistoryBucketResponse(time=b.time, ts=b.ts, prices=b.prices) for b in buckets],
        current_prices=current_prices(buckets, req.outcomes, pool_floor=settings.pool_floor),
        y_domain=y_axis_domain(buckets, top_outcome_ids(req.outcomes)),
        dropped_rows=len(req.rows) - len(observations),
    )


@app.post("/orderbook", response_model=OrderBookResponse)
def orderbook(req: OrderBookRequest) -> OrderBookResponse:
    """Depth-style view of the most recent trade prints."""
    settings = get_settings(_config_profile)
    window = req.window or settings.trade_window
    recent = req.trades[:window]
    trades = decode_rows(recent, decode_trade_row)
    book = TradeBook()
    book.load(trades)
    view = book.to_view()
    return OrderBookResponse(
        bids=view.bids,
        asks=view.asks,
        best_bid=book.best_bid,
        best_ask=book.best_ask,
        spread_cents=spread_cents(book),
        imbalance=imbalance(book),
        dropped_rows=len(recent) - len(trades),
    )


def run_api(host: str = "127.0.0.1", port: int = 8000, profile: str | None = None) -> None:
    global _config_profile
    _config_profile = profile
    import uvicorn

    uvicorn.run("predpricer.api.main:app", host=host, port=port, reload=False)
