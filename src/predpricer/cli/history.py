"""History subcommand: bucket a price_history dump into chart rows."""

from __future__ import annotations

from pathlib import Path

import typer

from predpricer.cli.common import load_outcomes, read_json, rows_from
from predpricer.history.aggregator import PriceHistoryAggregator
from predpricer.history.chart import chart_outcomes, current_prices, fallback_history, top_outcome_ids, y_axis_domain
from predpricer.history.timeframes import TIMEFRAMES
from predpricer.ingestion.decode import decode_price_history_row, decode_rows

app = typer.Typer(help="Aggregate price history into timeframe buckets")


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    file: Path = typer.Option(..., "--file", "-f", help="JSON with 'outcomes' and 'rows' (price_history rows)"),
    timeframe: str | None = typer.Option(None, "--timeframe", "-t", help="1H, 4H, 1D, 1W or 1M"),
    now: int | None = typer.Option(None, "--now", help="Grid anchor, ms epoch (default: current time)"),
    last: int = typer.Option(10, "--last", "-n", help="Show only the last N buckets"),
) -> None:
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    tf = (timeframe or settings.default_timeframe).upper()
    if tf not in TIMEFRAMES:
        typer.echo(f"Unknown timeframe: {timeframe}", err=True)
        raise typer.Exit(2)

    raw = read_json(file)
    outcomes = load_outcomes(raw.get("outcomes") if isinstance(raw, dict) else None, file)
    rows = rows_from(raw, "rows")
    observations = decode_rows(rows, decode_price_history_row)
    if observations:
        buckets = PriceHistoryAggregator([o.id for o in outcomes], tf).build(observations, now)
    else:
        buckets = fallback_history(outcomes, now, pool_floor=settings.pool_floor)

    series = chart_outcomes(outcomes)
    typer.echo(f"{len(buckets)} buckets ({tf}), {len(observations)} observations, {len(rows) - len(observations)} dropped")
    for bucket in buckets[-last:]:
        cells = "  ".join(f"{s.slug}={bucket.prices.get(s.id, 0):.1f}" for s in series)
        typer.echo(f"  {bucket.time}  {cells}")
    low, high = y_axis_domain(buckets, top_outcome_ids(outcomes))
    now_prices = current_prices(buckets, outcomes, pool_floor=settings.pool_floor)
    typer.echo("Current: " + "  ".join(f"{s.slug}={now_prices.get(s.id, 0):.1f}%" for s in series))
    typer.echo(f"Y axis: {low:g}-{high:g}")
