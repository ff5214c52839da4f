"""Book subcommand: depth view from a trade tape dump."""

from __future__ import annotations

from pathlib import Path

import typer

from predpricer.cli.common import read_json, rows_from
from predpricer.ingestion.decode import decode_rows, decode_trade_row
from predpricer.metrics.live import depth_widths, spread_cents
from predpricer.orderbook.engine import TradeBook, build_order_book

app = typer.Typer(help="Aggregate recent trades into bid/ask levels")


@app.callback(invoke_without_command=True)
def book(
    ctx: typer.Context,
    file: Path = typer.Option(..., "--file", "-f", help="JSON list of trade rows (newest first) or {'trades': [...]}"),
    window: int | None = typer.Option(None, "--window", "-w", help="Most recent N trades (default: config)"),
    levels: int | None = typer.Option(None, "--levels", "-n", help="Levels shown per side (default: config)"),
) -> None:
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    n_trades = window or settings.trade_window
    n_levels = levels or settings.depth_levels

    rows = rows_from(read_json(file), "trades")
    trades = decode_rows(rows, decode_trade_row)
    view = build_order_book(trades, window=n_trades)

    tape = TradeBook()
    tape.load(trades[:n_trades])
    bid_bars, ask_bars = depth_widths(tape, n=n_levels)

    typer.echo(f"Spread: {spread_cents(tape)}¢  ({len(view.bids)} bid / {len(view.asks)} ask levels)")
    typer.echo("Bids:")
    for level, (cents, width) in zip(view.bids, bid_bars):
        typer.echo(f"  {cents:>3}¢  {level.size:>10.2f}  {'#' * max(1, round(width / 10))}")
    typer.echo("Asks:")
    for level, (cents, width) in zip(view.asks, ask_bars):
        typer.echo(f"  {cents:>3}¢  {level.size:>10.2f}  {'#' * max(1, round(width / 10))}")
