"""Price subcommand: price a market snapshot (raw, effective, odds, YES/NO, limits)."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from predpricer.cli.common import load_market
from predpricer.markets.display import default_outcome_id, match_prices, outcome_display_name, resolve_market_type
from predpricer.pricing.effective import build_effective_outcome_pricing
from predpricer.pricing.formats import convert_odds
from predpricer.pricing.odds import calculate_buy_price, calculate_sell_price
from predpricer.pricing.limits import TradeLimits

app = typer.Typer(help="Price a market snapshot file")


@app.callback(invoke_without_command=True)
def price(
    ctx: typer.Context,
    file: Path = typer.Option(..., "--file", "-f", help="Market JSON (object with outcomes, or a list of outcomes)"),
    outcome: str | None = typer.Option(None, "--outcome", "-o", help="Quote YES/NO for this outcome id"),
    investment: float | None = typer.Option(None, "--investment", help="USDC amount to check against trade limits"),
    fmt: str | None = typer.Option(None, "--format", help="Odds format EU, US or UK"),
    as_json: bool = typer.Option(False, "--json", help="Print effective pricing as JSON"),
) -> None:
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    market = load_market(file)
    pricing = build_effective_outcome_pricing(market.outcomes, pool_floor=settings.pool_floor)

    if as_json:
        typer.echo(json.dumps([o.model_dump() for o in pricing.effective_outcomes], indent=2))
        return

    odds_format = (fmt or settings.odds_format).upper()
    market_type = resolve_market_type(market.type, market.outcomes)
    typer.echo(f"Market {market.id} ({market_type}), {len(market.outcomes)} outcomes")
    for o in pricing.effective_outcomes:
        typer.echo(
            f"  {o.id:<12} {o.label or o.outcome_slug or '-':<20} "
            f"raw={o.price:.2f} eff={o.effective_price:.4f} odds={convert_odds(o.effective_price, odds_format)}"
        )
    typer.echo(f"Total effective: {pricing.total_effective:.4f}")

    if market_type == "1X2":
        card = match_prices(market.outcomes, pricing)
        typer.echo(f"1X2: home {card.home.yes}¢  draw {card.draw.yes}¢  away {card.away.yes}¢")

    selected = outcome or default_outcome_id(market_type, market.outcomes)
    if selected is not None:
        if selected not in pricing.effective_by_id:
            typer.echo(f"Unknown outcome: {selected}", err=True)
            raise typer.Exit(1)
        sides = pricing.side_prices(selected)
        name = outcome_display_name(next(o for o in market.outcomes if o.id == selected))
        typer.echo(f"{name}: YES {sides.yes:.4f}  NO {sides.no:.4f}")
        typer.echo(
            f"  buy {calculate_buy_price(sides.yes, settings.buy_markup):.4f}"
            f"  sell {calculate_sell_price(sides.yes, settings.sell_markdown):.4f}"
        )

    if market.is_locked:
        typer.echo(f"Trading locked (status {market.status})")
        return

    if investment is not None:
        limits = TradeLimits.for_market(
            market,
            base_slippage_limit=settings.base_slippage_limit,
            no_cooldown_percent=settings.no_cooldown_percent,
        )
        typer.echo(f"Max bet: {limits.max_allowed_bet:.2f} USDC, no-cooldown limit: {limits.no_cooldown_limit:.2f} USDC")
        if limits.suspended:
            typer.echo("Trading suspended for this market")
        elif not limits.allows(investment):
            typer.echo(f"Investment {investment:.2f} exceeds the max allowed bet")
        else:
            typer.echo(f"Cooldown after trade: {limits.cooldown_seconds(investment)}s")
