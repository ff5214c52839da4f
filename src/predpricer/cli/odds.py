"""Odds subcommand: convert a probability to display odds."""

import typer

from predpricer.pricing.formats import convert_odds, format_moneyline, format_outcome_price

app = typer.Typer(help="Convert a probability to EU/US/UK odds")


@app.callback(invoke_without_command=True)
def odds(
    ctx: typer.Context,
    probability: float = typer.Option(..., "--probability", "-p", help="Implied probability in (0, 1)"),
    fmt: str | None = typer.Option(None, "--format", "-f", help="EU, US or UK (default: config display.odds_format)"),
    all_formats: bool = typer.Option(False, "--all", help="Show every format"),
) -> None:
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    if all_formats:
        for name in ("EU", "US", "UK"):
            typer.echo(f"{name}: {convert_odds(probability, name)}")
        typer.echo(f"US price: {format_outcome_price(probability, 'US')}")
        return
    chosen = (fmt or settings.odds_format).upper()
    if chosen not in ("EU", "US", "UK"):
        typer.echo(f"Unknown odds format: {fmt}", err=True)
        raise typer.Exit(2)
    line = convert_odds(probability, chosen)
    if chosen == "US" and format_moneyline(probability) is not None:
        line = f"{line} ({format_outcome_price(probability, 'US')})"
    typer.echo(line)
