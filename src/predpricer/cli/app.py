"""Root CLI app - entry point and command registration."""

from pathlib import Path

import typer

from predpricer.config import get_settings
from predpricer.config.settings import configure_logging

app = typer.Typer(
    name="predpricer",
    help="predpricer - AMM outcome pricing, odds conversion, price history and trade-tape depth.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_dir: Path | None = typer.Option(
        None, "--config-dir", "-C", help="Config directory (default: ./config or package config)"
    ),
    profile: str | None = typer.Option(
        None, "--profile", "-p", help="Config profile (e.g. dev) to overlay on default.toml"
    ),
) -> None:
    """Configure logging and store options in context."""
    settings = get_settings(profile, config_dir)
    configure_logging(settings)
    ctx.obj = {"settings": settings, "config_dir": config_dir, "profile": profile}


# Subcommands registered from other modules
from predpricer.cli import api_cmd, book, history, odds, price  # noqa: E402

app.add_typer(odds.app, name="odds")
app.add_typer(price.app, name="price")
app.add_typer(history.app, name="history")
app.add_typer(book.app, name="book")
app.add_typer(api_cmd.app, name="api")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
