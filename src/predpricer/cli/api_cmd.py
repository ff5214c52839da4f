"""API server command."""

import typer

from predpricer.api.main import run_api

app = typer.Typer(help="Start the pricing API server")


@app.callback(invoke_without_command=True)
def api(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Bind host (default: config api.host)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (default: config api.port)"),
) -> None:
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    run_api(
        host=host or settings.api_host,
        port=port or settings.api_port,
        profile=ctx.obj["profile"],
    )
