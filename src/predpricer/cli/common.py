"""Shared CLI helpers - snapshot file loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
import typer
from pydantic import ValidationError

from predpricer.models.market import Market, Outcome

log = structlog.get_logger(__name__)


def read_json(path: Path) -> Any:
    """Load a JSON snapshot file; exit with code 1 if it is missing or malformed."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        typer.echo(f"Cannot read {path}: {e.strerror or e}", err=True)
        raise typer.Exit(1) from e
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON in {path}: {e.msg} (line {e.lineno})", err=True)
        raise typer.Exit(1) from e


def load_market(path: Path) -> Market:
    """A market snapshot object, or a bare list of outcomes wrapped as an anonymous market."""
    raw = read_json(path)
    if isinstance(raw, list):
        raw = {"id": path.stem, "outcomes": raw}
    try:
        return Market.model_validate(raw)
    except ValidationError as e:
        typer.echo(f"Invalid market snapshot in {path}: {e.error_count()} error(s)", err=True)
        for err in e.errors()[:5]:
            loc = ".".join(str(p) for p in err.get("loc", ()))
            typer.echo(f"  {loc}: {err.get('msg')}", err=True)
        raise typer.Exit(1) from e


def load_outcomes(raw: Any, path: Path) -> list[Outcome]:
    try:
        return [Outcome.model_validate(o) for o in raw or []]
    except ValidationError as e:
        typer.echo(f"Invalid outcomes in {path}: {e.error_count()} error(s)", err=True)
        raise typer.Exit(1) from e


def rows_from(raw: Any, key: str) -> list[dict[str, Any]]:
    """Rows stored either as a top-level list or under ``key``."""
    rows = raw if isinstance(raw, list) else (raw or {}).get(key, [])
    return [r for r in rows if isinstance(r, dict)]
