"""Store row -> typed model decoding. Rows are decoded strictly here, before any aggregator sees them.

Each decoder returns ``Ok(model)`` or ``Err(DecodeError)`` and never raises; ``decode_rows``
keeps the successes and logs each dropped row.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Generic, Iterable, TypeVar, Union

import structlog
from pydantic import ValidationError

from predpricer.models.history import EPOCH, PriceObservation
from predpricer.models.market import Outcome
from predpricer.models.trade import TradePrint

log = structlog.get_logger(__name__)

T = TypeVar("T")

TIME_COLUMNS = ("time", "created_at")
OUTCOME_COLUMNS = ("outcome_id",)

_UTC_SUFFIX = re.compile(r"\+00(?::?00)?$")
_HOUR_OFFSET = re.compile(r"[+-]\d{2}$")


@dataclass(frozen=True)
class DecodeError:
    table: str
    reason: str
    row: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: DecodeError

    @property
    def ok(self) -> bool:
        return False


DecodeResult = Union[Ok[T], Err]


def normalize_timestamp(value: Any) -> int | None:
    """Parse a store timestamp to epoch ms (UTC), or None if it cannot be parsed.

    Accepts 'YYYY-MM-DD HH:MM:SS[.ffffff]+00' style values as well as ISO-8601. A
    '+00', '+0000' or '+00:00' suffix means UTC; a bare '+HH' offset on a value with
    a time part is read as '+HH:00'. Values without an offset are taken as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if not text:
            return None
        if "T" not in text:
            text = text.replace(" ", "T", 1)
        text = _UTC_SUFFIX.sub("Z", text)
        if "T" in text and _HOUR_OFFSET.search(text):
            text = f"{text}:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt.astimezone(timezone.utc) - EPOCH) // timedelta(milliseconds=1)


def _first_present(row: dict[str, Any], columns: Iterable[str]) -> Any:
    for column in columns:
        if row.get(column) is not None:
            return row[column]
    return None


def _validation_reason(exc: ValidationError) -> str:
    first = exc.errors()[0]
    where = ".".join(str(part) for part in first.get("loc", ())) or "row"
    return f"{where}: {first.get('msg', 'invalid')}"


def decode_outcome_row(row: dict[str, Any]) -> DecodeResult[Outcome]:
    """outcomes row -> Outcome. ``pool`` is required; numeric strings are accepted."""
    try:
        return Ok(Outcome.model_validate(row))
    except ValidationError as e:
        return Err(DecodeError("outcomes", _validation_reason(e), row))


def decode_trade_row(row: dict[str, Any]) -> DecodeResult[TradePrint]:
    """trades row -> TradePrint."""
    try:
        return Ok(TradePrint.model_validate(row))
    except ValidationError as e:
        return Err(DecodeError("trades", _validation_reason(e), row))


def decode_price_history_row(row: dict[str, Any]) -> DecodeResult[PriceObservation]:
    """price_history row -> PriceObservation. Time comes from ``time`` or ``created_at``; a missing price is 0."""
    ts = None
    for column in TIME_COLUMNS:
        if row.get(column) is not None:
            ts = normalize_timestamp(row[column])
            if ts is not None:
                break
    if ts is None:
        return Err(DecodeError("price_history", "unparseable timestamp", row))

    outcome_id = _first_present(row, OUTCOME_COLUMNS)
    if outcome_id is None or not str(outcome_id):
        return Err(DecodeError("price_history", "missing outcome_id", row))

    try:
        return Ok(PriceObservation(outcome_id=str(outcome_id), price=row.get("price") or 0, ts=ts))
    except ValidationError as e:
        return Err(DecodeError("price_history", _validation_reason(e), row))


DECODERS: dict[str, Callable[[dict[str, Any]], DecodeResult[Any]]] = {
    "outcomes": decode_outcome_row,
    "trades": decode_trade_row,
    "price_history": decode_price_history_row,
}


def decode_rows(rows: Iterable[dict[str, Any]], decoder: Callable[[dict[str, Any]], DecodeResult[T]]) -> list[T]:
    """Decode every row, keeping successes in order. Dropped rows are logged, never raised."""
    out: list[T] = []
    for row in rows:
        result = decoder(row)
        if isinstance(result, Ok):
            out.append(result.value)
        else:
            log.warning(
                "row_decode_failed",
                table=result.error.table,
                reason=result.error.reason,
            )
    return out
