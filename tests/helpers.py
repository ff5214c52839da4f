"""Test data builders."""

from datetime import datetime, timezone

from predpricer.models.market import Outcome

# Aligned to a whole minute so 1H/4H grids end exactly here.
NOW_MS = 1_700_000_040_000


def make_outcome(oid: str, pool: float, slug: str | None = None, fee: float | None = None, **kw) -> Outcome:
    return Outcome(id=oid, label=kw.pop("label", oid.upper()), pool=pool, outcome_slug=slug, current_fee_rate=fee, **kw)


def iso(ms: int) -> str:
    """Store-style timestamp for epoch ms, e.g. '2023-11-14 22:14:00+00'."""
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M:%S") + "+00"
