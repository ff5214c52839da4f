"""Ordered outcome-source resolution.

Precedence, first non-empty wins:
  1. realtime   - outcome set maintained from the change feed
  2. embedded   - outcomes embedded in the market snapshot
  3. refetched  - outcomes from a fresh fetch of the market
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import structlog

from predpricer.models.market import Outcome

log = structlog.get_logger(__name__)

REALTIME = "realtime"
EMBEDDED = "embedded"
REFETCHED = "refetched"
PRECEDENCE = (REALTIME, EMBEDDED, REFETCHED)


@dataclass(frozen=True)
class OutcomeSource:
    name: str
    outcomes: Sequence[Outcome] = field(default_factory=tuple)


def _belongs_to(outcomes: Sequence[Outcome], market_id: str | None) -> bool:
    """The first outcome carrying a market_id decides; sets without one are accepted."""
    if market_id is None:
        return True
    tagged = next((o.market_id for o in outcomes if o.market_id), None)
    return tagged is None or tagged == market_id


def resolve_outcomes(sources: Sequence[OutcomeSource], market_id: str | None = None) -> list[Outcome]:
    """Return the outcomes of the first non-empty source that belongs to ``market_id``.

    Sources are tried in the order given; callers list them in ``PRECEDENCE`` order.
    """
    for source in sources:
        if not source.outcomes:
            continue
        if not _belongs_to(source.outcomes, market_id):
            log.debug("outcome_source_skipped", source=source.name, market_id=market_id, reason="market_mismatch")
            continue
        log.debug("outcome_source_resolved", source=source.name, market_id=market_id, outcomes=len(source.outcomes))
        return list(source.outcomes)
    log.debug("outcome_source_empty", market_id=market_id)
    return []


def ordered_sources(
    realtime: Sequence[Outcome] = (),
    embedded: Sequence[Outcome] = (),
    refetched: Sequence[Outcome] = (),
) -> list[OutcomeSource]:
    """Build the source list in documented precedence order."""
    return [
        OutcomeSource(REALTIME, tuple(realtime)),
        OutcomeSource(EMBEDDED, tuple(embedded)),
        OutcomeSource(REFETCHED, tuple(refetched)),
    ]
