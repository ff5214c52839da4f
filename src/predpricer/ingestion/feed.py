"""Realtime change feed - injected per process, explicit open/close, plus a burst debouncer."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Literal, Protocol

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger(__name__)

DEFAULT_DEBOUNCE_SEC = 0.4

ChangeKind = Literal["INSERT", "UPDATE", "DELETE"]
Handler = Callable[["ChangeEvent"], None]
Unsubscribe = Callable[[], None]


class ChangeEvent(BaseModel):
    """One row change on a store table. For DELETE, ``row`` carries the old row."""

    table: str
    kind: ChangeKind
    row: dict[str, Any] = Field(default_factory=dict)


class FeedClosedError(RuntimeError):
    """Subscribe or publish on a feed that is not open."""


class ChangeFeed(Protocol):
    """Source of change events. The caller owns it and wires it into sessions."""

    @property
    def is_open(self) -> bool: ...

    def open(self) -> None: ...

    def close(self) -> None: ...

    def subscribe(
        self,
        table: str,
        handler: Handler,
        *,
        match: dict[str, Any] | None = None,
    ) -> Unsubscribe: ...


class _Subscription:
    __slots__ = ("table", "handler", "match", "active")

    def __init__(self, table: str, handler: Handler, match: dict[str, Any] | None) -> None:
        self.table = table
        self.handler = handler
        self.match = dict(match or {})
        self.active = True

    def accepts(self, event: ChangeEvent) -> bool:
        if not self.active or event.table != self.table:
            return False
        return all(event.row.get(column) == value for column, value in self.match.items())


class InMemoryChangeFeed:
    """ChangeFeed backed by direct ``publish`` calls (tests, replays, local wiring).

    Handlers run synchronously in subscription order. A handler's exception propagates
    to the publisher.
    """

    def __init__(self) -> None:
        self._subs: list[_Subscription] = []
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        self._open = True
        log.debug("change_feed_opened")

    def close(self) -> None:
        for sub in self._subs:
            sub.active = False
        self._subs = []
        self._open = False
        log.debug("change_feed_closed")

    def subscribe(
        self,
        table: str,
        handler: Handler,
        *,
        match: dict[str, Any] | None = None,
    ) -> Unsubscribe:
        if not self._open:
            raise FeedClosedError(f"cannot subscribe to {table!r}: feed is closed")
        sub = _Subscription(table, handler, match)
        self._subs.append(sub)

        def unsubscribe() -> None:
            sub.active = False
            if sub in self._subs:
                self._subs.remove(sub)

        return unsubscribe

    def publish(self, event: ChangeEvent) -> int:
        """Dispatch ``event`` to matching handlers. Returns how many handlers ran."""
        if not self._open:
            raise FeedClosedError(f"cannot publish to {event.table!r}: feed is closed")
        delivered = 0
        for sub in list(self._subs):
            if sub.accepts(event):
                sub.handler(event)
                delivered += 1
        return delivered

    @property
    def subscription_count(self) -> int:
        return len(self._subs)


class Debouncer:
    """Coalesce bursts of triggers into one callback ``delay_sec`` after the last trigger.

    Scheduling uses the running asyncio loop. Outside a loop there is nothing to
    wait on, so ``trigger`` runs the callback immediately.
    """

    def __init__(self, callback: Callable[[], None], delay_sec: float = DEFAULT_DEBOUNCE_SEC) -> None:
        self.callback = callback
        self.delay_sec = delay_sec
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def _fire(self) -> None:
        self._handle = None
        self.callback()

    def trigger(self) -> None:
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.callback()
            return
        self._handle = loop.call_later(self.delay_sec, self._fire)

    def flush(self) -> None:
        """Run a pending callback now."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
