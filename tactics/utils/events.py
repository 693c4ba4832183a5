"""Synchronous publish/subscribe bus keyed by EventKind.

Handlers run inside ``emit`` in registration order.  A handler that raises
is logged with its traceback and the remaining handlers still run.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from tactics.core.enums import EventKind

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class EventBus:
    """Subscriber registry owned by one battle session."""

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        self._subscribers: dict[EventKind, list[Handler]] = {}

    def on(self, kind: EventKind | str, handler: Handler) -> None:
        self._subscribers.setdefault(EventKind(kind), []).append(handler)

    def off(self, kind: EventKind | str, handler: Handler) -> None:
        handlers = self._subscribers.get(EventKind(kind))
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def emit(self, kind: EventKind | str, *args: Any) -> int:
        """Deliver *args* to every handler of *kind*; return how many failed."""
        kind = EventKind(kind)
        failures = 0
        # Copy so handlers may (un)subscribe while we iterate.
        for handler in list(self._subscribers.get(kind, ())):
            try:
                handler(*args)
            except Exception:
                failures += 1
                logger.exception("Handler %r failed for event %s", handler, kind.value)
        return failures

    def handler_count(self, kind: EventKind | str) -> int:
        return len(self._subscribers.get(EventKind(kind), ()))

    def clear(self) -> None:
        self._subscribers.clear()
