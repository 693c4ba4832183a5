"""Event log — records every bus emission for hosts, the CLI and tests."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tactics.core.enums import EventKind

if TYPE_CHECKING:
    from tactics.utils.events import EventBus


@dataclass(frozen=True, slots=True)
class BattleEvent:
    """A single recorded emission."""

    seq: int
    kind: EventKind
    args: tuple[Any, ...] = ()


class EventLog:
    """Unbounded event log. Subscribes to every EventKind on a bus.

    Events are kept until ``clear()``; pass *maxlen* to keep only the most
    recent ones.
    """

    __slots__ = ("_buffer", "_next_seq", "_handlers")

    def __init__(self, maxlen: int | None = None) -> None:
        self._buffer: deque[BattleEvent] = deque(maxlen=maxlen)
        self._next_seq = 0
        self._handlers: dict[EventKind, Any] = {}

    def attach(self, bus: EventBus) -> None:
        for kind in EventKind:
            handler = self._recorder(kind)
            self._handlers[kind] = handler
            bus.on(kind, handler)

    def detach(self, bus: EventBus) -> None:
        for kind, handler in self._handlers.items():
            bus.off(kind, handler)
        self._handlers.clear()

    def _recorder(self, kind: EventKind):
        def record(*args: Any) -> None:
            self.append(kind, args)
        return record

    def append(self, kind: EventKind, args: tuple[Any, ...] = ()) -> BattleEvent:
        event = BattleEvent(self._next_seq, kind, args)
        self._next_seq += 1
        self._buffer.append(event)
        return event

    def since(self, seq: int) -> list[BattleEvent]:
        """Return all events with seq >= *seq*."""
        return [e for e in self._buffer if e.seq >= seq]

    def latest(self, count: int = 50) -> list[BattleEvent]:
        """Return the *count* most recent events."""
        items = list(self._buffer)
        return items[-count:]

    def of_kind(self, kind: EventKind | str) -> list[BattleEvent]:
        kind = EventKind(kind)
        return [e for e in self._buffer if e.kind == kind]

    def kinds(self) -> list[EventKind]:
        return [e.kind for e in self._buffer]

    def __len__(self) -> int:
        return len(self._buffer)

    def clear(self) -> None:
        self._buffer.clear()
