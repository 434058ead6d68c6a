"""Thread-safe buffer of wave events: wave starts, spawns, retirements, kills."""

from __future__ import annotations

import threading
from collections import Counter, deque
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class SimEvent:
    """One thing that happened during a tick."""

    tick: int
    category: str                     # "wave" | "spawn" | "retire" | "kill"
    message: str
    entity_ids: tuple[int, ...] = ()
    metadata: dict[str, Any] | None = None


class EventLog:
    """Append-only event history shared between the tick thread and readers.

    Keeps everything unless *maxlen* is given, in which case the oldest
    events are dropped first. Every read returns a copy.
    """

    __slots__ = ("_events", "_lock")

    def __init__(self, maxlen: int | None = None) -> None:
        self._events: deque[SimEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def append(self, event: SimEvent) -> None:
        with self._lock:
            self._events.append(event)

    def append_many(self, events: list[SimEvent]) -> None:
        with self._lock:
            self._events.extend(events)

    def _select(self, keep) -> list[SimEvent]:
        with self._lock:
            return [e for e in self._events if keep(e)]

    def since_tick(self, tick: int) -> list[SimEvent]:
        return self._select(lambda e: e.tick >= tick)

    def by_category(self, category: str) -> list[SimEvent]:
        return self._select(lambda e: e.category == category)

    def for_entity(self, entity_id: int) -> list[SimEvent]:
        """Lifecycle of one entity, oldest first."""
        return self._select(lambda e: entity_id in e.entity_ids)

    def counts(self) -> dict[str, int]:
        with self._lock:
            return dict(Counter(e.category for e in self._events))

    def latest(self, count: int = 50) -> list[SimEvent]:
        with self._lock:
            snapshot = list(self._events)
        return snapshot[-count:]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
