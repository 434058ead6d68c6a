"""Cooperative single-threaded scheduler.

Tasks are generators that ``yield Wait(seconds)`` to suspend. The
scheduler keeps a timer heap of ``(wake_time, seq, task)`` and resumes
due tasks from ``advance(dt)``; nothing runs on its own clock.

Resumes are anchored to the scheduled wake time rather than to the tick
that noticed them, so a task's timeline does not drift with tick size,
and several resumes that fall inside one large ``dt`` all run, in order,
within that single ``advance`` call.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import Generator

from wavespawn.core.errors import ContractViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Wait:
    """Suspend the yielding task for *seconds* of simulated time."""

    seconds: float


Task = Generator[Wait, None, None]


class TaskHandle:
    """Handle to a scheduled task; ``cancel`` drops its pending resume."""

    __slots__ = ("name", "_gen", "_cancelled", "_done")

    def __init__(self, name: str, gen: Task) -> None:
        self.name = name
        self._gen = gen
        self._cancelled = False
        self._done = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    def cancel(self) -> None:
        self._cancelled = True

    def _finish(self) -> None:
        if not self._done:
            self._done = True
            self._gen.close()


class Scheduler:
    """Timer heap driving generator tasks."""

    __slots__ = ("_now", "_heap", "_seq")

    def __init__(self) -> None:
        self._now: float = 0.0
        self._heap: list[tuple[float, int, TaskHandle]] = []
        self._seq: int = 0

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if not h.cancelled)

    def spawn(self, gen: Task, name: str = "task") -> TaskHandle:
        """Start *gen* immediately; it runs until its first suspension."""
        handle = TaskHandle(name, gen)
        self._resume(handle, self._now)
        return handle

    def advance(self, dt: float) -> None:
        if dt < 0:
            raise ContractViolation(f"Cannot advance the clock by a negative dt ({dt})")
        horizon = self._now + dt
        while self._heap and self._heap[0][0] <= horizon:
            wake_at, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                handle._finish()
                continue
            self._now = wake_at
            self._resume(handle, wake_at)
        self._now = horizon

    def _resume(self, handle: TaskHandle, at: float) -> None:
        try:
            request = next(handle._gen)
        except StopIteration:
            handle._done = True
            return
        except Exception:
            handle._done = True
            raise

        if handle.cancelled:
            handle._finish()
            return
        if not isinstance(request, Wait):
            handle._finish()
            raise ContractViolation(f"Task {handle.name!r} yielded {request!r}, expected Wait")

        self._seq += 1
        heapq.heappush(self._heap, (at + max(request.seconds, 0.0), self._seq, handle))
