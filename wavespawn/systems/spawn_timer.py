"""Bounded-random spawn intervals."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from wavespawn.core.waves import SpawnTiming


class RandomSource(Protocol):
    def uniform(self, low: float, high: float) -> float: ...


class SpawnTimer:
    """Draws a wait from [base - variance, base + variance], floored at minimum.

    The floor is the only bound enforced: a draw below the minimum is
    clamped, never re-rolled, so a negative lower range simply piles up
    on the minimum.
    """

    __slots__ = ("_source",)

    def __init__(self, source: RandomSource) -> None:
        self._source = source

    def next(self, timing: SpawnTiming) -> float:
        value = self._source.uniform(timing.low, timing.high)
        return max(value, timing.minimum)
