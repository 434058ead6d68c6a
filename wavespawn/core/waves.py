"""Wave definitions: immutable, reusable descriptions of enemy batches.

A wave names its roster (enemy-kind identifiers, in spawn order), the
path every member follows, the shared move speed and the bounded-random
spawn cadence. Definitions are validated on construction so a malformed
plan fails when it is built, before any sequencer starts.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wavespawn.core.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class SpawnTiming:
    """Bounded-random interval parameters (seconds)."""

    base: float = 1.0
    variance: float = 0.5
    minimum: float = 0.2

    def __post_init__(self) -> None:
        if self.base < 0 or self.variance < 0 or self.minimum < 0:
            raise ConfigurationError(
                f"Spawn timing values must be >= 0 (base={self.base}, "
                f"variance={self.variance}, minimum={self.minimum})"
            )
        if self.minimum > self.base:
            raise ConfigurationError(
                f"Spawn timing minimum {self.minimum} exceeds base {self.base}"
            )

    @property
    def low(self) -> float:
        return self.base - self.variance

    @property
    def high(self) -> float:
        return self.base + self.variance


@dataclass(frozen=True, slots=True)
class EnemyKind:
    """Roster entry for an enemy-kind identifier."""

    name: str
    firing_capable: bool = False
    max_hp: int = 100
    score_value: int = 50


@dataclass(frozen=True, slots=True)
class WaveDefinition:
    """One wave: which kinds, in which order, along which path, how fast."""

    enemies: tuple[str, ...]
    path_id: str
    move_speed: float = 5.0
    timing: SpawnTiming = field(default_factory=SpawnTiming)
    name: str = ""

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so instances stay hashable
        if not isinstance(self.enemies, tuple):
            object.__setattr__(self, "enemies", tuple(self.enemies))
        if not self.path_id:
            raise ConfigurationError(f"Wave {self.label!r} has no path id")
        if self.move_speed <= 0:
            raise ConfigurationError(
                f"Wave {self.label!r} move speed must be positive, got {self.move_speed}"
            )

    @property
    def enemy_count(self) -> int:
        return len(self.enemies)

    @property
    def label(self) -> str:
        return self.name or self.path_id

    def enemy_at(self, slot_index: int) -> str:
        return self.enemies[slot_index]


@dataclass(frozen=True, slots=True)
class WavePlan:
    """Everything an external loader hands to the orchestration system."""

    waves: tuple[WaveDefinition, ...]
    paths: dict[str, tuple[tuple[float, float], ...]]
    kinds: dict[str, EnemyKind] = field(default_factory=dict)
    time_between_waves: float = 0.0
    loop: bool = False

    def __post_init__(self) -> None:
        if self.time_between_waves < 0:
            raise ConfigurationError(
                f"time_between_waves must be >= 0, got {self.time_between_waves}"
            )
