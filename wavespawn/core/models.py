"""Core data models: Vector2, Bounds, Entity, SpawnEvent."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wavespawn.core.waves import WaveDefinition


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D float coordinate."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def distance(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def move_towards(self, target: Vector2, max_delta: float) -> Vector2:
        """Step straight toward *target* by at most *max_delta*, never past it."""
        dx = target.x - self.x
        dy = target.y - self.y
        dist = math.hypot(dx, dy)
        if dist <= max_delta or dist == 0.0:
            return target
        return Vector2(self.x + dx / dist * max_delta, self.y + dy / dist * max_delta)

    def __repr__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned playfield rectangle."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def contains(self, pos: Vector2) -> bool:
        return self.min_x <= pos.x <= self.max_x and self.min_y <= pos.y <= self.max_y

    def clamp(self, pos: Vector2) -> Vector2:
        return Vector2(
            min(max(pos.x, self.min_x), self.max_x),
            min(max(pos.y, self.min_y), self.max_y),
        )


@dataclass(frozen=True, slots=True)
class SpawnEvent:
    """One scheduled spawn: consumed immediately, never queued."""

    wave: WaveDefinition
    slot_index: int
    scheduled_at: float


@dataclass(slots=True)
class Entity:
    """A live enemy owned by the orchestration system until retirement."""

    id: int
    kind: str
    pos: Vector2
    speed: float
    path: tuple[Vector2, ...]          # Shared with every entity of the same wave
    handle: Any = None                 # Token from the instantiation service
    waypoint_index: int = 0
    wave_name: str = ""
    slot_index: int = 0
    firing: bool = False
    target: Any = None                 # Handle from the target provider, or None
    hp: int = 100
    max_hp: int = 100
    score_value: int = 0
    alive: bool = True

    @property
    def current_waypoint(self) -> Vector2 | None:
        if self.waypoint_index < len(self.path):
            return self.path[self.waypoint_index]
        return None
