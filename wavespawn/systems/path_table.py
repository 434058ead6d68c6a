"""Waypoint path registry.

Provides a `PathTable` that turns path descriptors (ordered point lists)
into read-only waypoint tuples, derived once per path id and shared by
every entity walking that path.

Usage:
    table = PathTable()
    table.register("zigzag", [(0, 10), (5, 5), (0, 0)])
    waypoints = table.resolve("zigzag")      # tuple[Vector2, ...]
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Sequence

from wavespawn.core.errors import ConfigurationError, ContractViolation
from wavespawn.core.models import Vector2

if TYPE_CHECKING:
    from wavespawn.core.models import Bounds

logger = logging.getLogger(__name__)

PointLike = Sequence[float] | Vector2


def _to_vector(point: PointLike) -> Vector2:
    if isinstance(point, Vector2):
        return point
    if len(point) != 2:
        raise ConfigurationError(f"Waypoint must have 2 coordinates, got {point!r}")
    return Vector2(float(point[0]), float(point[1]))


class PathTable:
    """Caches waypoint sequences by path id.

    Resolving the same id twice returns the same tuple object, so every
    entity of a wave shares one path without copying it.
    """

    __slots__ = ("_descriptors", "_resolved", "_bounds")

    def __init__(self, bounds: Bounds | None = None) -> None:
        self._descriptors: dict[str, tuple[PointLike, ...]] = {}
        self._resolved: dict[str, tuple[Vector2, ...]] = {}
        self._bounds = bounds

    def register(self, path_id: str, points: Iterable[PointLike]) -> None:
        """Record the descriptor for *path_id*; re-registering replaces it."""
        self._descriptors[path_id] = tuple(points)
        self._resolved.pop(path_id, None)

    def resolve(self, path_id: str) -> tuple[Vector2, ...]:
        cached = self._resolved.get(path_id)
        if cached is not None:
            return cached

        if path_id not in self._descriptors:
            raise ContractViolation(f"Path {path_id!r} is not registered")

        waypoints = tuple(_to_vector(p) for p in self._descriptors[path_id])
        if not waypoints:
            raise ConfigurationError(f"Path {path_id!r} has no waypoints")

        if self._bounds is not None:
            outside = [wp for wp in waypoints if not self._bounds.contains(wp)]
            if outside:
                logger.warning("Path %r has %d waypoint(s) outside the playfield", path_id, len(outside))

        self._resolved[path_id] = waypoints
        return waypoints

    def path_ids(self) -> list[str]:
        return list(self._descriptors)

    def __contains__(self, path_id: object) -> bool:
        return path_id in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)
