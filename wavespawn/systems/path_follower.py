"""Per-entity path following state machine.

    ADVANCING(index) --reach path[-1]--> RETIRED

Each step moves the entity straight toward ``path[index]`` by
``speed * dt`` without overshooting. Once the entity is within
``epsilon`` of the waypoint the index advances (at most once per step,
leftover movement is dropped). Reaching the end of the path retires the
follower and fires the retire callback exactly once.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from wavespawn.core.enums import FollowerState

if TYPE_CHECKING:
    from wavespawn.core.models import Entity, Vector2

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 0.1


class PathFollower:
    """Advances one entity along its wave's shared waypoint path."""

    __slots__ = ("_entity", "_path", "_speed", "_epsilon", "_on_retire", "_state", "_transitions")

    def __init__(
        self,
        entity: Entity,
        path: tuple[Vector2, ...],
        speed: float,
        on_retire: Callable[[Entity], None] | None = None,
        epsilon: float = DEFAULT_EPSILON,
    ) -> None:
        self._entity = entity
        self._path = path
        self._speed = speed
        self._epsilon = epsilon
        self._on_retire = on_retire
        self._state = FollowerState.ADVANCING
        self._transitions = 0

    @property
    def entity(self) -> Entity:
        return self._entity

    @property
    def state(self) -> FollowerState:
        return self._state

    @property
    def index(self) -> int:
        return self._entity.waypoint_index

    @property
    def transitions(self) -> int:
        """Number of waypoints reached so far."""
        return self._transitions

    @property
    def retired(self) -> bool:
        return self._state == FollowerState.RETIRED

    def step(self, dt: float) -> FollowerState:
        if self._state == FollowerState.RETIRED or dt <= 0:
            return self._state

        entity = self._entity
        target = self._path[entity.waypoint_index]
        entity.pos = entity.pos.move_towards(target, self._speed * dt)

        if entity.pos.distance(target) < self._epsilon:
            entity.waypoint_index += 1
            self._transitions += 1
            if entity.waypoint_index >= len(self._path):
                self._retire()
        return self._state

    def halt(self) -> None:
        """Retire silently, e.g. when the entity was destroyed externally."""
        self._state = FollowerState.RETIRED

    def _retire(self) -> None:
        self._state = FollowerState.RETIRED
        logger.debug("Entity %d finished its path after %d waypoints", self._entity.id, self._transitions)
        if self._on_retire is not None:
            self._on_retire(self._entity)
