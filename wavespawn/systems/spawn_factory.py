"""Spawn factory: materialises one enemy per SpawnEvent."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from wavespawn.core.errors import ConfigurationError, ContractViolation
from wavespawn.core.models import Bounds, Entity, Vector2
from wavespawn.core.waves import EnemyKind
from wavespawn.systems.path_follower import DEFAULT_EPSILON, PathFollower

if TYPE_CHECKING:
    from wavespawn.core.waves import WaveDefinition
    from wavespawn.core.world_state import WorldState
    from wavespawn.systems.path_table import PathTable
    from wavespawn.systems.services import BoundsProvider, EntityService, FiringService, TargetProvider
    from wavespawn.systems.spawn_timer import RandomSource

logger = logging.getLogger(__name__)

DEFAULT_JITTER = 0.5


class SpawnFactory:
    """Creates an entity at a wave's first waypoint and binds it to the path.

    The new entity is registered in the WorldState and its PathFollower is
    written into the shared *followers* table before ``spawn`` returns, so
    the caller never holds on to anything.
    """

    __slots__ = (
        "_world", "_paths", "_followers", "_jitter_source", "_entities", "_firing",
        "_targets", "_bounds", "_kinds", "_on_retire", "_jitter", "_epsilon",
    )

    def __init__(
        self,
        world: WorldState,
        paths: PathTable,
        followers: dict[int, PathFollower],
        jitter_source: RandomSource,
        entities: EntityService,
        firing: FiringService,
        targets: TargetProvider,
        bounds: BoundsProvider | None = None,
        kinds: dict[str, EnemyKind] | None = None,
        on_retire: Callable[[Entity], None] | None = None,
        jitter: float = DEFAULT_JITTER,
        epsilon: float = DEFAULT_EPSILON,
    ) -> None:
        self._world = world
        self._paths = paths
        self._followers = followers
        self._jitter_source = jitter_source
        self._entities = entities
        self._firing = firing
        self._targets = targets
        self._bounds = bounds
        self._kinds = dict(kinds or {})
        self._on_retire = on_retire
        self._jitter = jitter
        self._epsilon = epsilon

    @property
    def paths(self) -> PathTable:
        return self._paths

    def kind_for(self, name: str) -> EnemyKind:
        """Look up a roster entry; without a roster every kind is a plain enemy."""
        kind = self._kinds.get(name)
        if kind is not None:
            return kind
        if self._kinds:
            raise ConfigurationError(f"Enemy kind {name!r} is not in the roster")
        return EnemyKind(name=name)

    def register_kind(self, kind: EnemyKind) -> None:
        self._kinds[kind.name] = kind

    def validate(self, wave: WaveDefinition) -> None:
        """Surface configuration problems before the first spawn."""
        self._paths.resolve(wave.path_id)
        for name in wave.enemies:
            self.kind_for(name)

    def spawn(self, wave: WaveDefinition, slot_index: int) -> Entity:
        if not 0 <= slot_index < wave.enemy_count:
            raise ContractViolation(
                f"Slot {slot_index} out of range for wave {wave.label!r} ({wave.enemy_count} enemies)"
            )

        kind = self.kind_for(wave.enemy_at(slot_index))
        path = self._paths.resolve(wave.path_id)
        pos = self._spawn_position(path[0])

        handle = self._entities.create(kind.name, pos, 0.0)
        entity = Entity(
            id=self._world.allocate_entity_id(),
            kind=kind.name,
            pos=pos,
            speed=wave.move_speed,
            path=path,
            handle=handle,
            wave_name=wave.label,
            slot_index=slot_index,
            target=self._targets.current_target(),
            hp=kind.max_hp,
            max_hp=kind.max_hp,
            score_value=kind.score_value,
        )
        self._world.add_entity(entity)
        self._followers[entity.id] = PathFollower(
            entity, path, wave.move_speed, on_retire=self._on_retire, epsilon=self._epsilon,
        )

        if kind.firing_capable:
            self._firing.set_firing(handle, True)
            entity.firing = True

        logger.debug(
            "Spawned %s #%d (wave %r slot %d) at %s",
            kind.name, entity.id, wave.label, slot_index, pos,
        )
        return entity

    def _spawn_position(self, anchor: Vector2) -> Vector2:
        # Independent draws per axis, x first
        ox = self._jitter_source.uniform(-self._jitter, self._jitter)
        oy = self._jitter_source.uniform(-self._jitter, self._jitter)
        pos = Vector2(anchor.x + ox, anchor.y + oy)
        if self._bounds is not None:
            rect = self._bounds.bounds()
            if rect is not None:
                # Stay inside the playfield but never further than the jitter from the anchor
                pos = rect.clamp(pos)
                jitter_box = Bounds(
                    anchor.x - self._jitter, anchor.y - self._jitter,
                    anchor.x + self._jitter, anchor.y + self._jitter,
                )
                pos = jitter_box.clamp(pos)
        return pos
