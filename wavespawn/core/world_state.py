"""Mutable authoritative world state: only mutated by the WorldLoop."""

from __future__ import annotations

from wavespawn.core.models import Entity


class WorldState:
    """The single source of truth for live entities.

    Removal is the one and only place an entity leaves the simulation:
    ``remove_entity`` returns the entity the first time and ``None``
    afterwards, which is what makes retirement happen exactly once.
    """

    __slots__ = ("tick", "time", "seed", "entities", "_next_entity_id")

    def __init__(self, seed: int) -> None:
        self.tick: int = 0
        self.time: float = 0.0
        self.seed: int = seed
        self.entities: dict[int, Entity] = {}
        self._next_entity_id: int = 1

    def allocate_entity_id(self) -> int:
        eid = self._next_entity_id
        self._next_entity_id += 1
        return eid

    def add_entity(self, entity: Entity) -> None:
        self.entities[entity.id] = entity

    def remove_entity(self, entity_id: int) -> Entity | None:
        entity = self.entities.pop(entity_id, None)
        if entity is not None:
            entity.alive = False
        return entity

    def get(self, entity_id: int) -> Entity | None:
        return self.entities.get(entity_id)

    @property
    def alive_count(self) -> int:
        return len(self.entities)
