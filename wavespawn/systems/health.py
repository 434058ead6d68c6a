"""Health and score reactions to hits.

Not part of the spawning core: a small event-reaction table that turns
hits into hp loss, and lethal hits into score plus external destruction
through the WorldLoop.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wavespawn.core.enums import RetireReason

if TYPE_CHECKING:
    from wavespawn.engine.world_loop import WorldLoop

logger = logging.getLogger(__name__)


class ScoreKeeper:
    """Running score, never below zero."""

    __slots__ = ("_score",)

    def __init__(self) -> None:
        self._score = 0

    @property
    def score(self) -> int:
        return self._score

    def modify(self, amount: int) -> int:
        self._score = max(self._score + amount, 0)
        return self._score

    def reset(self) -> None:
        self._score = 0


class HealthSystem:
    """Applies hits to live entities and destroys them through the WorldLoop at 0 hp."""

    __slots__ = ("_loop", "_score")

    def __init__(self, loop: WorldLoop, score: ScoreKeeper | None = None) -> None:
        self._loop = loop
        self._score = score or ScoreKeeper()

    @property
    def score(self) -> ScoreKeeper:
        return self._score

    def hit(self, entity_id: int, damage: int) -> bool:
        """Apply *damage*; returns True when the hit destroyed the entity.

        A hit on an entity that is already gone is a no-op.
        """
        if damage < 0:
            raise ValueError(f"Damage must be >= 0, got {damage}")
        entity = self._loop.world.get(entity_id)
        if entity is None:
            return False

        entity.hp -= damage
        if entity.hp > 0:
            return False

        self._score.modify(entity.score_value)
        self._loop.destroy_entity(entity_id, RetireReason.KILLED)
        logger.debug("%s #%d killed (+%d score)", entity.kind, entity_id, entity.score_value)
        return True
