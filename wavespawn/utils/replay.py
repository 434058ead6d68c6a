"""Replay files: one JSON document with a per-tick snapshot of every live
enemy (position, waypoint, hp) and the events of that tick."""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wavespawn.core.world_state import WorldState
    from wavespawn.utils.event_log import SimEvent

logger = logging.getLogger(__name__)


class ReplayRecorder:
    """Accumulates tick records and flushes them to a JSON replay file."""

    __slots__ = ("_path", "_ticks", "_seed")

    def __init__(self, path: str | Path, seed: int) -> None:
        self._path = Path(path)
        self._seed = seed
        self._ticks: list[dict[str, Any]] = []

    @property
    def ticks(self) -> list[dict[str, Any]]:
        return self._ticks

    def record_tick(self, world: WorldState, events: list[SimEvent]) -> None:
        entities_snapshot = [
            {
                "id": e.id,
                "kind": e.kind,
                "pos": [round(e.pos.x, 4), round(e.pos.y, 4)],
                "waypoint": e.waypoint_index,
                "hp": e.hp,
            }
            for e in world.entities.values()
        ]
        events_log = []
        for ev in events:
            entry: dict[str, Any] = {"category": ev.category, "entities": list(ev.entity_ids)}
            if ev.metadata:
                entry.update(ev.metadata)
            events_log.append(entry)
        self._ticks.append(
            {
                "tick": world.tick,
                "time": round(world.time, 6),
                "events": events_log,
                "entities": entities_snapshot,
            }
        )

    def flush(self) -> None:
        totals = Counter(ev["category"] for t in self._ticks for ev in t["events"])
        replay = {
            "version": "1.0",
            "seed": self._seed,
            "total_ticks": len(self._ticks),
            "totals": dict(totals),
            "ticks": self._ticks,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(replay, indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d ticks)", self._path, len(self._ticks))
