"""Load a WavePlan from a JSON wave-config document.

Every problem with the document (bad JSON, schema mismatch, a wave that
references an unknown path or enemy kind) surfaces as ConfigurationError.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from wavespawn.core.errors import ConfigurationError
from wavespawn.core.waves import EnemyKind, SpawnTiming, WaveDefinition, WavePlan
from wavespawn.io.schemas import WavePlanSchema

logger = logging.getLogger(__name__)


def parse_plan(data: dict[str, Any]) -> WavePlan:
    try:
        doc = WavePlanSchema.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid wave config: {e}") from e

    kinds = {
        name: EnemyKind(name=name, firing_capable=k.firing, max_hp=k.max_hp, score_value=k.score)
        for name, k in doc.enemies.items()
    }

    waves: list[WaveDefinition] = []
    for idx, w in enumerate(doc.waves):
        label = w.name or f"wave {idx}"
        if w.path not in doc.paths:
            raise ConfigurationError(f"{label}: unknown path {w.path!r}")
        if kinds:
            unknown = sorted(set(w.enemies) - kinds.keys())
            if unknown:
                raise ConfigurationError(f"{label}: unknown enemy kinds {unknown}")
        waves.append(WaveDefinition(
            enemies=tuple(w.enemies),
            path_id=w.path,
            move_speed=w.move_speed,
            timing=SpawnTiming(base=w.timing.base, variance=w.timing.variance, minimum=w.timing.minimum),
            name=w.name,
        ))

    return WavePlan(
        waves=tuple(waves),
        paths={pid: tuple(points) for pid, points in doc.paths.items()},
        kinds=kinds,
        time_between_waves=doc.time_between_waves,
        loop=doc.loop,
    )


def load_plan(path: str | Path) -> WavePlan:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"{p}: cannot read wave config ({e})") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{p}: not valid JSON ({e})") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{p}: top level must be an object")

    plan = parse_plan(data)
    logger.info("Loaded %d waves and %d paths from %s", len(plan.waves), len(plan.paths), p)
    return plan
