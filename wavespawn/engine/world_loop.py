"""WorldLoop: the authoritative per-tick engine.

Phase cycle of ``advance(dt)``:
  1. Movement: step every live PathFollower; finished paths retire at once
  2. Scheduling: advance the Scheduler clock, resuming the WaveSequencer
  3. Recording: tick events to the EventLog / replay, advance tick

Entities spawned during phase 2 start moving on the next tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from wavespawn.core.enums import Domain, RetireReason
from wavespawn.core.errors import ContractViolation
from wavespawn.engine.scheduler import Scheduler
from wavespawn.engine.wave_sequencer import WaveSequencer
from wavespawn.systems.path_table import PathTable
from wavespawn.systems.rng import DeterministicRNG
from wavespawn.systems.spawn_factory import SpawnFactory
from wavespawn.systems.spawn_timer import SpawnTimer
from wavespawn.utils.event_log import EventLog, SimEvent

if TYPE_CHECKING:
    from wavespawn.config import SimulationConfig
    from wavespawn.core.models import Entity, SpawnEvent
    from wavespawn.core.waves import WaveDefinition, WavePlan
    from wavespawn.core.world_state import WorldState
    from wavespawn.systems.path_follower import PathFollower
    from wavespawn.systems.services import BoundsProvider, EntityService, FiringService, TargetProvider
    from wavespawn.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)


class WorldLoop:
    """The heartbeat of the simulation.

    Single-threaded mutation of WorldState. The embedding application
    calls ``advance(dt)``; there is no implicit frame clock.
    """

    __slots__ = (
        "_config",
        "_world",
        "_paths",
        "_entities",
        "_firing",
        "_scheduler",
        "_followers",
        "_factory",
        "_timer",
        "_sequencer",
        "_recorder",
        "_event_log",
        "_tick_events",
        "_pending_events",
        "_total_spawned",
        "_total_retired",
        "_total_killed",
    )

    def __init__(
        self,
        config: SimulationConfig,
        world: WorldState,
        entities: EntityService,
        firing: FiringService,
        targets: TargetProvider,
        paths: PathTable | None = None,
        bounds: BoundsProvider | None = None,
        rng: DeterministicRNG | None = None,
        recorder: ReplayRecorder | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self._config = config
        self._world = world
        self._entities = entities
        self._firing = firing
        self._scheduler = Scheduler()
        self._followers: dict[int, PathFollower] = {}

        rect = bounds.bounds() if bounds is not None else None
        self._paths = paths if paths is not None else PathTable(bounds=rect)

        rng = rng or DeterministicRNG(config.seed)
        self._factory = SpawnFactory(
            world=world,
            paths=self._paths,
            followers=self._followers,
            jitter_source=rng.stream(Domain.SPAWN_JITTER),
            entities=entities,
            firing=firing,
            targets=targets,
            bounds=bounds,
            on_retire=self._on_path_end,
            jitter=config.spawn_jitter,
            epsilon=config.waypoint_epsilon,
        )
        self._timer = SpawnTimer(rng.stream(Domain.SPAWN_TIMING))
        self._sequencer = WaveSequencer(
            self._scheduler, self._factory, self._timer,
            on_spawn=self._on_spawn, on_wave=self._on_wave,
        )
        self._recorder = recorder
        self._event_log = event_log if event_log is not None else EventLog()
        self._tick_events: list[SimEvent] = []
        self._pending_events: list[SimEvent] = []
        self._total_spawned = 0
        self._total_retired = 0
        self._total_killed = 0

    # -- public properties --

    @property
    def world(self) -> WorldState:
        return self._world

    @property
    def paths(self) -> PathTable:
        return self._paths

    @property
    def factory(self) -> SpawnFactory:
        return self._factory

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def sequencer(self) -> WaveSequencer:
        return self._sequencer

    @property
    def followers(self) -> dict[int, PathFollower]:
        return self._followers

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted during the most recent tick."""
        return self._tick_events

    @property
    def total_spawned(self) -> int:
        return self._total_spawned

    @property
    def total_retired(self) -> int:
        return self._total_retired

    @property
    def total_killed(self) -> int:
        return self._total_killed

    @property
    def active(self) -> bool:
        """True while waves are still spawning or any entity is alive."""
        return self._sequencer.running or bool(self._followers)

    # -- wave control --

    def start_waves(
        self,
        waves: Sequence[WaveDefinition],
        time_between_waves: float = 0.0,
        loop: bool = False,
    ) -> WaveSequencer:
        """Start the sequencer; configuration problems raise before anything spawns."""
        self._sequencer.run(waves, time_between_waves, loop)
        return self._sequencer

    def start_plan(self, plan: WavePlan) -> WaveSequencer:
        for path_id, points in plan.paths.items():
            self._paths.register(path_id, points)
        for kind in plan.kinds.values():
            self._factory.register_kind(kind)
        return self.start_waves(plan.waves, plan.time_between_waves, plan.loop)

    def stop_waves(self) -> None:
        self._sequencer.stop()

    # -- tick --

    def advance(self, dt: float) -> bool:
        """Run one tick of *dt* simulated seconds. Returns ``self.active``."""
        if dt < 0:
            raise ContractViolation(f"Tick dt must be >= 0, got {dt}")

        # --- Phase 1: Movement ---
        for follower in list(self._followers.values()):
            follower.step(dt)

        # --- Phase 2: Scheduling ---
        self._scheduler.advance(dt)
        self._world.time = self._scheduler.now

        # --- Phase 3: Recording ---
        self._tick_events = self._pending_events
        self._pending_events = []
        if self._recorder is not None:
            self._recorder.record_tick(self._world, self._tick_events)
        if self._tick_events:
            self._event_log.append_many(self._tick_events)
        self._world.tick += 1
        return self.active

    def run(self, max_ticks: int | None = None) -> int:
        """Advance at ``config.tick_dt`` until nothing is active or *max_ticks* pass."""
        limit = self._config.max_ticks if max_ticks is None else max_ticks
        dt = self._config.tick_dt
        logger.info("=== Simulation started (seed=%d, dt=%.4f) ===", self._world.seed, dt)

        ticks = 0
        while ticks < limit:
            still_active = self.advance(dt)
            ticks += 1
            if self._world.tick % 600 == 0:
                logger.info(
                    "Tick %d (t=%.1fs): %d entities alive, %d spawned",
                    self._world.tick, self._world.time, self._world.alive_count, self._total_spawned,
                )
            if not still_active:
                logger.info("Tick %d: waves finished and no entities alive.", self._world.tick)
                break

        logger.info(
            "=== Simulation finished at tick %d: %d spawned, %d retired, %d killed ===",
            self._world.tick, self._total_spawned, self._total_retired, self._total_killed,
        )
        if self._recorder is not None:
            self._recorder.flush()
        return ticks

    # -- destruction --

    def destroy_entity(self, entity_id: int, reason: RetireReason = RetireReason.KILLED) -> Entity | None:
        """Release *entity_id* exactly once; later calls return ``None``."""
        entity = self._world.remove_entity(entity_id)
        if entity is None:
            return None

        follower = self._followers.pop(entity_id, None)
        if follower is not None:
            follower.halt()
        if entity.firing:
            self._firing.set_firing(entity.handle, False)
            entity.firing = False
        self._entities.destroy(entity.handle)

        if reason == RetireReason.PATH_END:
            self._total_retired += 1
            self._emit("retire", f"{entity.kind} #{entity.id} reached the end of its path", (entity.id,))
        else:
            self._total_killed += 1
            self._emit("kill", f"{entity.kind} #{entity.id} was destroyed", (entity.id,),
                       {"score_value": entity.score_value})
        return entity

    # -- callbacks --

    def _on_path_end(self, entity: Entity) -> None:
        self.destroy_entity(entity.id, RetireReason.PATH_END)

    def _on_spawn(self, event: SpawnEvent, entity: Entity) -> None:
        self._total_spawned += 1
        self._emit(
            "spawn",
            f"{entity.kind} #{entity.id} spawned (wave {event.wave.label!r} slot {event.slot_index})",
            (entity.id,),
            {"slot": event.slot_index, "scheduled_at": event.scheduled_at, "wave": event.wave.label},
        )

    def _on_wave(self, wave_index: int, wave: WaveDefinition) -> None:
        self._emit("wave", f"Wave {wave_index} ({wave.label}) started",
                   metadata={"wave_index": wave_index, "enemies": wave.enemy_count})

    def _emit(self, category: str, message: str,
              entity_ids: tuple[int, ...] = (), metadata: dict | None = None) -> None:
        self._pending_events.append(SimEvent(
            tick=self._world.tick,
            category=category,
            message=message,
            entity_ids=entity_ids,
            metadata=metadata,
        ))
