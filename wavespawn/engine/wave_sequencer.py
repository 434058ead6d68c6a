"""WaveSequencer: walks a wave list and emits one SpawnEvent per slot.

Per wave:
  1. for each slot: spawn, then wait ``SpawnTimer.next(wave.timing)``
  2. wait ``time_between_waves``

With ``loop`` the list restarts from the first wave after the last
wave's post-wave delay; otherwise the sequencer finishes after one pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from wavespawn.core.enums import SequencerStatus
from wavespawn.core.errors import ConfigurationError, ContractViolation
from wavespawn.core.models import SpawnEvent
from wavespawn.engine.scheduler import Task, Wait

if TYPE_CHECKING:
    from wavespawn.core.models import Entity
    from wavespawn.core.waves import WaveDefinition
    from wavespawn.engine.scheduler import Scheduler, TaskHandle
    from wavespawn.systems.spawn_factory import SpawnFactory
    from wavespawn.systems.spawn_timer import SpawnTimer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SequencerState:
    """Position of a sequencer in its wave list."""

    wave_index: int = 0
    slot_index: int = 0
    loop: bool = False
    status: SequencerStatus = SequencerStatus.IDLE
    passes_completed: int = 0
    spawned: int = 0

    @property
    def running(self) -> bool:
        return self.status == SequencerStatus.RUNNING


class WaveSequencer:
    """Schedules spawns for an ordered list of waves on a Scheduler.

    Each SpawnEvent is handed to the SpawnFactory and fully materialised
    before the task suspends again; nothing is buffered.
    """

    __slots__ = ("_scheduler", "_factory", "_timer", "_on_spawn", "_on_wave", "_name", "_state", "_task")

    def __init__(
        self,
        scheduler: Scheduler,
        factory: SpawnFactory,
        timer: SpawnTimer,
        on_spawn: Callable[[SpawnEvent, Entity], None] | None = None,
        on_wave: Callable[[int, WaveDefinition], None] | None = None,
        name: str = "spawner",
    ) -> None:
        self._scheduler = scheduler
        self._factory = factory
        self._timer = timer
        self._on_spawn = on_spawn
        self._on_wave = on_wave
        self._name = name
        self._state = SequencerState()
        self._task: TaskHandle | None = None

    @property
    def state(self) -> SequencerState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state.running

    def run(self, waves: Sequence[WaveDefinition], time_between_waves: float, loop: bool = False) -> TaskHandle:
        """Validate *waves* and start spawning; slot 0 of the first wave spawns now."""
        if self._state.running:
            raise ContractViolation(f"Sequencer {self._name!r} is already running")

        waves = tuple(waves)
        if not waves:
            raise ConfigurationError("Wave list is empty")
        if time_between_waves < 0:
            raise ConfigurationError(f"time_between_waves must be >= 0, got {time_between_waves}")
        for wave in waves:
            self._factory.validate(wave)
        if loop and _never_waits(waves, time_between_waves):
            raise ConfigurationError("Looping wave list never waits; it would spawn forever within one tick")

        self._state = SequencerState(loop=loop, status=SequencerStatus.RUNNING)
        logger.info(
            "Sequencer %r started: %d waves, %.2fs between waves, loop=%s",
            self._name, len(waves), time_between_waves, loop,
        )
        self._task = self._scheduler.spawn(self._process(waves, time_between_waves, loop), name=self._name)
        return self._task

    def stop(self) -> None:
        """Cease scheduling; spawned entities keep following their paths."""
        if not self._state.running:
            return
        self._state.status = SequencerStatus.STOPPED
        if self._task is not None:
            self._task.cancel()
        logger.info(
            "Sequencer %r stopped at wave %d slot %d (%d spawned)",
            self._name, self._state.wave_index, self._state.slot_index, self._state.spawned,
        )

    def _process(self, waves: tuple[WaveDefinition, ...], time_between_waves: float, loop: bool) -> Task:
        state = self._state
        try:
            yield from self._walk(state, waves, time_between_waves, loop)
        except Exception:
            # A failed spawn ends the run; the error still reaches whoever advanced the clock
            state.status = SequencerStatus.FAILED
            logger.error(
                "Sequencer %r failed at wave %d slot %d (%d spawned)",
                self._name, state.wave_index, state.slot_index, state.spawned,
            )
            raise

    def _walk(
        self,
        state: SequencerState,
        waves: tuple[WaveDefinition, ...],
        time_between_waves: float,
        loop: bool,
    ) -> Task:
        while True:
            for wave_index, wave in enumerate(waves):
                if not state.running:
                    return
                state.wave_index = wave_index
                state.slot_index = 0
                logger.info("Wave %d (%s) started: %d enemies", wave_index, wave.label, wave.enemy_count)
                if self._on_wave is not None:
                    self._on_wave(wave_index, wave)

                for slot in range(wave.enemy_count):
                    if not state.running:
                        return
                    state.slot_index = slot
                    event = SpawnEvent(wave=wave, slot_index=slot, scheduled_at=self._scheduler.now)
                    entity = self._factory.spawn(wave, slot)
                    state.spawned += 1
                    if self._on_spawn is not None:
                        self._on_spawn(event, entity)
                    yield Wait(self._timer.next(wave.timing))

                if not state.running:
                    return
                yield Wait(time_between_waves)

            state.passes_completed += 1
            if not loop:
                break

        state.status = SequencerStatus.FINISHED
        logger.info("Sequencer %r finished after %d spawns", self._name, state.spawned)



def _never_waits(waves: tuple[WaveDefinition, ...], time_between_waves: float) -> bool:
    """True when every wait a pass can produce is exactly zero."""
    if time_between_waves > 0:
        return False
    return all(
        wave.enemy_count == 0 or max(wave.timing.high, wave.timing.minimum) == 0
        for wave in waves
    )
