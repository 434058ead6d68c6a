"""EngineManager: runs the WorldLoop on a background thread.

Every tick and every control call that touches the loop goes through one
lock, so ticks never overlap and a wave stop issued from another thread
lands between two ticks (Single-Writer preserved).
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from wavespawn.core.world_state import WorldState
from wavespawn.engine.world_loop import WorldLoop
from wavespawn.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from wavespawn.config import SimulationConfig
    from wavespawn.core.waves import WavePlan
    from wavespawn.systems.services import BoundsProvider, EntityService, FiringService, TargetProvider
    from wavespawn.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the simulation lifecycle on a background thread.

    Provides thread-safe access to:
      - control commands (start / pause / resume / step / stop)
      - wave control (start_plan / stop_waves)
      - counters read under the tick lock
    """

    def __init__(
        self,
        config: SimulationConfig,
        entities: EntityService,
        firing: FiringService,
        targets: TargetProvider,
        bounds: BoundsProvider | None = None,
        recorder: ReplayRecorder | None = None,
    ) -> None:
        self._config = config
        self._tick_rate: float = config.tick_rate
        self._loop = WorldLoop(
            config=config,
            world=WorldState(seed=config.seed),
            entities=entities,
            firing=firing,
            targets=targets,
            bounds=bounds,
            rng=DeterministicRNG(config.seed),
            recorder=recorder,
        )

        self._tick_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

    # -- public properties --

    @property
    def loop(self) -> WorldLoop:
        return self._loop

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.001, min(value, 2.0))

    @property
    def tick(self) -> int:
        with self._tick_lock:
            return self._loop.world.tick

    @property
    def alive_count(self) -> int:
        with self._tick_lock:
            return self._loop.world.alive_count

    # -- wave control --

    def start_plan(self, plan: WavePlan) -> None:
        with self._tick_lock:
            self._loop.start_plan(plan)

    def stop_waves(self) -> None:
        with self._tick_lock:
            self._loop.stop_waves()

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="wave-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self.tick)

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self.tick)

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("EngineManager stopped.")

    # -- internals --

    def _tick_once(self) -> bool:
        with self._tick_lock:
            return self._loop.advance(self._config.tick_dt)

    def _run_loop(self) -> None:
        try:
            while not self._stop_requested.is_set():
                if self._paused.is_set():
                    if self._step_requested.wait(timeout=0.05):
                        self._step_requested.clear()
                        self._tick_once()
                    continue

                started = time.perf_counter()
                self._tick_once()
                elapsed = time.perf_counter() - started
                remaining = self._tick_rate - elapsed
                if remaining > 0:
                    time.sleep(remaining)
        except Exception:
            logger.exception("Wave loop crashed at tick %d", self._loop.world.tick)
            raise
        finally:
            self._running.clear()
