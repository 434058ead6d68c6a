"""Engine layer: cooperative scheduler, wave sequencer, world loop, runner."""

from wavespawn.engine.engine_manager import EngineManager
from wavespawn.engine.scheduler import Scheduler, TaskHandle, Wait
from wavespawn.engine.wave_sequencer import SequencerState, WaveSequencer
from wavespawn.engine.world_loop import WorldLoop

__all__ = ["EngineManager", "Scheduler", "SequencerState", "TaskHandle", "Wait", "WaveSequencer", "WorldLoop"]
