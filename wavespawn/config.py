"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for a simulation run."""

    # Determinism
    seed: int = 42

    # Timing
    tick_dt: float = 1.0 / 60.0        # Simulated seconds advanced per tick
    max_ticks: int = 3600
    tick_rate: float = 1.0 / 60.0      # Wall-clock seconds between ticks (EngineManager)

    # Path following
    waypoint_epsilon: float = 0.1      # Distance under which a waypoint counts as reached

    # Spawning
    spawn_jitter: float = 0.5          # Max spawn offset per axis from the first waypoint

    # Logging
    log_level: str = "INFO"
    replay_file: str = "replay.json"
