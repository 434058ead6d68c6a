"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    SPAWN_TIMING = 0
    SPAWN_JITTER = 1


@unique
class FollowerState(IntEnum):
    """States of the per-entity path-following state machine."""

    ADVANCING = 0
    RETIRED = 1


@unique
class RetireReason(IntEnum):
    """Why an entity left the registry."""

    PATH_END = 0
    KILLED = 1


@unique
class SequencerStatus(IntEnum):
    """Lifecycle of a WaveSequencer."""

    IDLE = 0
    RUNNING = 1
    FINISHED = 2      # One non-looping pass completed
    STOPPED = 3       # Stopped externally
    FAILED = 4        # A spawn raised; the error was propagated
