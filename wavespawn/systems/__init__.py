"""Engine systems: RNG, spawn timing, paths, spawning, path following."""

from wavespawn.systems.path_follower import PathFollower
from wavespawn.systems.path_table import PathTable
from wavespawn.systems.rng import DeterministicRNG, RandomStream
from wavespawn.systems.spawn_factory import SpawnFactory
from wavespawn.systems.spawn_timer import SpawnTimer

__all__ = ["DeterministicRNG", "PathFollower", "PathTable", "RandomStream", "SpawnFactory", "SpawnTimer"]
