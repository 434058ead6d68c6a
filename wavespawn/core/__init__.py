"""Core data models and the entity registry."""

from wavespawn.core.enums import Domain, FollowerState, RetireReason, SequencerStatus
from wavespawn.core.errors import ConfigurationError, ContractViolation
from wavespawn.core.models import Bounds, Entity, SpawnEvent, Vector2
from wavespawn.core.waves import EnemyKind, SpawnTiming, WaveDefinition, WavePlan
from wavespawn.core.world_state import WorldState

__all__ = [
    "Bounds",
    "ConfigurationError",
    "ContractViolation",
    "Domain",
    "EnemyKind",
    "Entity",
    "FollowerState",
    "RetireReason",
    "SequencerStatus",
    "SpawnEvent",
    "SpawnTiming",
    "Vector2",
    "WaveDefinition",
    "WavePlan",
    "WorldState",
]
