"""Outbound collaborators: entity instantiation, firing, targeting, bounds.

The orchestration core never looks anything up by name; whatever hosts it
injects these. The in-memory implementations below back the headless CLI
and the test suite.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from wavespawn.core.errors import ContractViolation
from wavespawn.core.models import Bounds, Vector2

logger = logging.getLogger(__name__)


class EntityService(Protocol):
    def create(self, kind: str, position: Vector2, rotation: float) -> Any: ...

    def destroy(self, handle: Any) -> None: ...


class FiringService(Protocol):
    def set_firing(self, handle: Any, firing: bool) -> None: ...


class TargetProvider(Protocol):
    def current_target(self) -> Any | None: ...


class BoundsProvider(Protocol):
    def bounds(self) -> Bounds | None: ...


@dataclass(frozen=True, slots=True)
class EntityHandle:
    """Opaque token for a host-side entity."""

    serial: int
    kind: str


class InMemoryEntityService:
    """Tracks created handles; destroying a handle twice is a logic bug."""

    __slots__ = ("_next_serial", "_live", "created", "destroyed")

    def __init__(self) -> None:
        self._next_serial = 1
        self._live: dict[int, EntityHandle] = {}
        self.created: int = 0
        self.destroyed: int = 0

    def create(self, kind: str, position: Vector2, rotation: float) -> EntityHandle:
        handle = EntityHandle(serial=self._next_serial, kind=kind)
        self._next_serial += 1
        self._live[handle.serial] = handle
        self.created += 1
        return handle

    def destroy(self, handle: EntityHandle) -> None:
        if self._live.pop(handle.serial, None) is None:
            raise ContractViolation(f"Handle {handle} destroyed twice or never created")
        self.destroyed += 1

    @property
    def live(self) -> list[EntityHandle]:
        return list(self._live.values())


@dataclass
class RecordingFiringService:
    """Remembers the last firing state requested per handle."""

    states: dict[Any, bool] = field(default_factory=dict)

    def set_firing(self, handle: Any, firing: bool) -> None:
        self.states[handle] = firing

    def is_firing(self, handle: Any) -> bool:
        return self.states.get(handle, False)


@dataclass(frozen=True, slots=True)
class FixedTarget:
    """Always answers with the same target (or None when there is none)."""

    target: Any | None = None

    def current_target(self) -> Any | None:
        return self.target


@dataclass(frozen=True, slots=True)
class StaticBounds:
    rect: Bounds | None = None

    def bounds(self) -> Bounds | None:
        return self.rect
