"""Tests for SpawnFactory: entity creation, jitter, firing and targeting."""

import sys
import os
import random

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.wave_arena import MidpointSource, WaveArena
from wavespawn.core.errors import ConfigurationError, ContractViolation
from wavespawn.core.models import Bounds, Entity, Vector2
from wavespawn.core.waves import EnemyKind
from wavespawn.core.world_state import WorldState
from wavespawn.systems.path_table import PathTable
from wavespawn.systems.services import (
    FixedTarget,
    InMemoryEntityService,
    RecordingFiringService,
    StaticBounds,
)
from wavespawn.systems.spawn_factory import SpawnFactory


class Harness:
    """A factory wired to in-memory services."""

    def __init__(self, source=None, target=None, bounds=None, kinds=None, jitter=0.5):
        self.world = WorldState(seed=1)
        self.paths = PathTable()
        self.paths.register("zigzag", [(0, 10), (5, 5), (0, 0)])
        self.followers = {}
        self.entities = InMemoryEntityService()
        self.firing = RecordingFiringService()
        self.factory = SpawnFactory(
            world=self.world,
            paths=self.paths,
            followers=self.followers,
            jitter_source=source if source is not None else MidpointSource(),
            entities=self.entities,
            firing=self.firing,
            targets=FixedTarget(target),
            bounds=StaticBounds(bounds) if bounds is not None else None,
            kinds=kinds,
            jitter=jitter,
        )


class TestSpawn:
    def test_spawn_registers_entity_and_follower(self):
        h = Harness()
        entity = h.factory.spawn(WaveArena.wave(["grunt"], "zigzag", move_speed=3.0), 0)
        assert h.world.get(entity.id) is entity
        assert h.followers[entity.id].entity is entity
        assert entity.speed == 3.0
        assert entity.waypoint_index == 0
        assert h.entities.created == 1

    def test_midpoint_jitter_lands_on_first_waypoint(self):
        h = Harness()
        entity = h.factory.spawn(WaveArena.wave(["grunt"], "zigzag"), 0)
        assert entity.pos == Vector2(0, 10)

    def test_jitter_draws_x_then_y(self):
        source = MidpointSource()
        h = Harness(source=source, jitter=0.25)
        h.factory.spawn(WaveArena.wave(["grunt"], "zigzag"), 0)
        assert source.calls == [(-0.25, 0.25), (-0.25, 0.25)]

    def test_jitter_stays_within_half_unit(self):
        h = Harness(source=random.Random(3))
        wave = WaveArena.wave(["grunt"] * 200, "zigzag")
        for slot in range(wave.enemy_count):
            entity = h.factory.spawn(wave, slot)
            assert abs(entity.pos.x - 0) <= 0.5
            assert abs(entity.pos.y - 10) <= 0.5

    def test_slot_selects_kind(self):
        h = Harness()
        wave = WaveArena.wave(["grunt", "gunner", "grunt"], "zigzag")
        assert h.factory.spawn(wave, 1).kind == "gunner"
        assert h.factory.spawn(wave, 2).slot_index == 2

    def test_entities_of_one_wave_share_the_path(self):
        h = Harness()
        wave = WaveArena.wave(["grunt", "grunt"], "zigzag")
        a = h.factory.spawn(wave, 0)
        b = h.factory.spawn(wave, 1)
        assert a.path is b.path
        assert a.path is h.paths.resolve("zigzag")

    def test_target_is_attached(self):
        h = Harness(target="player-1")
        assert h.factory.spawn(WaveArena.wave(["grunt"], "zigzag"), 0).target == "player-1"

    def test_no_target_is_fine(self):
        h = Harness(target=None)
        assert h.factory.spawn(WaveArena.wave(["grunt"], "zigzag"), 0).target is None

    def test_spawn_is_clamped_to_bounds(self):
        h = Harness(source=random.Random(9), bounds=Bounds(0, 0, 20, 10))
        wave = WaveArena.wave(["grunt"] * 50, "zigzag")
        for slot in range(wave.enemy_count):
            pos = h.factory.spawn(wave, slot).pos
            assert 0 <= pos.x <= 20
            assert 0 <= pos.y <= 10
            assert abs(pos.x - 0) <= 0.5
            assert abs(pos.y - 10) <= 0.5

    def test_anchor_outside_bounds_keeps_jitter_bound(self):
        h = Harness(source=random.Random(4), bounds=Bounds(-5, -5, 5, 5))
        wave = WaveArena.wave(["grunt"] * 50, "zigzag")
        for slot in range(wave.enemy_count):
            pos = h.factory.spawn(wave, slot).pos
            assert abs(pos.x - 0) <= 0.5
            assert abs(pos.y - 10) <= 0.5
            # Pulled as close to the playfield as the jitter allows
            assert pos.y == 9.5


class TestSlotRange:
    @pytest.mark.parametrize("slot", [-1, 2, 10])
    def test_out_of_range_slot(self, slot):
        h = Harness()
        with pytest.raises(ContractViolation):
            h.factory.spawn(WaveArena.wave(["grunt", "grunt"], "zigzag"), slot)
        assert h.entities.created == 0


class TestFiring:
    def test_firing_capable_kind_is_enabled(self):
        kinds = {"gunner": EnemyKind("gunner", firing_capable=True), "grunt": EnemyKind("grunt")}
        h = Harness(kinds=kinds)
        entity = h.factory.spawn(WaveArena.wave(["gunner"], "zigzag"), 0)
        assert entity.firing
        assert h.firing.is_firing(entity.handle)

    def test_plain_kind_never_touches_firing(self):
        kinds = {"grunt": EnemyKind("grunt")}
        h = Harness(kinds=kinds)
        entity = h.factory.spawn(WaveArena.wave(["grunt"], "zigzag"), 0)
        assert not entity.firing
        assert h.firing.states == {}


class TestKinds:
    def test_roster_values_copied_to_entity(self):
        kinds = {"tank": EnemyKind("tank", max_hp=300, score_value=250)}
        h = Harness(kinds=kinds)
        entity = h.factory.spawn(WaveArena.wave(["tank"], "zigzag"), 0)
        assert entity.hp == entity.max_hp == 300
        assert entity.score_value == 250

    def test_unknown_kind_with_roster(self):
        h = Harness(kinds={"grunt": EnemyKind("grunt")})
        with pytest.raises(ConfigurationError):
            h.factory.spawn(WaveArena.wave(["dragon"], "zigzag"), 0)

    def test_entity_defaults_match_kind_defaults(self):
        entity = Entity(id=1, kind="x", pos=Vector2(), speed=1.0, path=(Vector2(),))
        assert entity.hp == entity.max_hp == EnemyKind("x").max_hp

    def test_without_roster_any_kind_spawns(self):
        h = Harness()
        assert h.factory.kind_for("anything") == EnemyKind("anything")

    def test_validate_checks_path(self):
        h = Harness()
        with pytest.raises(ContractViolation):
            h.factory.validate(WaveArena.wave(["grunt"], "missing"))
