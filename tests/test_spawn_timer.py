"""Tests for SpawnTimer: bounded-random spawn intervals.

Covers:
- Minimum floor holds for every timing triple
- Unclamped draws span [base - variance, base + variance]
- Clamping never re-rolls
- Determinism with a seeded source
"""

import sys
import os
import random

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.wave_arena import MidpointSource
from wavespawn.core.enums import Domain
from wavespawn.core.errors import ConfigurationError
from wavespawn.core.waves import SpawnTiming
from wavespawn.systems.rng import DeterministicRNG
from wavespawn.systems.spawn_timer import SpawnTimer


class FixedSource:
    def __init__(self, value: float) -> None:
        self.value = value
        self.calls: list[tuple[float, float]] = []

    def uniform(self, low: float, high: float) -> float:
        self.calls.append((low, high))
        return self.value


TIMINGS = [
    (1.0, 0.5, 0.2),
    (1.0, 0.2, 0.5),
    (0.3, 1.0, 0.1),   # lower range goes negative
    (2.0, 0.0, 2.0),   # no variance, floor == base
    (0.0, 0.0, 0.0),
    (5.0, 4.9, 1.0),
]


class TestMinimumFloor:
    @pytest.mark.parametrize(("base", "variance", "minimum"), TIMINGS)
    def test_never_below_minimum(self, base, variance, minimum):
        timer = SpawnTimer(random.Random(1234))
        timing = SpawnTiming(base=base, variance=variance, minimum=minimum)
        for _ in range(2000):
            assert timer.next(timing) >= minimum

    def test_draw_below_floor_is_clamped_not_rerolled(self):
        source = FixedSource(-0.7)
        timer = SpawnTimer(source)
        assert timer.next(SpawnTiming(base=0.3, variance=1.0, minimum=0.1)) == 0.1
        assert len(source.calls) == 1

    def test_draw_above_floor_is_returned_as_is(self):
        timer = SpawnTimer(FixedSource(1.15))
        assert timer.next(SpawnTiming(base=1.0, variance=0.2, minimum=0.5)) == 1.15


class TestRange:
    def test_source_asked_for_symmetric_range(self):
        source = MidpointSource()
        SpawnTimer(source).next(SpawnTiming(base=1.0, variance=0.25, minimum=0.0))
        assert source.calls == [(0.75, 1.25)]

    def test_unclamped_draws_cover_the_range(self):
        timer = SpawnTimer(random.Random(99))
        timing = SpawnTiming(base=1.0, variance=0.2, minimum=0.0)
        draws = [timer.next(timing) for _ in range(5000)]
        assert min(draws) >= 0.8
        assert max(draws) <= 1.2
        # Both ends of the window are actually reached
        assert min(draws) < 0.82
        assert max(draws) > 1.18

    def test_example_window(self):
        """base=1.0, variance=0.2, minimum=0.5 stays inside [0.8, 1.2]."""
        timer = SpawnTimer(random.Random(7))
        timing = SpawnTiming(base=1.0, variance=0.2, minimum=0.5)
        for _ in range(1000):
            assert 0.8 <= timer.next(timing) <= 1.2


class TestDeterminism:
    def test_same_seed_same_sequence(self):
        timing = SpawnTiming(base=1.0, variance=0.5, minimum=0.2)
        a = SpawnTimer(DeterministicRNG(5).stream(Domain.SPAWN_TIMING))
        b = SpawnTimer(DeterministicRNG(5).stream(Domain.SPAWN_TIMING))
        assert [a.next(timing) for _ in range(50)] == [b.next(timing) for _ in range(50)]

    def test_different_seed_different_sequence(self):
        timing = SpawnTiming(base=1.0, variance=0.5, minimum=0.2)
        a = SpawnTimer(DeterministicRNG(5).stream(Domain.SPAWN_TIMING))
        b = SpawnTimer(DeterministicRNG(6).stream(Domain.SPAWN_TIMING))
        assert [a.next(timing) for _ in range(20)] != [b.next(timing) for _ in range(20)]

    def test_stream_stays_in_range(self):
        stream = DeterministicRNG(11).stream(Domain.SPAWN_JITTER)
        values = [stream.uniform(-0.5, 0.5) for _ in range(1000)]
        assert all(-0.5 <= v <= 0.5 for v in values)
        assert stream.draws == 1000


class TestTimingValidation:
    def test_minimum_above_base_rejected(self):
        with pytest.raises(ConfigurationError):
            SpawnTiming(base=0.5, variance=0.1, minimum=1.0)

    @pytest.mark.parametrize("kwargs", [
        {"base": -1.0},
        {"variance": -0.1},
        {"minimum": -0.2},
    ])
    def test_negative_values_rejected(self, kwargs):
        with pytest.raises(ConfigurationError):
            SpawnTiming(**kwargs)
