"""Unit tests for PathTable: waypoint derivation and caching."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from wavespawn.core.errors import ConfigurationError, ContractViolation
from wavespawn.core.models import Bounds, Vector2
from wavespawn.systems.path_table import PathTable


class TestResolve:
    def test_order_is_insertion_order(self):
        table = PathTable()
        table.register("zigzag", [(0, 10), (5, 5), (0, 0)])
        assert table.resolve("zigzag") == (Vector2(0, 10), Vector2(5, 5), Vector2(0, 0))

    def test_resolved_once_and_shared(self):
        table = PathTable()
        table.register("line", [(0, 0), (4, 0)])
        first = table.resolve("line")
        second = table.resolve("line")
        assert first is second
        assert first == second

    def test_accepts_vectors(self):
        table = PathTable()
        table.register("v", [Vector2(1.5, 2.5)])
        assert table.resolve("v") == (Vector2(1.5, 2.5),)

    def test_single_waypoint_path_is_valid(self):
        table = PathTable()
        table.register("dot", [(3, 3)])
        assert len(table.resolve("dot")) == 1

    def test_reregister_replaces_cached_path(self):
        table = PathTable()
        table.register("p", [(0, 0)])
        old = table.resolve("p")
        table.register("p", [(1, 1), (2, 2)])
        new = table.resolve("p")
        assert new != old
        assert len(new) == 2

    def test_membership(self):
        table = PathTable()
        table.register("a", [(0, 0)])
        assert "a" in table
        assert "b" not in table
        assert table.path_ids() == ["a"]
        assert len(table) == 1

    def test_waypoints_outside_bounds_still_resolve(self):
        table = PathTable(bounds=Bounds(0, 0, 10, 10))
        table.register("wide", [(5, 5), (20, 5)])
        assert len(table.resolve("wide")) == 2


class TestErrors:
    def test_zero_waypoints_is_configuration_error(self):
        table = PathTable()
        table.register("empty", [])
        with pytest.raises(ConfigurationError):
            table.resolve("empty")

    def test_unregistered_is_contract_violation(self):
        with pytest.raises(ContractViolation):
            PathTable().resolve("nowhere")

    def test_malformed_point(self):
        table = PathTable()
        table.register("bad", [(1, 2, 3)])
        with pytest.raises(ConfigurationError):
            table.resolve("bad")
