"""Tests for the growing-tree road network builder."""

from __future__ import annotations

import pytest

from hexroads.connectivity import validate_road_connectivity
from hexroads.hexmath import hex_disk
from hexroads.roads import RoadNetworkBuilder, grow_road_network


@pytest.fixture
def disk1():
    return hex_disk(1)


@pytest.fixture
def disk3():
    return hex_disk(3)


# ═══════════════════════════════════════════════════════════════════
# Phase 1: seeds
# ═══════════════════════════════════════════════════════════════════


class TestConnectSeeds:
    def test_two_seeds_through_centre(self, disk1):
        roads = grow_road_network([(0, -1), (0, 1)], disk1, [], 2)
        assert roads == [(0, -1), (0, 0), (0, 1)]
        assert validate_road_connectivity(roads)

    def test_seed_count_lower_bound(self, disk3):
        seeds = [(-3, 0), (3, 0), (0, 3), (0, -3)]
        roads = grow_road_network(seeds, disk3, [], len(seeds))
        assert len(roads) >= len(seeds)
        assert set(seeds) <= set(roads)
        assert validate_road_connectivity(roads)

    def test_seed_off_terrain_skipped(self, disk1):
        builder = RoadNetworkBuilder(disk1)
        assert builder.connect_seeds([(0, 0), (9, 9)]) == 1
        assert builder.result() == [(0, 0)]

    def test_root_off_terrain_next_seed_added_directly(self, disk1):
        builder = RoadNetworkBuilder(disk1)
        assert builder.connect_seeds([(9, 9), (1, 0)]) == 1
        assert builder.result() == [(1, 0)]

    def test_unreachable_seed_skipped(self, disk1):
        terrain = list(disk1) + [(5, 5)]
        builder = RoadNetworkBuilder(terrain)
        assert builder.connect_seeds([(0, 0), (5, 5)]) == 1
        assert (5, 5) not in builder.connected

    def test_duplicate_seeds(self, disk1):
        builder = RoadNetworkBuilder(disk1)
        assert builder.connect_seeds([(0, 0), (0, 0), (1, 0)]) == 2

    def test_seed_without_nearest_member_skipped(self, disk1, monkeypatch):
        import hexroads.roads as roads_mod

        monkeypatch.setattr(roads_mod, "find_nearest", lambda point, candidates: None)
        builder = RoadNetworkBuilder(disk1)
        assert builder.connect_seeds([(0, 0), (1, 0)]) == 1
        assert builder.result() == [(0, 0)]

    def test_occupied_blocks_route(self):
        terrain = [(0, 0), (1, 0), (2, 0), (1, -1), (2, -1)]
        roads = grow_road_network([(0, 0), (2, 0)], terrain, [(1, 0)], 2)
        assert (1, 0) not in roads
        assert roads == [(0, 0), (1, -1), (2, -1), (2, 0)]
        assert validate_road_connectivity(roads)

    def test_occupied_seed_ignored(self, disk1):
        roads = grow_road_network([(0, 0), (1, 0)], disk1, [(1, 0)], 1)
        assert roads == [(0, 0)]


# ═══════════════════════════════════════════════════════════════════
# Phase 2: densify
# ═══════════════════════════════════════════════════════════════════


class TestDensify:
    def test_grows_to_target(self, disk3):
        roads = grow_road_network([(0, 0)], disk3, [], 10)
        assert len(roads) >= 10
        assert validate_road_connectivity(roads)

    def test_nearest_pair_in_sorted_order(self, disk1):
        roads = grow_road_network([(0, 0)], disk1, [], 4)
        assert roads == [(-1, 0), (-1, 1), (0, -1), (0, 0)]

    def test_target_larger_than_terrain(self, disk1):
        roads = grow_road_network([(0, 0)], disk1, [], 100)
        assert roads == sorted(disk1)

    def test_unreachable_cells_dropped(self, disk1):
        terrain = list(disk1) + [(5, 5), (6, 5)]
        builder = RoadNetworkBuilder(terrain)
        builder.connect_seeds([(0, 0)])
        builder.densify(100)
        assert builder.result() == sorted(disk1)
        assert builder.dropped == 2
        assert not builder.unconnected

    def test_no_seeds_gives_empty_network(self, disk1):
        assert grow_road_network([], disk1, [], 5) == []

    def test_target_already_met(self, disk1):
        roads = grow_road_network([(0, -1), (0, 1)], disk1, [], 0)
        assert roads == [(0, -1), (0, 0), (0, 1)]

    def test_output_sorted_and_deterministic(self, disk3):
        seeds = [(2, 1), (-3, 2), (0, -2)]
        first = grow_road_network(seeds, disk3, [(0, 0)], 15)
        assert first == sorted(first)
        assert first == grow_road_network(seeds, disk3, [(0, 0)], 15)
        assert (0, 0) not in first
