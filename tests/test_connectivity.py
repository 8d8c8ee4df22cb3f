"""Tests for road connectivity validation."""

from __future__ import annotations

from hexroads.connectivity import validate_road_connectivity
from hexroads.hexmath import hex_disk, ring


class TestValidateRoadConnectivity:
    def test_empty(self):
        assert validate_road_connectivity([])

    def test_singleton(self):
        assert validate_road_connectivity([(42, -17)])

    def test_adjacent_pair(self):
        assert validate_road_connectivity([(0, 0), (1, -1)])

    def test_disjoint_pair(self):
        assert not validate_road_connectivity([(0, 0), (5, 5)])

    def test_gap_of_one(self):
        assert not validate_road_connectivity([(0, 0), (2, 0)])

    def test_ring_is_connected(self):
        assert validate_road_connectivity(ring((0, 0), 3))

    def test_disk_is_connected(self):
        assert validate_road_connectivity(hex_disk(3))

    def test_two_components(self):
        roads = [(0, 0), (1, 0), (2, 0), (5, 0), (6, 0)]
        assert not validate_road_connectivity(roads)

    def test_duplicates_ignored(self):
        assert validate_road_connectivity([(0, 0), (0, 0), (1, 0), (1, 0)])
        assert validate_road_connectivity([(3, 3), (3, 3)])

    def test_accepts_generator(self):
        assert validate_road_connectivity((q, 0) for q in range(5))
