"""Tests for A* pathfinding on the hex grid."""

from __future__ import annotations

from collections import deque
from typing import Dict, Optional, Set

import pytest

from hexroads.hexmath import hex_disk, hex_distance, neighbors
from hexroads.models import Hex
from hexroads.pathfinding import (
    build_path_between_roads,
    find_nearest,
    hex_astar,
    hex_astar_length,
    path_length,
    path_without_start,
    reconstruct_path,
)


def bfs_length(start: Hex, goal: Hex, terrain: Set[Hex]) -> int:
    """Brute-force shortest path length, -1 when unreachable."""
    if start not in terrain or goal not in terrain:
        return -1
    dist: Dict[Hex, int] = {start: 0}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        if cell == goal:
            return dist[cell]
        for nb in neighbors(*cell):
            if nb in terrain and nb not in dist:
                dist[nb] = dist[cell] + 1
                queue.append(nb)
    return -1


def assert_valid_path(path, start: Hex, goal: Hex, terrain: Set[Hex]) -> None:
    assert path[0] == start
    assert path[-1] == goal
    assert all(c in terrain for c in path)
    for a, b in zip(path, path[1:]):
        assert hex_distance(a, b) == 1


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def line() -> Set[Hex]:
    return {(0, 0), (1, 0), (2, 0)}


@pytest.fixture
def walled_disk() -> Set[Hex]:
    """Radius-4 disk with a wall along q == 0 that has a gap at the rim."""
    wall = {(0, r) for r in range(-3, 4)}
    return set(hex_disk(4)) - wall


@pytest.fixture
def u_shape() -> Set[Hex]:
    """A U-shaped corridor: straight-line neighbours are not adjacent."""
    cells = {(0, r) for r in range(0, 5)}
    cells |= {(q, 4) for q in range(0, 5)}
    cells |= {(4, r) for r in range(0, 5)}
    return cells


# ═══════════════════════════════════════════════════════════════════
# Length
# ═══════════════════════════════════════════════════════════════════


class TestAStarLength:
    def test_straight_line(self, line):
        assert hex_astar_length((0, 0), (2, 0), line) == 2

    def test_disconnected(self):
        assert hex_astar_length((0, 0), (5, 5), {(0, 0), (5, 5)}) == -1

    def test_start_equals_goal(self, line):
        assert hex_astar_length((1, 0), (1, 0), line) == 0

    def test_start_not_traversable(self, line):
        assert hex_astar_length((9, 9), (2, 0), line) == -1

    def test_goal_not_traversable(self, line):
        assert hex_astar_length((0, 0), (3, 0), line) == -1

    def test_matches_bfs_around_wall(self, walled_disk):
        cells = sorted(walled_disk)
        for start in cells[::5]:
            for goal in cells[::7]:
                assert hex_astar_length(start, goal, walled_disk) == bfs_length(
                    start, goal, walled_disk
                )

    def test_matches_bfs_in_corridor(self, u_shape):
        assert hex_astar_length((0, 0), (4, 0), u_shape) == bfs_length((0, 0), (4, 0), u_shape)
        assert hex_astar_length((0, 0), (4, 0), u_shape) > hex_distance((0, 0), (4, 0))

    def test_accepts_any_container(self, line):
        assert hex_astar_length((0, 0), (2, 0), frozenset(line)) == 2
        assert hex_astar_length((0, 0), (2, 0), list(line)) == 2


# ═══════════════════════════════════════════════════════════════════
# Full path
# ═══════════════════════════════════════════════════════════════════


class TestAStarPath:
    def test_straight_line(self, line):
        assert hex_astar((0, 0), (2, 0), line) == [(0, 0), (1, 0), (2, 0)]

    def test_disconnected(self):
        assert hex_astar((0, 0), (5, 5), {(0, 0), (5, 5)}) is None

    def test_start_equals_goal(self, line):
        assert hex_astar((2, 0), (2, 0), line) == [(2, 0)]

    def test_endpoint_not_traversable(self, line):
        assert hex_astar((0, 0), (7, 7), line) is None

    def test_node_count_is_length_plus_one(self, walled_disk):
        cells = sorted(walled_disk)
        for start in cells[::6]:
            for goal in cells[::9]:
                path = hex_astar(start, goal, walled_disk)
                length = hex_astar_length(start, goal, walled_disk)
                assert path is not None
                assert len(path) == length + 1
                assert_valid_path(path, start, goal, walled_disk)

    def test_routes_around_wall(self, walled_disk):
        path = hex_astar((-2, 0), (2, 0), walled_disk)
        assert path is not None
        assert_valid_path(path, (-2, 0), (2, 0), walled_disk)
        assert len(path) - 1 == bfs_length((-2, 0), (2, 0), walled_disk)

    def test_deterministic(self, walled_disk):
        assert hex_astar((-3, 1), (3, -1), walled_disk) == hex_astar((-3, 1), (3, -1), walled_disk)


class TestReconstruction:
    def test_follows_parents_to_self_loop(self):
        parents = {(0, 0): (0, 0), (1, 0): (0, 0), (2, 0): (1, 0)}
        assert reconstruct_path(parents, (0, 0), (2, 0)) == [(0, 0), (1, 0), (2, 0)]

    def test_missing_parent_substitutes_start(self):
        parents = {(2, 0): (1, 0)}
        assert reconstruct_path(parents, (0, 0), (2, 0)) == [(0, 0), (1, 0), (2, 0)]

    def test_path_length_iterative(self):
        parents: Dict[Hex, Hex] = {(0, 0): (0, 0)}
        for q in range(1, 5000):
            parents[(q, 0)] = (q - 1, 0)
        assert path_length(parents, (4999, 0)) == 4999
        assert path_length(parents, (0, 0)) == 0

    def test_path_length_detects_cycle(self):
        parents = {(0, 0): (1, 0), (1, 0): (2, 0), (2, 0): (0, 0)}
        with pytest.raises(ValueError):
            path_length(parents, (0, 0))


# ═══════════════════════════════════════════════════════════════════
# Stitching helpers
# ═══════════════════════════════════════════════════════════════════


class TestStitching:
    def test_path_without_start(self):
        assert path_without_start([(0, 0), (1, 0), (2, 0)]) == [(1, 0), (2, 0)]

    @pytest.mark.parametrize("path", [None, [], [(0, 0)]])
    def test_path_without_start_too_short(self, path: Optional[list]):
        assert path_without_start(path) is None

    def test_build_path_between_roads(self, line):
        assert build_path_between_roads((0, 0), (2, 0), line) == [(1, 0), (2, 0)]

    def test_build_path_between_roads_no_path(self):
        assert build_path_between_roads((0, 0), (5, 5), {(0, 0), (5, 5)}) is None

    def test_build_path_between_same_cell(self, line):
        assert build_path_between_roads((1, 0), (1, 0), line) is None


class TestFindNearest:
    def test_empty(self):
        assert find_nearest((0, 0), []) is None

    def test_nearest_and_distance(self):
        assert find_nearest((0, 0), [(5, 0), (0, 2), (3, 3)]) == ((0, 2), 2)

    def test_ties_keep_first(self):
        assert find_nearest((0, 0), [(1, 0), (0, 1), (-1, 0)]) == ((1, 0), 1)
