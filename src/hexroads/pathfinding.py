"""Hex-grid A* pathfinding over an explicit traversable set.

Edge cost is uniformly 1 and the heuristic is the hex distance to the
goal, which is admissible and consistent on this grid, so the first
time the goal is popped its cost is optimal.

Functions
---------
- :func:`hex_astar_length` — shortest path length, ``-1`` if none.
- :func:`hex_astar` — full start→goal path, ``None`` if none.
- :func:`build_path_between_roads` — path with the start cell dropped,
  for stitching segments onto an existing network.
- :func:`find_nearest` — nearest member of a set by plain hex distance.
"""

from __future__ import annotations

import heapq
import logging
from typing import Container, Dict, Iterable, List, Optional, Sequence, Tuple

from .hexmath import hex_distance, neighbors
from .models import Hex

log = logging.getLogger(__name__)

Parents = Dict[Hex, Hex]


def _search(
    start: Hex,
    goal: Hex,
    traversable: Container[Hex],
) -> Tuple[int, Parents]:
    """Run A* from *start* to *goal*.

    Returns ``(g, parents)`` where *g* is the goal cost or ``-1``.  The
    root's parent is itself.
    """
    h_start = hex_distance(start, goal)
    # Entries are (f, h, q, r, g): lowest f first, then lowest h.
    frontier: List[Tuple[int, int, int, int, int]] = [(h_start, h_start, start[0], start[1], 0)]
    best_g: Dict[Hex, int] = {start: 0}
    parents: Parents = {start: start}
    closed = set()

    while frontier:
        _, _, q, r, g = heapq.heappop(frontier)
        current = (q, r)
        if current in closed:
            continue  # stale duplicate
        closed.add(current)

        if current == goal:
            return g, parents

        tentative = g + 1
        for nb in neighbors(q, r):
            if nb not in traversable or nb in closed:
                continue
            if tentative < best_g.get(nb, tentative + 1):
                best_g[nb] = tentative
                parents[nb] = current
                h = hex_distance(nb, goal)
                heapq.heappush(frontier, (tentative + h, h, nb[0], nb[1], tentative))

    return -1, parents


def hex_astar_length(start: Hex, goal: Hex, traversable: Container[Hex]) -> int:
    """Return the shortest path length from *start* to *goal*, or ``-1``.

    Both endpoints must themselves be traversable.
    """
    if start not in traversable or goal not in traversable:
        return -1
    if start == goal:
        return 0
    g, _ = _search(start, goal, traversable)
    return g


def hex_astar(start: Hex, goal: Hex, traversable: Container[Hex]) -> Optional[List[Hex]]:
    """Return the shortest path ``[start, …, goal]``, or ``None``.

    The path has ``hex_astar_length(start, goal, traversable) + 1``
    cells.  ``start == goal`` gives ``[start]``.
    """
    if start not in traversable or goal not in traversable:
        return None
    if start == goal:
        return [start]
    g, parents = _search(start, goal, traversable)
    if g < 0:
        return None
    return reconstruct_path(parents, start, goal)


def reconstruct_path(parents: Parents, start: Hex, goal: Hex) -> List[Hex]:
    """Follow parent links back from *goal* to the root, then reverse.

    The root is recognised by its self-loop.  A node without a parent
    cannot occur after a successful search; if it does the start cell
    is substituted so the caller still gets a start→goal path.
    """
    path = [goal]
    node = goal
    while True:
        parent = parents.get(node)
        if parent is None:
            if node != start:
                log.debug("Missing parent for %s; closing path at start %s", node, start)
                path.append(start)
            break
        if parent == node:
            break
        path.append(parent)
        node = parent
    path.reverse()
    return path


def path_length(parents: Parents, node: Hex) -> int:
    """Count parent-link steps from *node* back to the root."""
    steps = 0
    seen = {node}
    while True:
        parent = parents.get(node)
        if parent is None or parent == node:
            return steps
        if parent in seen:
            raise ValueError(f"parent links form a cycle at {parent}")
        seen.add(parent)
        steps += 1
        node = parent


def path_without_start(path: Optional[Sequence[Hex]]) -> Optional[List[Hex]]:
    """Drop the first cell of *path*; ``None`` if fewer than 2 cells."""
    if path is None or len(path) < 2:
        return None
    return list(path[1:])


def build_path_between_roads(
    start: Hex,
    goal: Hex,
    traversable: Container[Hex],
) -> Optional[List[Hex]]:
    """Cells strictly after *start* through *goal* inclusive, or ``None``."""
    return path_without_start(hex_astar(start, goal, traversable))


def find_nearest(point: Hex, candidates: Iterable[Hex]) -> Optional[Tuple[Hex, int]]:
    """Return ``(nearest, distance)`` by hex distance, or ``None`` if empty.

    Ties keep the first candidate encountered.
    """
    best: Optional[Hex] = None
    best_dist = 0
    for cand in candidates:
        d = hex_distance(point, cand)
        if best is None or d < best_dist:
            best = cand
            best_dist = d
            if d == 0:
                break
    if best is None:
        return None
    return best, best_dist
