"""Road network construction — growing tree over traversable terrain.

The network starts at the first seed, stitches every later seed onto
the nearest connected cell with an A* path, then keeps attaching the
globally nearest unconnected cell until a target size is reached.

This is a greedy nearest-pair construction, not a minimum spanning
tree over path distances.  Each densification step scans every
unconnected cell against every connected cell; that is fine for maps a
few dozen cells across.

Usage
-----
>>> from hexroads.hexmath import hex_disk
>>> roads = grow_road_network([(0, -1), (0, 1)], hex_disk(1), [], 2)
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from .models import Hex
from .pathfinding import find_nearest, hex_astar

log = logging.getLogger(__name__)


def _ordered_unique(cells: Iterable[Hex]) -> List[Hex]:
    return list(dict.fromkeys(cells))


class RoadNetworkBuilder:
    """Call-scoped working state for one growing-tree run.

    Parameters
    ----------
    valid_terrain : iterable of Hex
        Cells a road may occupy.
    occupied : iterable of Hex
        Cells that are blocked even if they are valid terrain.

    ``connected`` and ``unconnected`` are dicts used as ordered sets so
    that ties resolve the same way on every run.
    """

    def __init__(self, valid_terrain: Iterable[Hex], occupied: Iterable[Hex] = ()) -> None:
        blocked = set(occupied)
        self.terrain: FrozenSet[Hex] = frozenset(c for c in valid_terrain if c not in blocked)
        self.connected: Dict[Hex, None] = {}
        self.unconnected: Dict[Hex, None] = dict.fromkeys(sorted(self.terrain))
        self.dropped = 0

    # ── state helpers ───────────────────────────────────────────────

    def _add(self, cell: Hex) -> None:
        self.connected[cell] = None
        self.unconnected.pop(cell, None)

    def _merge_path(self, path: Iterable[Hex]) -> None:
        for cell in path:
            self._add(cell)

    def _route(self, source: Hex, target: Hex) -> Optional[List[Hex]]:
        return hex_astar(source, target, self.terrain)

    # ── phase 1 ─────────────────────────────────────────────────────

    def connect_seeds(self, seeds: Iterable[Hex]) -> int:
        """Join *seeds* into one component; return how many were joined.

        Seeds off the effective terrain are skipped, as are seeds no
        path reaches.
        """
        joined = 0
        ordered = _ordered_unique(seeds)
        if not ordered:
            return 0

        root = ordered[0]
        if root in self.terrain:
            self._add(root)
            joined += 1

        for seed in ordered[1:]:
            if seed not in self.terrain:
                continue
            if seed in self.connected:
                joined += 1
                continue
            if not self.connected:
                self._add(seed)
                joined += 1
                continue

            nearest = find_nearest(seed, self.connected)
            if nearest is None:
                continue
            path = self._route(nearest[0], seed)
            if path is None:
                log.debug("Seed %s is unreachable from the network", seed)
                continue
            self._merge_path(path)
            joined += 1

        log.debug("Connected %d/%d seeds into %d road cells", joined, len(ordered), len(self.connected))
        return joined

    # ── phase 2 ─────────────────────────────────────────────────────

    def _closest_pair(self) -> Optional[Tuple[Hex, Hex]]:
        best: Optional[Tuple[Hex, Hex]] = None
        best_dist = 0
        for cell in self.unconnected:
            nearest = find_nearest(cell, self.connected)
            if nearest is None:
                return None
            member, dist = nearest
            if best is None or dist < best_dist:
                best = (cell, member)
                best_dist = dist
                if dist == 1:
                    break  # nothing closer than an adjacent cell
        return best

    def densify(self, target_count: int) -> None:
        """Attach nearest unconnected cells until *target_count* is reached.

        Cells with no path to the network are dropped for good.  Stops
        early when nothing reachable remains.
        """
        while len(self.connected) < target_count and self.unconnected:
            pair = self._closest_pair()
            if pair is None:
                break
            cell, member = pair
            path = self._route(member, cell)
            if path is None:
                del self.unconnected[cell]
                self.dropped += 1
                continue
            self._merge_path(path)

        if len(self.connected) < target_count:
            log.debug(
                "Road network stopped at %d of %d cells (%d unreachable dropped)",
                len(self.connected), target_count, self.dropped,
            )

    def result(self) -> List[Hex]:
        """Connected cells sorted by ``(q, r)``."""
        return sorted(self.connected)


def grow_road_network(
    seeds: Iterable[Hex],
    valid_terrain: Iterable[Hex],
    occupied: Iterable[Hex],
    target_count: int,
) -> List[Hex]:
    """Build a connected road network; return its cells sorted by ``(q, r)``.

    Parameters
    ----------
    seeds : iterable of Hex
        Points the network must try to join, in priority order.  The
        first one roots the network.
    valid_terrain : iterable of Hex
        Cells roads may occupy.
    occupied : iterable of Hex
        Cells removed from *valid_terrain*.
    target_count : int
        Densify until the network has at least this many cells.
    """
    builder = RoadNetworkBuilder(valid_terrain, occupied)
    builder.connect_seeds(seeds)
    builder.densify(target_count)
    return builder.result()

