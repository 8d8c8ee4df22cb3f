from __future__ import annotations

import logging
from typing import Iterable

from .pathfinding import hex_astar_length
from .models import Hex

log = logging.getLogger(__name__)


def validate_road_connectivity(roads: Iterable[Hex]) -> bool:
    """Return True if every road cell is reachable from every other.

    Roads are their own traversable terrain.  Reachability on the hex
    adjacency graph is symmetric and transitive, so checking every cell
    against the first one is enough.  Empty and single-cell sets are
    connected.
    """
    ordered = list(dict.fromkeys(roads))
    if len(ordered) < 2:
        return True

    road_set = frozenset(ordered)
    source = ordered[0]
    for road in ordered[1:]:
        if hex_astar_length(source, road, road_set) == -1:
            log.debug("Road %s is not reachable from %s", road, source)
            return False
    return True
