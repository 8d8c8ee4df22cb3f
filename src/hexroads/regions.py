"""Voronoi region assignment over a hex disk.

Seeds are placed by deterministic index selection into the sorted disk
cell list, then every cell takes the tile type of its nearest seed.
This is a cosmetic layer: it never fails and never returns an empty
result.

Algorithms
----------
- :func:`place_seeds` — fixed pseudo-distribution of typed seeds.
- :func:`assign_nearest` — nearest-seed classification by hex distance.
- :func:`generate_voronoi_regions` — disk + seeds + assignment, with
  single-cell fallbacks.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from .hexmath import hex_disk, hex_distance
from .models import Hex, TileRecord, TileType, VoronoiSeed

log = logging.getLogger(__name__)

# Multipliers of the seed index formula ``(c * 7919 + i * 997) % n``.
SEED_COUNTER_PRIME = 7919
SEED_INDEX_PRIME = 997

FALLBACK_RECORD = TileRecord(0, 0, TileType.GRASS)


def place_seeds(
    disk: Sequence[Hex],
    forest_seeds: int,
    water_seeds: int,
    grass_seeds: int,
) -> List[VoronoiSeed]:
    """Pick seed cells from *disk* for each region type.

    Types are placed in the order forest, water, grass.  For the
    ``i``-th seed of a type (0-based) with running counter ``c``
    (1-based, across all types) the chosen index is
    ``(c * 7919 + i * 997) % len(disk)``.  Negative counts count as 0.
    If nothing was placed, one grass seed goes on ``disk[0]``.
    """
    if not disk:
        return []

    n = len(disk)
    seeds: List[VoronoiSeed] = []
    counter = 0
    for tile_type, count in (
        (TileType.FOREST, forest_seeds),
        (TileType.WATER, water_seeds),
        (TileType.GRASS, grass_seeds),
    ):
        for i in range(max(0, count)):
            counter += 1
            q, r = disk[(counter * SEED_COUNTER_PRIME + i * SEED_INDEX_PRIME) % n]
            seeds.append(VoronoiSeed(q, r, tile_type))

    if not seeds:
        q, r = disk[0]
        seeds.append(VoronoiSeed(q, r, TileType.GRASS))

    return seeds


def assign_nearest(disk: Sequence[Hex], seeds: Sequence[VoronoiSeed]) -> List[TileRecord]:
    """Classify each cell of *disk* by its nearest seed.

    Ties go to the seed that comes first in *seeds*.
    """
    if not seeds:
        return []
    records: List[TileRecord] = []
    for q, r in disk:
        best = seeds[0]
        best_dist = hex_distance((q, r), best.coord)
        for seed in seeds[1:]:
            d = hex_distance((q, r), seed.coord)
            if d < best_dist:
                best = seed
                best_dist = d
        records.append(TileRecord(q, r, best.tile_type))
    return records


def generate_voronoi_regions(
    max_radius: int,
    center: Hex = (0, 0),
    forest_seeds: int = 4,
    water_seeds: int = 3,
    grass_seeds: int = 6,
) -> List[TileRecord]:
    """Classify a hex disk into forest/water/grass Voronoi regions.

    Returns one :class:`TileRecord` per disk cell in disk order.  An
    empty disk degrades to a single grass cell at the origin.
    """
    disk = hex_disk(max_radius, center)
    if not disk:
        log.debug("Empty disk for radius %d; using fallback cell", max_radius)
        return [FALLBACK_RECORD]

    seeds = place_seeds(disk, forest_seeds, water_seeds, grass_seeds)
    log.debug(
        "Placed %d seeds over %d cells (forest=%d water=%d grass=%d)",
        len(seeds), len(disk), forest_seeds, water_seeds, grass_seeds,
    )

    records = assign_nearest(disk, seeds)
    if not records:
        first = seeds[0]
        return [TileRecord(first.q, first.r, first.tile_type)]
    return records


def regions_by_type(records: Sequence[TileRecord]) -> Dict[TileType, List[Hex]]:
    """Group record coordinates by tile type, preserving record order."""
    groups: Dict[TileType, List[Hex]] = {}
    for rec in records:
        groups.setdefault(rec.tile_type, []).append(rec.coord)
    return groups


def region_sizes(records: Sequence[TileRecord]) -> List[Tuple[TileType, int]]:
    """Return ``[(tile_type, cell_count)]`` sorted by tile code."""
    groups = regions_by_type(records)
    return [(t, len(groups[t])) for t in sorted(groups)]
