"""Layout composition — a complete map from a single config.

Chains the building blocks into the standard map recipe:

1. Voronoi forest/water/grass regions over a hex disk
   (:func:`regions.generate_voronoi_regions`).
2. A growing-tree road network over grass and forest, with water
   blocked (:func:`roads.grow_road_network`), checked with
   :func:`connectivity.validate_road_connectivity`.
3. Buildings on free cells next to roads.
4. Grass on anything left over.

The result is an ordered list of pre-constraint records ready for
:meth:`GridState.set_pre_constraints`.  Everything is driven by a
seeded :class:`random.Random`, so identical configs give identical maps.

Usage
-----
>>> from hexroads.layout import compose_layout, VILLAGE
>>> result = compose_layout(VILLAGE)
>>> result.apply(state)
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .connectivity import validate_road_connectivity
from .grid_state import GridState
from .hexmath import hex_disk, neighbors
from .models import Hex, TileRecord, TileType
from .regions import generate_voronoi_regions
from .roads import grow_road_network

log = logging.getLogger(__name__)

BUILDING_DENSITY_RATIOS: Dict[str, float] = {
    "sparse": 0.05,
    "medium": 0.1,
    "dense": 0.15,
}

_REGION_LABELS = ("forest", "water", "grass")


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class LayoutConfig:
    """All tuneable parameters for layout composition.

    Attributes
    ----------
    rings : int
        Radius of the hex disk around the origin.
    forest_seeds, water_seeds, grass_seeds : int
        Base Voronoi seed counts per region type.
    exclude : tuple of str
        Region labels (``"forest"``, ``"water"``, ``"grass"``) whose seed
        count is forced to 0.
    primary : str or None
        Region label to emphasise; rebalances the seed counts.
    road_density : float
        Fraction of road-valid terrain to turn into road.
    road_seed_ratio : float
        Fraction of the road target used as network seed points.
    min_adjacent_roads : int
        Road neighbours a cell needs before a building may go there.
    building_count : int or None
        Exact number of buildings; overrides *building_density*.
    building_density : str
        ``"sparse"``, ``"medium"`` or ``"dense"``.
    seed : int
        Seed for road-seed and building selection.
    """

    rings: int = 5
    forest_seeds: int = 4
    water_seeds: int = 3
    grass_seeds: int = 6
    exclude: Tuple[str, ...] = ()
    primary: Optional[str] = None
    road_density: float = 0.1
    road_seed_ratio: float = 0.25
    min_adjacent_roads: int = 1
    building_count: Optional[int] = None
    building_density: str = "medium"
    seed: int = 42

    def __post_init__(self) -> None:
        if self.rings < 0:
            raise ValueError("rings must be >= 0")
        if not 0.0 <= self.road_density <= 1.0:
            raise ValueError("road_density must be in [0, 1]")
        if not 0.0 <= self.road_seed_ratio <= 1.0:
            raise ValueError("road_seed_ratio must be in [0, 1]")
        if not 1 <= self.min_adjacent_roads <= 6:
            raise ValueError("min_adjacent_roads must be in [1, 6]")
        if self.building_count is not None and self.building_count < 0:
            raise ValueError("building_count must be >= 0")
        if self.building_density not in BUILDING_DENSITY_RATIOS:
            raise ValueError(
                f"building_density must be one of {sorted(BUILDING_DENSITY_RATIOS)}"
            )
        for label in self.exclude:
            if label not in _REGION_LABELS:
                raise ValueError(f"Cannot exclude unknown region type {label!r}")
        if self.primary is not None and self.primary not in _REGION_LABELS:
            raise ValueError(f"Unknown primary region type {self.primary!r}")

    def effective_seed_counts(self) -> Tuple[int, int, int]:
        """Return ``(forest, water, grass)`` after exclusions and emphasis."""
        forest = 0 if "forest" in self.exclude else self.forest_seeds
        water = 0 if "water" in self.exclude else self.water_seeds
        grass = 0 if "grass" in self.exclude else self.grass_seeds

        if self.primary == "forest":
            forest = max(8, forest * 2)
            water = max(1, water // 2)
            grass = max(2, grass // 2)
        elif self.primary == "water":
            water = max(6, water * 2)
            forest = max(1, forest // 2)
            grass = max(2, grass // 2)
        elif self.primary == "grass":
            grass = max(10, grass * 2)
            forest = max(1, forest // 2)
            water = max(1, water // 2)

        # Excluded types stay empty even when emphasis raised them.
        if "forest" in self.exclude:
            forest = 0
        if "water" in self.exclude:
            water = 0
        if "grass" in self.exclude:
            grass = 0
        return forest, water, grass


# ═══════════════════════════════════════════════════════════════════
# Preset configs
# ═══════════════════════════════════════════════════════════════════

VILLAGE = LayoutConfig(
    rings=6,
    road_density=0.15,
    building_density="dense",
)
"""Busy settlement: denser roads, many buildings."""

WOODLAND = LayoutConfig(
    rings=8,
    primary="forest",
    road_density=0.06,
    building_density="sparse",
)
"""Forest-dominated map with a thin road network."""

LAKESIDE = LayoutConfig(
    rings=7,
    primary="water",
    road_density=0.1,
)
"""Large water bodies; roads wind between them."""

OPEN_PLAINS = LayoutConfig(
    rings=8,
    primary="grass",
    exclude=("water",),
    road_density=0.08,
    building_density="sparse",
)
"""Grass and copses, no water."""

PRESETS: Dict[str, LayoutConfig] = {
    "village": VILLAGE,
    "woodland": WOODLAND,
    "lakeside": LAKESIDE,
    "open_plains": OPEN_PLAINS,
}


# ═══════════════════════════════════════════════════════════════════
# Result
# ═══════════════════════════════════════════════════════════════════


@dataclass
class LayoutResult:
    """Output of :func:`compose_layout`.

    Attributes
    ----------
    records : list[TileRecord]
        Pre-constraint records in application order (regions, buildings,
        roads, grass fill).  Later records override earlier ones.
    roads : list[Hex]
        Road cells sorted by ``(q, r)``.
    buildings : list[Hex]
        Building cells in placement order.
    roads_connected : bool
        Result of the connectivity check on *roads*.
    config : LayoutConfig
    """

    records: List[TileRecord] = field(default_factory=list)
    roads: List[Hex] = field(default_factory=list)
    buildings: List[Hex] = field(default_factory=list)
    roads_connected: bool = True
    config: LayoutConfig = field(default_factory=LayoutConfig)

    def tiles(self) -> Dict[Hex, TileType]:
        """Final classification per cell after overrides."""
        return {rec.coord: rec.tile_type for rec in self.records}

    def apply(self, state: GridState) -> None:
        """Replace *state*'s pre-constraints with this layout and regenerate."""
        state.replace_pre_constraints(self.records)


# ═══════════════════════════════════════════════════════════════════
# Composition
# ═══════════════════════════════════════════════════════════════════


def _count_adjacent(cell: Hex, roads: Set[Hex]) -> int:
    return sum(1 for nb in neighbors(*cell) if nb in roads)


def select_road_seeds(
    available: Sequence[Hex],
    target_count: int,
    ratio: float,
    rng: random.Random,
) -> List[Hex]:
    """Pick ``max(1, floor(target_count * ratio))`` seed cells from *available*."""
    count = max(1, int(target_count * ratio))
    pool = sorted(available)
    rng.shuffle(pool)
    return pool[:count]


def place_buildings(
    valid_terrain: Sequence[Hex],
    occupied: Set[Hex],
    roads: Set[Hex],
    config: LayoutConfig,
    rng: random.Random,
) -> List[Hex]:
    """Choose building cells next to roads on unoccupied valid terrain."""
    candidates = [
        cell for cell in sorted(valid_terrain)
        if cell not in occupied and _count_adjacent(cell, roads) >= config.min_adjacent_roads
    ]
    rng.shuffle(candidates)

    if config.building_count is not None:
        target = config.building_count
    else:
        target = int(len(candidates) * BUILDING_DENSITY_RATIOS[config.building_density])
    return candidates[:min(target, len(candidates))]


def compose_layout(config: Optional[LayoutConfig] = None, **overrides) -> LayoutResult:
    """Build a complete map layout from *config*.

    Keyword *overrides* replace individual config fields, e.g.
    ``compose_layout(VILLAGE, seed=7)``.
    """
    if config is None:
        config = LayoutConfig()
    if overrides:
        config = replace(config, **overrides)

    rng = random.Random(config.seed)
    disk = hex_disk(config.rings)
    forest, water, grass = config.effective_seed_counts()
    log.info(
        "Composing layout: rings=%d seeds forest=%d water=%d grass=%d",
        config.rings, forest, water, grass,
    )

    # 1. Regions
    region_records = generate_voronoi_regions(config.rings, (0, 0), forest, water, grass)
    region_map = {rec.coord: rec.tile_type for rec in region_records}

    # 2. Roads: water is blocked
    occupied: Set[Hex] = {c for c, t in region_map.items() if t is TileType.WATER}
    valid_terrain = [
        c for c in disk if region_map.get(c) in (TileType.GRASS, TileType.FOREST)
    ]
    target_roads = int(len(valid_terrain) * config.road_density)
    seeds: List[Hex] = []
    if valid_terrain:
        seeds = select_road_seeds(valid_terrain, target_roads, config.road_seed_ratio, rng)

    roads = grow_road_network(seeds, valid_terrain, occupied, target_roads)
    connected = validate_road_connectivity(roads)
    if not connected:
        log.warning("Road network of %d cells is not connected", len(roads))
    log.info("Placed %d roads (target %d) from %d seeds", len(roads), target_roads, len(seeds))

    road_set = set(roads)
    occupied |= road_set

    # 3. Buildings
    buildings = place_buildings(valid_terrain, occupied, road_set, config, rng)
    log.info("Placed %d buildings", len(buildings))

    # 4. Grass fill
    covered = set(region_map) | road_set | set(buildings)
    fill = [c for c in disk if c not in covered]

    records: List[TileRecord] = list(region_records)
    records.extend(TileRecord(q, r, TileType.BUILDING) for q, r in buildings)
    records.extend(TileRecord(q, r, TileType.ROAD) for q, r in roads)
    records.extend(TileRecord(q, r, TileType.GRASS) for q, r in fill)

    return LayoutResult(
        records=records,
        roads=roads,
        buildings=buildings,
        roads_connected=connected,
        config=config,
    )
