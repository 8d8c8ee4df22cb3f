"""Host-facing operations in the JSON wire format.

:class:`MapService` is the layer a host application calls.  Inputs and
outputs are wire strings (see :mod:`wire`) and plain ints/bools; no
method raises on caller-supplied data.  Failure is reported with
sentinels: ``"null"`` for a missing path, ``-1`` for a missing length
or tile, ``False`` for a rejected constraint or a disconnected road set.

The service owns a :class:`GridState`, or uses one passed in, so the
grid's lifetime is explicit rather than module-global.
"""

from __future__ import annotations

from typing import Optional

from . import wire
from .connectivity import validate_road_connectivity
from .grid_state import GridState
from .layout import LayoutConfig, compose_layout
from .pathfinding import build_path_between_roads, hex_astar, hex_astar_length
from .regions import generate_voronoi_regions
from .roads import grow_road_network


VERSION = "1.0.0-20250102-0912"
"""Static build identifier the host uses for cache-busting."""


class MapService:
    """Wire-format facade over the map generation core.

    Parameters
    ----------
    state : GridState, optional
        Grid state to operate on.  A fresh one is created if omitted.
    """

    def __init__(self, state: Optional[GridState] = None) -> None:
        self.state = state if state is not None else GridState()

    # ── pathfinding ─────────────────────────────────────────────────

    def hex_astar_length(
        self, start_q: int, start_r: int, goal_q: int, goal_r: int, terrain_json: str,
    ) -> int:
        terrain = frozenset(wire.decode_coords(terrain_json))
        return hex_astar_length((start_q, start_r), (goal_q, goal_r), terrain)

    def hex_astar(
        self, start_q: int, start_r: int, goal_q: int, goal_r: int, terrain_json: str,
    ) -> str:
        terrain = frozenset(wire.decode_coords(terrain_json))
        return wire.encode_path(hex_astar((start_q, start_r), (goal_q, goal_r), terrain))

    def build_path_between_roads(
        self, start_q: int, start_r: int, end_q: int, end_r: int, terrain_json: str,
    ) -> str:
        terrain = frozenset(wire.decode_coords(terrain_json))
        path = build_path_between_roads((start_q, start_r), (end_q, end_r), terrain)
        return wire.encode_path(path)

    def validate_road_connectivity(self, roads_json: str) -> bool:
        return validate_road_connectivity(wire.decode_coords(roads_json))

    # ── generation ──────────────────────────────────────────────────

    def generate_voronoi_regions(
        self,
        max_layer: int,
        center_q: int,
        center_r: int,
        forest_seeds: int,
        water_seeds: int,
        grass_seeds: int,
    ) -> str:
        records = generate_voronoi_regions(
            max_layer, (center_q, center_r), forest_seeds, water_seeds, grass_seeds,
        )
        return wire.encode_tile_records(records)

    def generate_road_network_growing_tree(
        self, seeds_json: str, terrain_json: str, occupied_json: str, target_count: int,
    ) -> str:
        roads = grow_road_network(
            wire.decode_coords(seeds_json),
            wire.decode_coords(terrain_json),
            wire.decode_coords(occupied_json),
            target_count,
        )
        return wire.encode_coords(roads)

    def compose_layout(self, config: Optional[LayoutConfig] = None, apply: bool = True) -> str:
        """Compose a full layout; optionally load it into the grid state.

        Returns the pre-constraint records as a tile-record list.
        """
        result = compose_layout(config)
        if apply:
            result.apply(self.state)
        return wire.encode_tile_records(result.records)

    # ── grid state ──────────────────────────────────────────────────

    def clear_layout(self) -> None:
        self.state.clear()

    def generate_layout(self) -> None:
        self.state.generate_layout()

    def set_pre_constraint(self, q: int, r: int, tile_type: int) -> bool:
        return self.state.set_pre_constraint(q, r, tile_type)

    def clear_pre_constraints(self) -> None:
        self.state.clear_pre_constraints()

    def get_tile_at(self, q: int, r: int) -> int:
        return self.state.get_tile_code(q, r)

    def get_stats(self) -> str:
        return wire.encode_stats(self.state.stats())

    @staticmethod
    def get_version() -> str:
        return VERSION
