"""hexroads — procedural hex-grid maps with connected road networks.

Public API is organised into layers:

- **Core** — models, hex coordinate math, pathfinding
- **Generation** — Voronoi regions, growing-tree roads, connectivity
- **State** — grid state with pre-constraints, wire codec, service facade
- **Composition** — layout configs and the full map recipe
- **Rendering** — PNG previews (requires matplotlib)
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import Hex, TileType, CubeCoord, TileRecord, VoronoiSeed, TileStats
from .hexmath import (
    hex_distance,
    cube_distance,
    axial_to_cube,
    cube_to_axial,
    neighbors,
    ring,
    hex_disk,
    hex_cell_count,
    in_hex_boundary,
    offset_to_axial,
    axial_to_offset,
    hex_to_world,
    world_to_hex,
)
from .pathfinding import (
    hex_astar,
    hex_astar_length,
    build_path_between_roads,
    path_without_start,
    find_nearest,
)

# ── Generation ──────────────────────────────────────────────────────
from .regions import generate_voronoi_regions, place_seeds, assign_nearest, regions_by_type
from .roads import RoadNetworkBuilder, grow_road_network
from .connectivity import validate_road_connectivity

# ── State ───────────────────────────────────────────────────────────
from .grid_state import GridState
from .wire import (
    decode_coords,
    decode_tile_records,
    encode_coords,
    encode_path,
    encode_tile_records,
    encode_stats,
)
from .service import MapService, VERSION

# ── Composition ─────────────────────────────────────────────────────
from .layout import (
    LayoutConfig,
    LayoutResult,
    compose_layout,
    PRESETS,
    VILLAGE,
    WOODLAND,
    LAKESIDE,
    OPEN_PLAINS,
)

# ── Rendering (requires matplotlib at call time) ────────────────────
from .visualize import render_tiles_png

__version__ = "1.0.0"

__all__ = [
    # Core
    "Hex",
    "TileType",
    "CubeCoord",
    "TileRecord",
    "VoronoiSeed",
    "TileStats",
    "hex_distance",
    "cube_distance",
    "axial_to_cube",
    "cube_to_axial",
    "neighbors",
    "ring",
    "hex_disk",
    "hex_cell_count",
    "in_hex_boundary",
    "offset_to_axial",
    "axial_to_offset",
    "hex_to_world",
    "world_to_hex",
    "hex_astar",
    "hex_astar_length",
    "build_path_between_roads",
    "path_without_start",
    "find_nearest",
    # Generation
    "generate_voronoi_regions",
    "place_seeds",
    "assign_nearest",
    "regions_by_type",
    "RoadNetworkBuilder",
    "grow_road_network",
    "validate_road_connectivity",
    # State
    "GridState",
    "decode_coords",
    "decode_tile_records",
    "encode_coords",
    "encode_path",
    "encode_tile_records",
    "encode_stats",
    "MapService",
    "VERSION",
    # Composition
    "LayoutConfig",
    "LayoutResult",
    "compose_layout",
    "PRESETS",
    "VILLAGE",
    "WOODLAND",
    "LAKESIDE",
    "OPEN_PLAINS",
    # Rendering
    "render_tiles_png",
]
