"""PNG previews of tile maps (requires matplotlib).

Each classified cell is drawn as a pointy-top hexagon at its
:func:`hexmath.hex_to_world` position, coloured by tile type.  Road
cells can be linked centre to centre so the network shape is easy to
read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from .hexmath import hex_corners, hex_to_world, neighbors
from .models import Hex, TileType

TILE_COLORS: Dict[TileType, str] = {
    TileType.GRASS: "#8cc084",
    TileType.BUILDING: "#b5651d",
    TileType.ROAD: "#6e6e6e",
    TileType.FOREST: "#2e6b30",
    TileType.WATER: "#3a7bd5",
}

_EDGE_COLOR = "#2b2b2b"
_ROAD_LINK_COLOR = "#f2e394"


def _ensure_mpl():
    """Lazy-import matplotlib; raise helpful error if missing."""
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.patches import Polygon
        return plt, Polygon
    except ImportError as exc:
        raise RuntimeError(
            "matplotlib is required for visualisation. "
            "Install with `pip install matplotlib`."
        ) from exc


def _draw_road_links(ax, tiles: Mapping[Hex, TileType], size: float) -> None:
    roads = {c for c, t in tiles.items() if t is TileType.ROAD}
    for q, r in sorted(roads):
        x0, z0 = hex_to_world(q, r, size)
        for nb in neighbors(q, r):
            if nb in roads and nb > (q, r):
                x1, z1 = hex_to_world(*nb, size)
                ax.plot([x0, x1], [z0, z1], color=_ROAD_LINK_COLOR, linewidth=1.5, zorder=3)


def render_tiles_png(
    tiles: Mapping[Hex, TileType],
    output_path: str | Path,
    size: float = 1.0,
    road_links: bool = True,
    title: str = "",
    dpi: int = 150,
    figsize: Tuple[float, float] = (8, 8),
    colors: Optional[Mapping[TileType, str]] = None,
) -> Path:
    """Render a ``{(q, r): TileType}`` map to a PNG and return its path."""
    plt, Polygon = _ensure_mpl()
    palette = dict(TILE_COLORS)
    if colors:
        palette.update(colors)

    fig, ax = plt.subplots(figsize=figsize)
    xs, zs = [], []
    for (q, r), tile_type in tiles.items():
        center = hex_to_world(q, r, size)
        corners = hex_corners(center, size)
        ax.add_patch(Polygon(
            corners,
            closed=True,
            facecolor=palette[tile_type],
            edgecolor=_EDGE_COLOR,
            linewidth=0.4,
        ))
        xs.append(center[0])
        zs.append(center[1])

    if road_links:
        _draw_road_links(ax, tiles, size)

    if xs:
        pad = size * 1.5
        ax.set_xlim(min(xs) - pad, max(xs) + pad)
        ax.set_ylim(min(zs) - pad, max(zs) + pad)
    ax.set_aspect("equal", "box")
    ax.axis("off")
    if title:
        ax.set_title(title, fontsize=10)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight", pad_inches=0.2)
    plt.close(fig)
    return output_path
