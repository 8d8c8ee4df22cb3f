"""Hex coordinate math — axial/cube conversions, distances, rings, disks.

All coordinates are axial ``(q, r)`` tuples unless a function says
otherwise.  Cube coordinates (:class:`~models.CubeCoord`) appear only
where the ring walk needs vector arithmetic.

The disk enumeration order matters: :func:`hex_disk` returns cells
sorted by ``(q, r)`` so that index-based seed placement in
:mod:`regions` is reproducible.
"""

from __future__ import annotations

import math
from typing import List, Tuple

from .models import CubeCoord, Hex

# Axial neighbour offsets.  Order is fixed; pathfinding does not depend
# on it but callers that enumerate neighbours do.
AXIAL_NEIGHBORS: Tuple[Hex, ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, -1),
    (-1, 1),
)

CUBE_DIRECTIONS: Tuple[CubeCoord, ...] = (
    CubeCoord(1, 0, -1),
    CubeCoord(1, -1, 0),
    CubeCoord(0, -1, 1),
    CubeCoord(-1, 0, 1),
    CubeCoord(-1, 1, 0),
    CubeCoord(0, 1, -1),
)

# Ring walks start this many steps away from the centre in this direction.
_RING_START_DIRECTION = 4


# ═══════════════════════════════════════════════════════════════════
# Conversions and distances
# ═══════════════════════════════════════════════════════════════════

def axial_to_cube(q: int, r: int) -> CubeCoord:
    return CubeCoord.from_axial(q, r)


def cube_to_axial(cube: CubeCoord) -> Hex:
    return cube.to_axial()


def hex_distance(a: Hex, b: Hex) -> int:
    """Number of steps between two axial cells.

    ``(|dq| + |dr| + |ds|) / 2`` with ``s = -q - r``.  The numerator is
    always even for integer axial input.
    """
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def cube_distance(a: CubeCoord, b: CubeCoord) -> int:
    """``max(|dq|, |dr|, |ds|)`` — same value as :func:`hex_distance`."""
    return max(abs(a.q - b.q), abs(a.r - b.r), abs(a.s - b.s))


# ═══════════════════════════════════════════════════════════════════
# Neighbours, rings, disks
# ═══════════════════════════════════════════════════════════════════

def neighbors(q: int, r: int) -> List[Hex]:
    """Return the 6 axial neighbours of ``(q, r)``."""
    return [(q + dq, r + dr) for dq, dr in AXIAL_NEIGHBORS]


def cube_neighbor(cube: CubeCoord, direction: int) -> CubeCoord:
    return cube + CUBE_DIRECTIONS[direction % 6]


def ring(center: Hex, radius: int) -> List[Hex]:
    """Return the cells at exactly *radius* steps from *center*.

    Radius 0 is ``[center]``; otherwise ``6 * radius`` cells, walked
    side by side starting ``radius`` steps out in direction 4.
    """
    if radius < 0:
        raise ValueError("radius must be >= 0")
    if radius == 0:
        return [center]

    current = axial_to_cube(*center) + CUBE_DIRECTIONS[_RING_START_DIRECTION].scale(radius)
    cells: List[Hex] = []
    for side in range(6):
        for _ in range(radius):
            cells.append(current.to_axial())
            current = cube_neighbor(current, side)
    return cells


def hex_disk(max_radius: int, center: Hex = (0, 0)) -> List[Hex]:
    """Return every cell within *max_radius* of *center*, sorted by ``(q, r)``.

    A negative radius yields an empty list.
    """
    seen = set()
    for radius in range(max_radius + 1):
        seen.update(ring(center, radius))
    return sorted(seen)


def hex_cell_count(rings: int) -> int:
    """Number of cells in a disk of *rings* rings around a centre cell."""
    if rings < 0:
        raise ValueError("rings must be >= 0")
    return 1 + 3 * rings * (rings + 1)


def in_hex_boundary(q: int, r: int, center: Hex, radius: int) -> bool:
    return hex_distance((q, r), center) <= radius


# ═══════════════════════════════════════════════════════════════════
# Layout helpers
# ═══════════════════════════════════════════════════════════════════

def offset_to_axial(col: int, row: int) -> Hex:
    """Even-q offset ``(col, row)`` → axial."""
    return (col, row - (col + (col & 1)) // 2)


def axial_to_offset(q: int, r: int) -> Tuple[int, int]:
    """Axial → even-q offset ``(col, row)``."""
    return (q, r + (q + (q & 1)) // 2)


def hex_to_world(q: int, r: int, size: float = 1.0) -> Tuple[float, float]:
    """Centre of a pointy-top hex in world ``(x, z)`` units."""
    x = size * math.sqrt(3) * (q + r / 2)
    z = size * 1.5 * r
    return x, z


def cube_round(fq: float, fr: float, fs: float) -> CubeCoord:
    """Round fractional cube coordinates to the containing cell."""
    q = round(fq)
    r = round(fr)
    s = round(fs)
    dq = abs(q - fq)
    dr = abs(r - fr)
    ds = abs(s - fs)
    if dq > dr and dq > ds:
        q = -r - s
    elif dr > ds:
        r = -q - s
    else:
        s = -q - r
    return CubeCoord(q, r, s)


def world_to_hex(x: float, z: float, size: float = 1.0) -> Hex:
    """Inverse of :func:`hex_to_world` — the cell containing ``(x, z)``."""
    fq = (math.sqrt(3) / 3 * x - z / 3) / size
    fr = (2 / 3 * z) / size
    return cube_round(fq, fr, -fq - fr).to_axial()


def hex_corners(center: Tuple[float, float], size: float) -> List[Tuple[float, float]]:
    """Corner points of a pointy-top hexagon around a world-space centre."""
    cx, cz = center
    corners = []
    for i in range(6):
        angle = math.radians(60 * i - 30)
        corners.append((cx + size * math.cos(angle), cz + size * math.sin(angle)))
    return corners
