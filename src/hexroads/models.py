from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Tuple

Hex = Tuple[int, int]
"""Axial ``(q, r)`` coordinate of a hex cell."""


class TileType(IntEnum):
    """Closed set of tile classifications.

    The integer values are the wire codes exchanged with the host.
    """

    GRASS = 0
    BUILDING = 1
    ROAD = 2
    FOREST = 3
    WATER = 4

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_code(cls, code: object) -> Optional["TileType"]:
        """Return the tile type for *code*, or ``None`` if it is unknown."""
        if isinstance(code, bool) or not isinstance(code, int):
            return None
        try:
            return cls(code)
        except ValueError:
            return None

    @classmethod
    def from_label(cls, label: str) -> "TileType":
        """Return the tile type named *label*, or raise ``KeyError``."""
        return cls[label.upper()]


@dataclass(frozen=True)
class CubeCoord:
    q: int
    r: int
    s: int

    @classmethod
    def from_axial(cls, q: int, r: int) -> CubeCoord:
        return cls(q, r, -q - r)

    def to_axial(self) -> Hex:
        return (self.q, self.r)

    def is_valid(self) -> bool:
        return self.q + self.r + self.s == 0

    def scale(self, factor: int) -> CubeCoord:
        return CubeCoord(self.q * factor, self.r * factor, self.s * factor)

    def __add__(self, other: CubeCoord) -> CubeCoord:
        return CubeCoord(self.q + other.q, self.r + other.r, self.s + other.s)


@dataclass(frozen=True)
class TileRecord:
    """One classified cell, as exchanged across the wire."""

    q: int
    r: int
    tile_type: TileType

    @property
    def coord(self) -> Hex:
        return (self.q, self.r)


@dataclass(frozen=True)
class VoronoiSeed:
    """Anchor point for nearest-seed region assignment."""

    q: int
    r: int
    tile_type: TileType

    @property
    def coord(self) -> Hex:
        return (self.q, self.r)


@dataclass
class TileStats:
    """Per-classification counts over a grid."""

    grass: int = 0
    building: int = 0
    road: int = 0
    forest: int = 0
    water: int = 0

    @property
    def total(self) -> int:
        return self.grass + self.building + self.road + self.forest + self.water

    def count(self, tile_type: TileType) -> int:
        return getattr(self, tile_type.label)

    def add(self, tile_type: TileType, n: int = 1) -> None:
        setattr(self, tile_type.label, self.count(tile_type) + n)

    def to_dict(self) -> Dict[str, int]:
        return {
            "grass": self.grass,
            "building": self.building,
            "road": self.road,
            "forest": self.forest,
            "water": self.water,
            "total": self.total,
        }
