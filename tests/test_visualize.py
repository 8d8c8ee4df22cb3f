"""Tests for the visualize module (rendering to PNG)."""

import tempfile
from pathlib import Path

import pytest

pytest.importorskip("matplotlib")

from hexroads.hexmath import hex_disk
from hexroads.layout import LayoutConfig, compose_layout
from hexroads.models import TileType
from hexroads.visualize import TILE_COLORS, render_tiles_png


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


class TestRenderTilesPng:
    def test_renders_layout(self, tmp_dir):
        result = compose_layout(LayoutConfig(rings=3))
        out = tmp_dir / "layout.png"
        returned = render_tiles_png(result.tiles(), out, title="Layout")
        assert returned == out
        assert out.exists()
        assert out.stat().st_size > 0

    def test_without_road_links(self, tmp_dir):
        tiles = {c: TileType.ROAD for c in hex_disk(1)}
        out = tmp_dir / "roads.png"
        render_tiles_png(tiles, out, road_links=False)
        assert out.exists()

    def test_creates_parent_dirs(self, tmp_dir):
        out = tmp_dir / "nested" / "dir" / "map.png"
        render_tiles_png({(0, 0): TileType.WATER}, str(out))
        assert out.exists()

    def test_empty_map(self, tmp_dir):
        out = tmp_dir / "empty.png"
        render_tiles_png({}, out)
        assert out.exists()

    def test_custom_colors(self, tmp_dir):
        out = tmp_dir / "custom.png"
        render_tiles_png({(0, 0): TileType.GRASS}, out, colors={TileType.GRASS: "#ffffff"})
        assert out.exists()

    def test_every_tile_type_has_color(self):
        assert set(TILE_COLORS) == set(TileType)
