"""hexroads command-line interface."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from . import wire
from .connectivity import validate_road_connectivity
from .layout import PRESETS, LayoutConfig, compose_layout
from .pathfinding import hex_astar, path_without_start
from .regions import generate_voronoi_regions, region_sizes
from .roads import grow_road_network
from .service import VERSION


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="hexroads hex map generator")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for progress, -vv for debug output")
    parser.add_argument("--version", action="version", version=VERSION)
    sub = parser.add_subparsers(dest="command", required=True)

    regions = sub.add_parser("regions", help="Generate Voronoi terrain regions")
    regions.add_argument("--rings", type=int, required=True)
    regions.add_argument("--center", type=int, nargs=2, default=(0, 0), metavar=("Q", "R"))
    regions.add_argument("--forest", type=int, default=4)
    regions.add_argument("--water", type=int, default=3)
    regions.add_argument("--grass", type=int, default=6)
    regions.add_argument("--out", dest="output_path")

    roads = sub.add_parser("roads", help="Grow a connected road network")
    roads.add_argument("--seeds", dest="seeds_path", required=True)
    roads.add_argument("--terrain", dest="terrain_path", required=True)
    roads.add_argument("--occupied", dest="occupied_path")
    roads.add_argument("--target", type=int, required=True)
    roads.add_argument("--out", dest="output_path")

    path = sub.add_parser("path", help="Shortest path between two cells")
    path.add_argument("--terrain", dest="terrain_path", required=True)
    path.add_argument("--start", type=int, nargs=2, required=True, metavar=("Q", "R"))
    path.add_argument("--goal", type=int, nargs=2, required=True, metavar=("Q", "R"))
    path.add_argument("--exclude-start", action="store_true")
    path.add_argument("--out", dest="output_path")

    validate = sub.add_parser("validate", help="Check that a road set is connected")
    validate.add_argument("--in", dest="input_path", required=True)

    layout = sub.add_parser("layout", help="Compose a full map layout")
    layout.add_argument("--preset", choices=sorted(PRESETS))
    layout.add_argument("--rings", type=int)
    layout.add_argument("--seed", type=int)
    layout.add_argument("--primary", choices=["forest", "water", "grass"])
    layout.add_argument("--exclude", nargs="*", choices=["forest", "water", "grass"])
    layout.add_argument("--road-density", type=float)
    layout.add_argument("--buildings", dest="building_count", type=int)
    layout.add_argument("--building-density", choices=["sparse", "medium", "dense"])
    layout.add_argument("--out", dest="output_path")
    layout.add_argument("--render-out", dest="render_path")

    render = sub.add_parser("render", help="Render a tile-record file to PNG")
    render.add_argument("--in", dest="input_path", required=True)
    render.add_argument("--out", dest="output_path", required=True)
    render.add_argument("--no-road-links", action="store_true")
    render.add_argument("--title", default="")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "regions":
        _cmd_regions(args)

    elif args.command == "roads":
        _cmd_roads(args)

    elif args.command == "path":
        _cmd_path(args)

    elif args.command == "validate":
        roads = wire.decode_coords(_read(args.input_path))
        if not validate_road_connectivity(roads):
            print(f"DISCONNECTED ({len(roads)} roads)")
            raise SystemExit(1)
        print(f"OK ({len(roads)} roads)")

    elif args.command == "layout":
        _cmd_layout(args)

    elif args.command == "render":
        from .visualize import render_tiles_png
        records = wire.decode_tile_records(_read(args.input_path))
        tiles = {rec.coord: rec.tile_type for rec in records}
        render_tiles_png(tiles, args.output_path,
                         road_links=not args.no_road_links, title=args.title)
        print(f"Saved {args.output_path}")


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _read(path: Optional[str]) -> str:
    if path is None:
        return wire.EMPTY
    return Path(path).read_text(encoding="utf-8")


def _emit(text: str, output_path: Optional[str]) -> None:
    if output_path:
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        print(f"Saved {output_path}", file=sys.stderr)
    else:
        print(text)


def _cmd_regions(args) -> None:
    records = generate_voronoi_regions(
        args.rings, tuple(args.center), args.forest, args.water, args.grass,
    )
    for tile_type, count in region_sizes(records):
        print(f"  {tile_type.label}: {count}", file=sys.stderr)
    _emit(wire.encode_tile_records(records), args.output_path)


def _cmd_roads(args) -> None:
    roads = grow_road_network(
        wire.decode_coords(_read(args.seeds_path)),
        wire.decode_coords(_read(args.terrain_path)),
        wire.decode_coords(_read(args.occupied_path)),
        args.target,
    )
    print(f"{len(roads)} road cells (target {args.target})", file=sys.stderr)
    _emit(wire.encode_coords(roads), args.output_path)


def _cmd_path(args) -> None:
    terrain = frozenset(wire.decode_coords(_read(args.terrain_path)))
    route = hex_astar(tuple(args.start), tuple(args.goal), terrain)
    if args.exclude_start:
        route = path_without_start(route)
    _emit(wire.encode_path(route), args.output_path)
    if route is None:
        raise SystemExit(1)


def _cmd_layout(args) -> None:
    config = PRESETS[args.preset] if args.preset else LayoutConfig()
    overrides = {
        "rings": args.rings,
        "seed": args.seed,
        "primary": args.primary,
        "exclude": tuple(args.exclude) if args.exclude is not None else None,
        "road_density": args.road_density,
        "building_count": args.building_count,
        "building_density": args.building_density,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        config = replace(config, **overrides)
    except ValueError as exc:
        print(exc)
        raise SystemExit(2)

    result = compose_layout(config)
    print(
        f"{len(result.records)} records, {len(result.roads)} roads, "
        f"{len(result.buildings)} buildings, connected={result.roads_connected}",
        file=sys.stderr,
    )
    _emit(wire.encode_tile_records(result.records), args.output_path)
    if args.render_path:
        from .visualize import render_tiles_png
        render_tiles_png(result.tiles(), args.render_path, title=args.preset or "layout")
        print(f"Saved {args.render_path}", file=sys.stderr)


if __name__ == "__main__":
    main()
