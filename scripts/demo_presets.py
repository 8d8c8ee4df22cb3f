#!/usr/bin/env python3
"""Demo: compose every layout preset and render each to a PNG.

For each preset prints region/road/building counts and the road
connectivity check, then writes ``<out>/<preset>.png``.

Usage:
    python scripts/demo_presets.py                      # all presets
    python scripts/demo_presets.py --preset village     # just one
    python scripts/demo_presets.py --seed 7 --rings 5   # customise
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from hexroads import PRESETS, GridState, compose_layout, render_tiles_png


def main() -> None:
    parser = argparse.ArgumentParser(description="Layout preset demo")
    parser.add_argument("--preset", choices=sorted(PRESETS), help="Only this preset")
    parser.add_argument("--rings", type=int, help="Override the preset's ring count")
    parser.add_argument("--seed", type=int, default=42, help="Layout seed (default: 42)")
    parser.add_argument("--out", type=str, default="exports/presets", help="Output directory")
    parser.add_argument("--dpi", type=int, default=150, help="Output DPI (default: 150)")
    args = parser.parse_args()

    names = [args.preset] if args.preset else sorted(PRESETS)
    out_dir = Path(args.out)
    state = GridState()

    for name in names:
        overrides = {"seed": args.seed}
        if args.rings is not None:
            overrides["rings"] = args.rings

        print(f"Composing {name} …")
        result = compose_layout(PRESETS[name], **overrides)
        result.apply(state)

        for label, count in state.stats().to_dict().items():
            print(f"  {label}: {count}")
        print(f"  roads connected: {result.roads_connected}")
        if not result.roads_connected:
            raise SystemExit(1)

        out = out_dir / f"{name}.png"
        render_tiles_png(state.snapshot(), out, title=name, dpi=args.dpi)
        print(f"  → {out}")

    print("Done ✓")


if __name__ == "__main__":
    main()
