#!/usr/bin/env python3
# Render a level (JSON file, or generated on the fly) to a PNG diagram using Pillow.
# Road stubs that are not at their solution rotation are drawn in orange.

import argparse, os

from citylines.levels.loader import load_level_file
from citylines.levels.progression import difficulty_for_level, seed_for_level
from citylines.logging_config import configure_logging
from citylines.mapgen.generator import generate
from citylines.render.diagram import save_level_png


def main():
    ap = argparse.ArgumentParser()
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--file", type=str, help="Level JSON file")
    src.add_argument("--level", type=int, help="Generate this level number")
    ap.add_argument("--outdir", type=str, default="out/png", help="Where to write PNGs")
    ap.add_argument("--tile", type=int, default=48, help="Tile size in pixels")
    ap.add_argument("--solved", action="store_true", help="Draw solution rotations")
    args = ap.parse_args()
    configure_logging("WARNING")

    if args.file:
        level = load_level_file(args.file)
        stem = os.path.splitext(os.path.basename(args.file))[0]
    else:
        level = generate(difficulty_for_level(args.level), seed_for_level(args.level))
        stem = f"level-{args.level}"

    suffix = "-solved" if args.solved else ""
    out = os.path.join(args.outdir, f"{stem}{suffix}.png")
    save_level_png(level, out, tile_size=args.tile, solved=args.solved)
    print(f"Wrote {out}")


if __name__ == "__main__":
    main()
