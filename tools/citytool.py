#!/usr/bin/env python3
import argparse, logging

from citylines.config import Difficulty, DifficultyParams
from citylines.errors import CityLinesError
from citylines.levels.loader import LEVELS_DIR, load_level_file, save_level_file
from citylines.levels.progression import LevelManager, difficulty_for_level, seed_for_level
from citylines.logging_config import configure_logging
from citylines.mapgen.generator import generate
from citylines.render.ascii import describe, level_to_ascii

log = logging.getLogger("citylines.tools")


def _params(args):
    if args.level is not None:
        return difficulty_for_level(args.level)
    return DifficultyParams(
        grid_size=args.size,
        destination_count=args.landmarks,
        difficulty=Difficulty(args.difficulty),
        min_path_length=args.min_path,
        detour_probability=args.detour,
    )


def _seed(args):
    if args.seed is not None:
        return args.seed
    return seed_for_level(args.level) if args.level is not None else 12345


def cmd_emit(args):
    params = _params(args)
    level = generate(params, _seed(args))
    save_level_file(level, args.out, name=args.name, difficulty=params.difficulty.value)
    print(f"Wrote {args.out} (seed {level.seed})")


def cmd_show(args):
    if args.file:
        level = load_level_file(args.file)
    else:
        level = generate(_params(args), _seed(args))
    print(level_to_ascii(level, solved=args.solved))
    print()
    print(describe(level))


def cmd_batch(args):
    mgr = LevelManager(levels_dir=args.levels_dir)
    for n in range(1, args.count + 1):
        level = mgr.load_level(n)
        print(f"level {n:3d}: {level.grid_size.rows}x{level.grid_size.cols} "
              f"seed={level.seed} destinations={len(level.destinations)} roads={len(level.roads)}")
    print(f"{len(mgr.bad_seeds)} bad seeds skipped along the way")


def _add_gen_args(p):
    p.add_argument('--level', type=int, help='use the difficulty and seed of this level number')
    p.add_argument('--size', type=int, default=4)
    p.add_argument('--landmarks', type=int, default=2)
    p.add_argument('--difficulty', choices=[d.value for d in Difficulty], default='easy')
    p.add_argument('--min-path', type=int, default=3)
    p.add_argument('--detour', type=float, default=0.1)
    p.add_argument('--seed', type=int)


def main():
    p = argparse.ArgumentParser(description="City Lines level generator")
    p.add_argument('-v', '--verbose', action='store_true')
    sub = p.add_subparsers(dest='cmd', required=True)

    p1 = sub.add_parser('emit', help='generate one level to JSON')
    _add_gen_args(p1)
    p1.add_argument('--out', type=str, required=True)
    p1.add_argument('--name', type=str, default='Generated Level')
    p1.set_defaults(func=cmd_emit)

    p2 = sub.add_parser('show', help='print a level as text')
    _add_gen_args(p2)
    p2.add_argument('--file', type=str, help='show a level JSON file instead of generating')
    p2.add_argument('--solved', action='store_true')
    p2.set_defaults(func=cmd_show)

    p3 = sub.add_parser('batch', help='run levels 1..N through the level manager')
    p3.add_argument('--count', type=int, default=12)
    p3.add_argument('--levels-dir', type=str, default=LEVELS_DIR)
    p3.set_defaults(func=cmd_batch)

    args = p.parse_args()
    configure_logging("DEBUG" if args.verbose else "WARNING")
    try:
        args.func(args)
    except CityLinesError as e:
        log.error("%s", e)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
