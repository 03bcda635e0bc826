# Plain-text dump of a level, for the CLI and for eyeballing test failures.

from typing import Dict, List

from ..level import GeneratedLevel
from ..tiles import Direction, TileConfig, TileKind

EMPTY = "."

# Road glyphs keyed by the set of open sides.
_ROAD_GLYPHS: Dict[frozenset, str] = {
    frozenset({Direction.NORTH, Direction.SOUTH}): "│",
    frozenset({Direction.EAST, Direction.WEST}): "─",
    frozenset({Direction.NORTH, Direction.EAST}): "└",
    frozenset({Direction.EAST, Direction.SOUTH}): "┌",
    frozenset({Direction.SOUTH, Direction.WEST}): "┐",
    frozenset({Direction.WEST, Direction.NORTH}): "┘",
    frozenset({Direction.NORTH, Direction.EAST, Direction.WEST}): "┴",
    frozenset({Direction.NORTH, Direction.EAST, Direction.SOUTH}): "├",
    frozenset({Direction.EAST, Direction.SOUTH, Direction.WEST}): "┬",
    frozenset({Direction.SOUTH, Direction.WEST, Direction.NORTH}): "┤",
    frozenset(Direction): "┼",
}

_FIXED_GLYPHS = {
    TileKind.TURNPIKE: "T",
    TileKind.LANDMARK: "L",
    TileKind.HOUSE: "H",
    TileKind.DECORATION: "*",
}


def glyph(tile: TileConfig) -> str:
    if tile.kind in _FIXED_GLYPHS:
        return _FIXED_GLYPHS[tile.kind]
    return _ROAD_GLYPHS.get(tile.openings, "?")


def level_to_ascii(level: GeneratedLevel, solved: bool = False) -> str:
    grid = level.to_grid(solved=solved)
    lines: List[str] = []
    for row in grid.as_matrix():
        lines.append(" ".join(EMPTY if t is None else glyph(t) for t in row))
    return "\n".join(lines)


def describe(level: GeneratedLevel) -> str:
    rows, cols = level.grid_size
    out = [
        f"Grid: {rows}x{cols}  seed: {level.seed}",
        f"Turnpike: ({level.goal.row}, {level.goal.col})",
        f"Road tiles: {len(level.roads)}  decorations: {len(level.decorations)}",
    ]
    for dest, path in zip(level.destinations, level.solution_paths):
        kind = dest.landmark_type.value if dest.landmark_type else "landmark"
        steps = " -> ".join(f"({p.row},{p.col})" for p in path)
        out.append(f"  {kind} at ({dest.row}, {dest.col}): {steps}")
    for road in level.roads:
        out.append(
            f"  ({road.row},{road.col}) {road.kind.value} "
            f"@ {road.rotation} (solution {road.solution_rotation})"
        )
    return "\n".join(out)
