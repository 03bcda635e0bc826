# src/citylines/level.py
# GeneratedLevel: the immutable-by-convention output of generation, and its
# conversion to/from the JSON level format shared with hand-authored levels.

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, NamedTuple, Optional

from .errors import LevelFormatError
from .grid import Grid
from .tiles import (
    ROTATIONS, DecorationType, LandmarkType, RoadTypeTier, TileConfig, TileKind, TilePosition,
)


class GridSize(NamedTuple):
    rows: int
    cols: int


@dataclass
class GeneratedLevel:
    grid_size: GridSize
    goal: TileConfig
    destinations: List[TileConfig]
    roads: List[TileConfig]
    decorations: List[TileConfig] = field(default_factory=list)
    solution_paths: List[List[TilePosition]] = field(default_factory=list)
    seed: Optional[int] = None

    def tiles(self) -> Iterator[TileConfig]:
        yield self.goal
        yield from self.destinations
        yield from self.roads
        yield from self.decorations

    def to_grid(self, solved: bool = False) -> Grid:
        """Arena of copies; `solved` puts every tile at its solution rotation."""
        rows, cols = self.grid_size
        pieces = (t.solved() if solved else replace(t) for t in self.tiles())
        return Grid.from_tiles(rows, cols, pieces)

    def to_dict(self, name: str = "Generated Level", description: str = "",
                difficulty: str = "") -> Dict[str, Any]:
        return {
            "name": name,
            "description": description or "Procedurally generated City Lines level",
            "difficulty": difficulty,
            "gridDimensions": {"rows": self.grid_size.rows, "cols": self.grid_size.cols},
            "seed": self.seed,
            "tiles": [tile_to_dict(t) for t in self.tiles()],
            "solutionPaths": [[[p.row, p.col] for p in path] for path in self.solution_paths],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratedLevel":
        try:
            dims = data["gridDimensions"]
            size = GridSize(int(dims["rows"]), int(dims["cols"]))
            raw_tiles = data["tiles"]
            if not isinstance(raw_tiles, list):
                raise TypeError(f"tiles must be a list, not {type(raw_tiles).__name__}")
        except (KeyError, TypeError, ValueError) as e:
            raise LevelFormatError(f"malformed level header: {e}") from e
        if size.rows < 1 or size.cols < 1:
            raise LevelFormatError(f"bad grid dimensions {size}")

        goal = None
        destinations: List[TileConfig] = []
        roads: List[TileConfig] = []
        decorations: List[TileConfig] = []
        seen = set()
        for raw in raw_tiles:
            t = tile_from_dict(raw)
            if not (0 <= t.row < size.rows and 0 <= t.col < size.cols):
                raise LevelFormatError(f"tile at {t.position} outside {size.rows}x{size.cols}")
            if t.position in seen:
                raise LevelFormatError(f"two tiles at {t.position}")
            seen.add(t.position)

            if t.kind is TileKind.TURNPIKE:
                if goal is not None:
                    raise LevelFormatError("more than one turnpike")
                goal = t
            elif t.kind is TileKind.LANDMARK:
                destinations.append(t)
            elif t.kind is TileKind.DECORATION:
                decorations.append(t)
            else:
                roads.append(t)
        if goal is None:
            raise LevelFormatError("level has no turnpike")

        try:
            paths = [
                [TilePosition(int(r), int(c)) for r, c in path]
                for path in data.get("solutionPaths") or []
            ]
        except (TypeError, ValueError) as e:
            raise LevelFormatError(f"malformed solutionPaths: {e}") from e
        check_solution_paths(paths, size, goal, destinations)
        return cls(size, goal, destinations, roads, decorations, paths, data.get("seed"))


def check_solution_paths(paths: List[List[TilePosition]], size: GridSize,
                         goal: TileConfig, destinations: List[TileConfig]) -> None:
    """One path per destination, in order, walking cell by cell to the turnpike."""
    if not paths:
        return
    if len(paths) != len(destinations):
        raise LevelFormatError(
            f"{len(paths)} solution paths for {len(destinations)} destinations"
        )
    for dest, path in zip(destinations, paths):
        if not path or path[0] != dest.position or path[-1] != goal.position:
            raise LevelFormatError(f"solution path for {dest.position} must run to the turnpike")
        for p in path:
            if not (0 <= p.row < size.rows and 0 <= p.col < size.cols):
                raise LevelFormatError(f"solution path leaves the grid at {p}")
        for a, b in zip(path, path[1:]):
            if a.manhattan(b) != 1:
                raise LevelFormatError(f"solution path jumps from {a} to {b}")


def tile_to_dict(t: TileConfig) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "row": t.row,
        "col": t.col,
        "tileType": t.kind.value,
        "roadType": t.tier.value,
        "solutionRotation": t.solution_rotation,
        "initialRotation": t.rotation,
        "rotatable": t.rotatable,
    }
    if t.landmark_type is not None:
        out["landmarkType"] = t.landmark_type.value
    if t.decoration_type is not None:
        out["decorationType"] = t.decoration_type.value
    return out


def tile_from_dict(raw: Dict[str, Any]) -> TileConfig:
    try:
        pos = TilePosition(int(raw["row"]), int(raw["col"]))
        kind = TileKind(raw["tileType"])
        tier = RoadTypeTier(raw["roadType"])
        solution = int(raw["solutionRotation"])
        # Fixed tiles may omit their starting rotation.
        current = int(raw.get("initialRotation", solution))
        rotatable = bool(raw.get("rotatable", False))
        landmark = LandmarkType(raw["landmarkType"]) if raw.get("landmarkType") else None
        decoration = DecorationType(raw["decorationType"]) if raw.get("decorationType") else None
    except (KeyError, TypeError, ValueError) as e:
        raise LevelFormatError(f"bad tile entry {raw!r}: {e}") from e

    for degrees in (solution, current):
        if degrees not in ROTATIONS:
            raise LevelFormatError(f"tile at {pos}: rotation {degrees} not in {ROTATIONS}")
    if not rotatable and current != solution:
        raise LevelFormatError(f"fixed tile at {pos} starts away from its solution")

    return TileConfig(
        position=pos,
        kind=kind,
        tier=tier,
        rotation=current,
        solution_rotation=solution,
        rotatable=rotatable,
        landmark_type=landmark,
        decoration_type=decoration,
    )
