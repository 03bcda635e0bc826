# src/citylines/mapgen/placement.py
# Fixed pieces: the goal (turnpike), the destinations (landmarks) and, once the
# puzzle is final, the cosmetic decorations.

import logging
from typing import List

from ..config import LIMITS, Difficulty, GeneratorLimits
from ..errors import PlacementError
from ..grid import Grid
from ..rng import XORShift32
from ..tiles import (
    SERVICE_LANDMARKS, DecorationType, RoadTypeTier, TileConfig, TileKind, TilePosition,
)

logger = logging.getLogger(__name__)

MIN_GOAL_DISTANCE = 3
MIN_DESTINATION_SPACING = 2


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def edge_cells(rows: int, cols: int) -> List[TilePosition]:
    """Border cells minus the four corners, row-major."""
    out = []
    for r in range(rows):
        for c in range(cols):
            on_edge = r in (0, rows - 1) or c in (0, cols - 1)
            corner = r in (0, rows - 1) and c in (0, cols - 1)
            if on_edge and not corner:
                out.append(TilePosition(r, c))
    return out


def corner_cells(rows: int, cols: int) -> List[TilePosition]:
    # TL, TR, BR, BL
    return [
        TilePosition(0, 0),
        TilePosition(0, cols - 1),
        TilePosition(rows - 1, cols - 1),
        TilePosition(rows - 1, 0),
    ]


def goal_position(
    rows: int,
    cols: int,
    difficulty: Difficulty,
    rng: XORShift32,
    limits: GeneratorLimits = LIMITS,
) -> TilePosition:
    """
    easy:   centre plus a random offset of up to a quarter grid on each axis,
            kept off the border
    medium: any border cell that is not a corner
    hard:   a corner
    """
    if difficulty is Difficulty.EASY:
        radius = max(1, min(rows, cols) // limits.easy_radius_divisor)
        dr = rng.next_int(-radius, radius + 1)
        dc = rng.next_int(-radius, radius + 1)
        row = _clamp(rows // 2 + dr, 1, rows - 2)
        col = _clamp(cols // 2 + dc, 1, cols - 2)
        return TilePosition(row, col)
    if difficulty is Difficulty.MEDIUM:
        return rng.choice(edge_cells(rows, cols))
    return rng.choice(corner_cells(rows, cols))


def place_goal(
    grid: Grid,
    rng: XORShift32,
    difficulty: Difficulty,
    limits: GeneratorLimits = LIMITS,
) -> TileConfig:
    pos = goal_position(grid.rows, grid.cols, difficulty, rng, limits)
    goal = TileConfig(
        position=pos,
        kind=TileKind.TURNPIKE,
        tier=RoadTypeTier.TURNPIKE,
        rotation=0,  # N-S through road
        solution_rotation=0,
        rotatable=False,
    )
    grid.place(goal)
    logger.debug("goal at %s", pos)
    return goal


def destination_ok(
    grid: Grid,
    pos: TilePosition,
    goal: TileConfig,
    placed: List[TileConfig],
) -> bool:
    if not grid.is_empty(pos):
        return False
    if pos.manhattan(goal.position) < MIN_GOAL_DISTANCE:
        return False
    return all(pos.manhattan(d.position) >= MIN_DESTINATION_SPACING for d in placed)


def place_destinations(
    grid: Grid,
    rng: XORShift32,
    goal: TileConfig,
    count: int,
    limits: GeneratorLimits = LIMITS,
) -> List[TileConfig]:
    placed: List[TileConfig] = []
    for i in range(count):
        for _ in range(limits.placement_attempts):
            pos = TilePosition(rng.next_int(0, grid.rows), rng.next_int(0, grid.cols))
            if destination_ok(grid, pos, goal, placed):
                break
        else:
            raise PlacementError(
                f"no room for destination {i + 1} of {count} "
                f"after {limits.placement_attempts} samples"
            )

        dest = TileConfig(
            position=pos,
            kind=TileKind.LANDMARK,
            tier=RoadTypeTier.LANDMARK,
            rotatable=False,
            landmark_type=SERVICE_LANDMARKS[i % len(SERVICE_LANDMARKS)],
        )
        grid.place(dest)
        placed.append(dest)
        logger.debug("destination %s (%s) at %s", i + 1, dest.landmark_type.value, pos)
    return placed


def place_decorations(
    grid: Grid,
    rng: XORShift32,
    limits: GeneratorLimits = LIMITS,
) -> List[TileConfig]:
    """Scatter scenery on leftover cells. Runs last; never touches the roads."""
    empty = rng.shuffle(grid.empty_positions())
    count = min(limits.max_decorations, len(empty))
    kinds = list(DecorationType)
    out: List[TileConfig] = []
    for pos in empty[:count]:
        deco = TileConfig(
            position=pos,
            kind=TileKind.DECORATION,
            tier=RoadTypeTier.SCENERY,
            rotatable=False,
            decoration_type=rng.choice(kinds),
        )
        grid.place(deco)
        out.append(deco)
    return out
