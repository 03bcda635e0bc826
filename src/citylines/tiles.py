# Tile vocabulary: directions, kinds, road tiers and the per-cell record.

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, FrozenSet, NamedTuple, Optional, Tuple

ROTATIONS = (0, 90, 180, 270)


class Direction(Enum):
    NORTH = "North"
    EAST = "East"
    SOUTH = "South"
    WEST = "West"


# Clockwise order; index * 90 is the heading in degrees.
CLOCKWISE = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)

DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (1, 0),
    Direction.WEST: (0, -1),
}


def rotate_cw(d: Direction, steps: int = 1) -> Direction:
    return CLOCKWISE[(CLOCKWISE.index(d) + steps) % 4]


def opposite(d: Direction) -> Direction:
    return rotate_cw(d, 2)


def rotate_openings(openings, degrees: int) -> FrozenSet[Direction]:
    if degrees % 90:
        raise ValueError(f"rotation must be a multiple of 90, got {degrees}")
    steps = (degrees // 90) % 4
    return frozenset(rotate_cw(d, steps) for d in openings)


class TileKind(Enum):
    STRAIGHT = "straight"
    CORNER = "corner"
    T_JUNCTION = "t_junction"
    CROSSROADS = "crossroads"
    HOUSE = "house"
    LANDMARK = "landmark"
    TURNPIKE = "turnpike"
    DECORATION = "decoration"


N, E, S, W = CLOCKWISE

BASE_OPENINGS: Dict[TileKind, FrozenSet[Direction]] = {
    TileKind.STRAIGHT: frozenset({N, S}),
    TileKind.CORNER: frozenset({N, E}),
    TileKind.T_JUNCTION: frozenset({N, E, W}),
    TileKind.CROSSROADS: frozenset({N, E, S, W}),
    TileKind.HOUSE: frozenset({S}),
    TileKind.LANDMARK: frozenset({N}),
    TileKind.TURNPIKE: frozenset({N, S}),
    TileKind.DECORATION: frozenset(),
}

ROAD_KINDS = frozenset({
    TileKind.STRAIGHT, TileKind.CORNER, TileKind.T_JUNCTION, TileKind.CROSSROADS,
})


class RoadTypeTier(Enum):
    HOUSE = "house"
    LOCAL_ROAD = "local_road"
    ARTERIAL_ROAD = "arterial_road"
    HIGHWAY = "highway"
    TURNPIKE = "turnpike"
    LANDMARK = "landmark"
    SCENERY = "scenery"


CONNECTION_RULES: Dict[RoadTypeTier, FrozenSet[RoadTypeTier]] = {
    RoadTypeTier.HOUSE: frozenset({RoadTypeTier.LOCAL_ROAD}),
    RoadTypeTier.LOCAL_ROAD: frozenset({
        RoadTypeTier.LOCAL_ROAD, RoadTypeTier.HOUSE, RoadTypeTier.ARTERIAL_ROAD,
        RoadTypeTier.LANDMARK, RoadTypeTier.TURNPIKE,
    }),
    RoadTypeTier.ARTERIAL_ROAD: frozenset({
        RoadTypeTier.LOCAL_ROAD, RoadTypeTier.ARTERIAL_ROAD, RoadTypeTier.HIGHWAY,
    }),
    RoadTypeTier.HIGHWAY: frozenset({
        RoadTypeTier.ARTERIAL_ROAD, RoadTypeTier.HIGHWAY, RoadTypeTier.TURNPIKE,
    }),
    RoadTypeTier.TURNPIKE: frozenset({
        RoadTypeTier.HIGHWAY, RoadTypeTier.LANDMARK, RoadTypeTier.LOCAL_ROAD,
    }),
    RoadTypeTier.LANDMARK: frozenset({RoadTypeTier.TURNPIKE, RoadTypeTier.LOCAL_ROAD}),
    RoadTypeTier.SCENERY: frozenset(),
}


def tiers_compatible(a: RoadTypeTier, b: RoadTypeTier) -> bool:
    return b in CONNECTION_RULES[a] and a in CONNECTION_RULES[b]


class LandmarkType(Enum):
    HOME = "home"
    DINER = "diner"
    GAS_STATION = "gas_station"
    MARKET = "market"


# Generated destinations cycle through these.
SERVICE_LANDMARKS = (LandmarkType.DINER, LandmarkType.GAS_STATION, LandmarkType.MARKET)


class DecorationType(Enum):
    TREE = "tree"
    PINE = "pine"
    PARK = "park"


class TilePosition(NamedTuple):
    row: int
    col: int

    @property
    def key(self) -> str:
        return f"{self.row},{self.col}"

    @classmethod
    def from_key(cls, key: str) -> "TilePosition":
        r, c = key.split(",")
        return cls(int(r), int(c))

    def step(self, d: Direction) -> "TilePosition":
        dr, dc = DELTAS[d]
        return TilePosition(self.row + dr, self.col + dc)

    def manhattan(self, other: "TilePosition") -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)

    def direction_to(self, other: "TilePosition") -> Optional[Direction]:
        """Direction of a 4-adjacent cell, None if not adjacent."""
        for d, (dr, dc) in DELTAS.items():
            if (self.row + dr, self.col + dc) == (other.row, other.col):
                return d
        return None


@dataclass
class TileConfig:
    position: TilePosition
    kind: TileKind
    tier: RoadTypeTier
    rotation: int = 0
    solution_rotation: int = 0
    rotatable: bool = False
    landmark_type: Optional[LandmarkType] = None
    decoration_type: Optional[DecorationType] = None

    @property
    def row(self) -> int:
        return self.position.row

    @property
    def col(self) -> int:
        return self.position.col

    @property
    def openings(self) -> FrozenSet[Direction]:
        return rotate_openings(BASE_OPENINGS[self.kind], self.rotation)

    @property
    def solution_openings(self) -> FrozenSet[Direction]:
        return rotate_openings(BASE_OPENINGS[self.kind], self.solution_rotation)

    @property
    def is_road(self) -> bool:
        return self.kind in ROAD_KINDS

    @property
    def is_solved(self) -> bool:
        # Straights have two equivalent solutions, 180 degrees apart.
        return self.openings == self.solution_openings

    def rotate(self) -> bool:
        """Turn 90 degrees clockwise. Fixed tiles do not move."""
        if not self.rotatable:
            return False
        self.rotation = (self.rotation + 90) % 360
        return True

    def solved(self) -> "TileConfig":
        return replace(self, rotation=self.solution_rotation)


def rotation_for_openings(kind: TileKind, wanted) -> Optional[int]:
    """Smallest rotation whose openings equal `wanted` exactly, or None."""
    wanted = frozenset(wanted)
    for degrees in ROTATIONS:
        if rotate_openings(BASE_OPENINGS[kind], degrees) == wanted:
            return degrees
    return None
