# src/citylines/mapgen/assign.py
# Turn carved links into tiles, check the finished layout, then scramble it.

import logging
from typing import Dict, List, Optional, Set

from ..engine.connectivity import (
    build_connection_graph,
    validate_all_tiles_on_some_path,
    validate_destinations_connect_to_goal,
)
from ..errors import FourWayIntersectionError, UnsolvableLayoutError
from ..grid import Grid
from ..rng import XORShift32
from ..tiles import (
    ROTATIONS, Direction, RoadTypeTier, TileConfig, TileKind, TilePosition,
    opposite, rotation_for_openings,
)
from .carve import MAX_LINKS, Path, RoadNetwork

logger = logging.getLogger(__name__)


def kind_for_links(links: Set[Direction]) -> Optional[TileKind]:
    if len(links) == 2:
        a, b = links
        return TileKind.STRAIGHT if b == opposite(a) else TileKind.CORNER
    if len(links) == 3:
        return TileKind.T_JUNCTION
    return None


def assign_tiles(
    grid: Grid,
    net: RoadNetwork,
    destinations: List[TileConfig],
) -> List[TileConfig]:
    """Place a road tile on every carved cell, at the rotation matching its links."""
    roads: List[TileConfig] = []
    for pos in net.road_cells():
        links = net.links[pos]
        kind = kind_for_links(links)
        rotation = rotation_for_openings(kind, links) if kind is not None else None
        if rotation is None:
            # carving caps links at three and never leaves a dead end
            logger.error(
                "road at %s has %d links %s; falling back to straight/0",
                pos, len(links), sorted(d.value for d in links),
            )
            kind, rotation = TileKind.STRAIGHT, 0
        tile = TileConfig(
            position=pos,
            kind=kind,
            tier=RoadTypeTier.LOCAL_ROAD,
            rotation=rotation,
            solution_rotation=rotation,
            rotatable=True,
        )
        grid.place(tile)
        roads.append(tile)

    for dest in destinations:
        facing = rotation_for_openings(TileKind.LANDMARK, net.links.get(dest.position, ()))
        if facing is None:
            logger.error("destination at %s has links %s", dest.position,
                         net.links.get(dest.position))
            facing = 0
        dest.rotation = dest.solution_rotation = facing
    return roads


def check_no_four_way(paths: List[Path]) -> None:
    """Rebuild links from the solution paths and refuse any cell needing four."""
    links: Dict[TilePosition, Set[Direction]] = {}
    for path in paths:
        for a, b in zip(path, path[1:]):
            d = a.direction_to(b)
            if d is None:
                raise FourWayIntersectionError(f"path jumps from {a} to {b}")
            links.setdefault(a, set()).add(d)
            links.setdefault(b, set()).add(opposite(d))
    crowded = sorted(p for p, ds in links.items() if len(ds) > MAX_LINKS)
    if crowded:
        raise FourWayIntersectionError(f"cells need a four-way intersection: {crowded}")


def verify_solvable(grid: Grid, goal: TileConfig, destinations: List[TileConfig],
                    roads: List[TileConfig]) -> None:
    """Run the validator over the solved layout, before any scrambling."""
    solved = Grid.from_tiles(grid.rows, grid.cols, (t.solved() for t in grid.tiles()))
    graph = build_connection_graph(solved.as_matrix())

    reach = validate_destinations_connect_to_goal(destinations, [goal], graph)
    if not reach.all_connected:
        stuck = [d.position for d in reach.failures]
        raise UnsolvableLayoutError(f"destinations cannot reach the goal: {stuck}")

    orphans = validate_all_tiles_on_some_path(roads, destinations, [goal], graph)
    if not orphans.all_connected:
        loose = [t.position for t in orphans.orphans]
        raise UnsolvableLayoutError(f"road tiles off every solution path: {loose}")


def scramble_rotations(grid: Grid, rng: XORShift32) -> int:
    """Randomise the current rotation of every rotatable road tile. Returns how many."""
    count = 0
    for tile in grid.tiles():
        if not tile.is_road:
            continue
        if not tile.rotatable:
            logger.warning("road tile at %s is not rotatable; left as is", tile.position)
            continue
        tile.rotation = rng.choice(ROTATIONS)
        count += 1
    return count
