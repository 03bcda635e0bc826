# src/citylines/mapgen/carve.py
# Random-walk road carving from each destination to the goal.
#
# Every walk either reaches the goal through one of its openings or merges
# into road carved by an earlier walk and follows that road home, so the
# finished network is a tree rooted at the goal. No cell may ever need more
# than three links (there is no four-way tile in the generated vocabulary).

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..config import LIMITS, DifficultyParams, GeneratorLimits
from ..errors import CarveError
from ..grid import Grid
from ..rng import XORShift32
from ..tiles import Direction, TileConfig, TilePosition, opposite

logger = logging.getLogger(__name__)

MAX_LINKS = 3

Path = List[TilePosition]


@dataclass
class RoadNetwork:
    goal: TileConfig
    # Directions each cell links toward (roads, destinations and the goal).
    links: Dict[TilePosition, Set[Direction]] = field(default_factory=dict)
    # Next cell toward the goal, for every road cell.
    toward_goal: Dict[TilePosition, TilePosition] = field(default_factory=dict)

    def degree(self, pos: TilePosition) -> int:
        return len(self.links.get(pos, ()))

    def has_road(self, pos: TilePosition) -> bool:
        return pos in self.toward_goal

    def road_cells(self) -> List[TilePosition]:
        return sorted(self.toward_goal)

    def route_from(self, pos: TilePosition) -> Path:
        """Cells from a road cell to the goal, both ends included."""
        route = [pos]
        while route[-1] != self.goal.position:
            route.append(self.toward_goal[route[-1]])
        return route

    def commit(self, path: Path) -> None:
        for a, b in zip(path, path[1:]):
            d = a.direction_to(b)
            self.links.setdefault(a, set()).add(d)
            self.links.setdefault(b, set()).add(opposite(d))
        # path[0] is the destination, path[-1] the goal
        for a, b in zip(path[1:-1], path[2:]):
            self.toward_goal.setdefault(a, b)


def walk(
    grid: Grid,
    rng: XORShift32,
    net: RoadNetwork,
    start: TilePosition,
    params: DifficultyParams,
    limits: GeneratorLimits = LIMITS,
) -> Optional[Path]:
    """One random walk from `start`. None when it gets stuck or runs too long."""
    goal = net.goal.position
    path: Path = [start]
    visited = {start}
    extra: Dict[TilePosition, int] = {}
    cur = start

    def room(pos: TilePosition) -> bool:
        return net.degree(pos) + extra.get(pos, 0) < MAX_LINKS

    for _ in range(limits.max_walk_steps(grid.rows, grid.cols)):
        roads = len(path) - 1
        finish: Optional[Path] = None
        steps: List[TilePosition] = []

        for d, n in grid.neighbors(cur):
            if n in visited or not (room(cur) and room(n)):
                continue
            if n == goal:
                # only through the goal's own openings
                if opposite(d) in net.goal.openings and roads >= params.min_path_length:
                    finish = finish or [n]
                continue
            if net.has_road(n):
                route = net.route_from(n)
                if roads + len(route) - 1 >= params.min_path_length:
                    finish = finish or route
                continue
            if grid.is_empty(n):
                steps.append(n)

        if finish is not None:
            return path + finish
        if not steps:
            return None

        if rng.next() < params.detour_probability:
            nxt = rng.choice(steps)
        else:
            best = min(n.manhattan(goal) for n in steps)
            closest = [n for n in steps if n.manhattan(goal) == best]
            nxt = closest[0] if len(closest) == 1 else rng.choice(closest)

        extra[cur] = extra.get(cur, 0) + 1
        extra[nxt] = extra.get(nxt, 0) + 1
        path.append(nxt)
        visited.add(nxt)
        cur = nxt
    return None


def carve_roads(
    grid: Grid,
    rng: XORShift32,
    goal: TileConfig,
    destinations: List[TileConfig],
    params: DifficultyParams,
    limits: GeneratorLimits = LIMITS,
) -> Tuple[RoadNetwork, List[Path]]:
    net = RoadNetwork(goal)
    paths: List[Path] = []
    for dest in destinations:
        for attempt in range(1, limits.path_retries + 1):
            path = walk(grid, rng, net, dest.position, params, limits)
            if path is not None:
                break
        else:
            raise CarveError(
                f"no road from {dest.position} to the goal after {limits.path_retries} walks"
            )
        net.commit(path)
        paths.append(path)
        logger.debug(
            "road %s -> goal: %d road tiles (walk %d)", dest.position, len(path) - 2, attempt
        )
    return net, paths
