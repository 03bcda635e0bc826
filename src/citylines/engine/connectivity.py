# src/citylines/engine/connectivity.py
# Connection graph over a tile grid and reachability checks.
#
# A tile links to a 4-neighbour when both have an opening facing each other
# and their road tiers accept each other. Graph nodes are TilePositions so the
# same graph works for live (scrambled) and solved grids.

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from ..tiles import (
    CLOCKWISE, Direction, TileConfig, TileKind, TilePosition, opposite, tiers_compatible,
)

logger = logging.getLogger(__name__)

Graph = Dict[TilePosition, List[TilePosition]]
Matrix = Sequence[Sequence[Optional[TileConfig]]]


@dataclass
class ConnectionResult:
    connected: bool
    reason: Optional[str] = None


@dataclass
class PathResult:
    exists: bool
    path: List[TilePosition] = field(default_factory=list)
    length: Optional[int] = None


@dataclass
class DestinationCheck:
    all_connected: bool
    failures: List[TileConfig] = field(default_factory=list)


@dataclass
class OrphanCheck:
    all_connected: bool
    orphans: List[TileConfig] = field(default_factory=list)


def tiles_connect(a: TileConfig, b: TileConfig, direction: Direction) -> ConnectionResult:
    """Does `a` link to `b`, which sits on its `direction` side?"""
    back = opposite(direction)
    if direction not in a.openings or back not in b.openings:
        return ConnectionResult(
            False,
            f"directions don't match: {a.position} {direction.value} vs {b.position} {back.value}",
        )
    if not tiers_compatible(a.tier, b.tier):
        return ConnectionResult(
            False, f"road types incompatible: {a.tier.value} -> {b.tier.value}"
        )
    return ConnectionResult(True)


def build_connection_graph(grid: Matrix) -> Graph:
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    graph: Graph = {}
    for r in range(rows):
        for c in range(cols):
            tile = grid[r][c]
            if tile is None:
                continue
            linked: List[TilePosition] = []
            for d in CLOCKWISE:
                n = tile.position.step(d)
                if not (0 <= n.row < rows and 0 <= n.col < cols):
                    continue
                other = grid[n.row][n.col]
                if other is None:
                    continue
                if tiles_connect(tile, other, d).connected:
                    linked.append(n)
            graph[tile.position] = linked
    return graph


def find_path(start: TilePosition, end: TilePosition, graph: Graph) -> PathResult:
    """Breadth-first search; the first path found is a shortest one."""
    if start == end:
        return PathResult(True, [start], 0)

    parent: Dict[TilePosition, Optional[TilePosition]] = {start: None}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        for n in graph.get(cur, ()):
            if n in parent:
                continue
            parent[n] = cur
            if n == end:
                path = [n]
                while parent[path[-1]] is not None:
                    path.append(parent[path[-1]])
                path.reverse()
                return PathResult(True, path, len(path) - 1)
            queue.append(n)
    return PathResult(False)


def validate_destinations_connect_to_goal(
    destinations: Sequence[TileConfig],
    goals: Sequence[TileConfig],
    graph: Graph,
) -> DestinationCheck:
    if not destinations:
        return DestinationCheck(True)
    if not goals:
        logger.warning("no goal node on the board; no destination can connect")
        return DestinationCheck(False, list(destinations))

    failures = [
        d for d in destinations
        if not any(find_path(d.position, g.position, graph).exists for g in goals)
    ]
    return DestinationCheck(not failures, failures)


def validate_all_tiles_on_some_path(
    tiles: Iterable[TileConfig],
    destinations: Sequence[TileConfig],
    goals: Sequence[TileConfig],
    graph: Graph,
) -> OrphanCheck:
    anchors = {t.position for t in destinations} | {t.position for t in goals}

    covered = set()
    for d in destinations:
        for g in goals:
            result = find_path(d.position, g.position, graph)
            if result.exists:
                covered.update(result.path)

    orphans = [
        t for t in tiles
        if t.position not in anchors and t.position not in covered
    ]
    return OrphanCheck(not orphans, orphans)


def is_solved(tiles: Iterable[TileConfig], rows: int, cols: int) -> bool:
    """Every destination reaches a goal and no road tile dangles."""
    matrix: List[List[Optional[TileConfig]]] = [[None] * cols for _ in range(rows)]
    pieces = list(tiles)
    for t in pieces:
        matrix[t.row][t.col] = t
    graph = build_connection_graph(matrix)

    destinations = [t for t in pieces if t.kind is TileKind.LANDMARK]
    goals = [t for t in pieces if t.kind is TileKind.TURNPIKE]
    roads = [t for t in pieces if t.is_road]

    if not validate_destinations_connect_to_goal(destinations, goals, graph).all_connected:
        return False
    return validate_all_tiles_on_some_path(roads, destinations, goals, graph).all_connected


def format_graph(graph: Graph, grid: Optional[Matrix] = None) -> str:
    lines = ["Connection graph:"]
    for pos, linked in graph.items():
        tier = ""
        if grid is not None and grid[pos.row][pos.col] is not None:
            tier = f" {grid[pos.row][pos.col].tier.value}"
        targets = ", ".join(f"({n.row},{n.col})" for n in linked)
        lines.append(f"  ({pos.row},{pos.col}){tier} -> [{targets}]")
    return "\n".join(lines)


def format_path(result: PathResult) -> str:
    if not result.exists:
        return "no path found"
    steps = " -> ".join(f"({p.row},{p.col})" for p in result.path)
    return f"path found (length {result.length}): {steps}"
