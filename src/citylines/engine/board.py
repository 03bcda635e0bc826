# src/citylines/engine/board.py
# Live puzzle state: the player rotates tiles, the board re-validates after
# every turn using the current (not the solution) rotations.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..grid import Grid
from ..level import GeneratedLevel
from ..tiles import TileConfig, TilePosition
from .connectivity import is_solved

logger = logging.getLogger(__name__)


@dataclass
class CityBoard:
    level: GeneratedLevel
    grid: Grid
    moves: int = 0
    # lowest winning move count seen on this board
    best_moves: Optional[int] = None
    _start: Dict[TilePosition, int] = field(default_factory=dict)

    @classmethod
    def from_level(cls, level: GeneratedLevel) -> "CityBoard":
        grid = level.to_grid(solved=False)
        start = {t.position: t.rotation for t in grid.tiles()}
        return cls(level=level, grid=grid, _start=start)

    def tile(self, pos: TilePosition) -> Optional[TileConfig]:
        if not self.grid.in_bounds(pos):
            return None
        return self.grid.get(pos)

    def rotate(self, pos: TilePosition) -> bool:
        """Turn the tile at `pos` 90 degrees clockwise. False if nothing turned."""
        t = self.tile(pos)
        if t is None or not t.rotate():
            return False
        self.moves += 1
        if self.is_solved():
            logger.info("board solved in %d moves", self.moves)
            if self.best_moves is None or self.moves < self.best_moves:
                self.best_moves = self.moves
        return True

    def is_solved(self) -> bool:
        return is_solved(self.grid.tiles(), self.grid.rows, self.grid.cols)

    def unsolved_tiles(self) -> List[TileConfig]:
        return [t for t in self.grid.tiles() if t.rotatable and not t.is_solved]

    def reset(self) -> None:
        for t in self.grid.tiles():
            t.rotation = self._start[t.position]
        self.moves = 0

    def solve(self) -> None:
        for t in self.grid.tiles():
            t.rotation = t.solution_rotation
