from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .tiles import CLOCKWISE, Direction, TileConfig, TilePosition


@dataclass
class Grid:
    rows: int
    cols: int
    buf: List[Optional[TileConfig]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.buf:
            self.buf = [None] * (self.rows * self.cols)

    @classmethod
    def from_tiles(cls, rows: int, cols: int, tiles) -> "Grid":
        g = cls(rows, cols)
        for t in tiles:
            g.place(t)
        return g

    def idx(self, pos: TilePosition) -> int:
        return pos.row * self.cols + pos.col

    def in_bounds(self, pos: TilePosition) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def get(self, pos: TilePosition) -> Optional[TileConfig]:
        return self.buf[self.idx(pos)]

    def set(self, pos: TilePosition, tile: Optional[TileConfig]) -> None:
        self.buf[self.idx(pos)] = tile

    def place(self, tile: TileConfig) -> None:
        if not self.in_bounds(tile.position):
            raise IndexError(f"{tile.position} outside {self.rows}x{self.cols} grid")
        self.set(tile.position, tile)

    def is_empty(self, pos: TilePosition) -> bool:
        return self.get(pos) is None

    def positions(self) -> Iterator[TilePosition]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield TilePosition(r, c)

    def tiles(self) -> Iterator[TileConfig]:
        # Row-major, so callers drawing random numbers per tile stay deterministic.
        for t in self.buf:
            if t is not None:
                yield t

    def empty_positions(self) -> List[TilePosition]:
        return [p for p in self.positions() if self.get(p) is None]

    def neighbors(self, pos: TilePosition) -> Iterator[Tuple[Direction, TilePosition]]:
        for d in CLOCKWISE:
            n = pos.step(d)
            if self.in_bounds(n):
                yield d, n

    def as_matrix(self) -> List[List[Optional[TileConfig]]]:
        return [
            [self.buf[r * self.cols + c] for c in range(self.cols)]
            for r in range(self.rows)
        ]
