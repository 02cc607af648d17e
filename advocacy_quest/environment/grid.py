"""Static tile grid the player walks on.

The map is a rectangular matrix of floor and wall cells addressed as
``(x, y)`` with ``x`` the column and ``y`` the row. It never changes during a
session; movement and content validation only ever read it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Sequence, Tuple


class GridCell(IntEnum):
    """Cell kinds, numbered the way map rows are authored (0 floor, 1 wall)."""

    FLOOR = 0
    WALL = 1


MAP_WIDTH = 18
MAP_HEIGHT = 12

BASE_MAP: Tuple[Tuple[int, ...], ...] = (
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 0, 0, 0, 1, 0, 1, 0, 0, 1, 0, 0, 1, 0, 1),
    (1, 0, 0, 1, 0, 1, 0, 1, 0, 1, 0, 0, 1, 0, 1, 1, 0, 1),
    (1, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
    (1, 0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1),
    (1, 0, 1, 1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 1),
    (1, 0, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
)


@dataclass(frozen=True)
class TileGrid:
    """Immutable floor/wall map indexed as ``rows[y][x]``."""

    width: int
    height: int
    rows: Tuple[Tuple[GridCell, ...], ...]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "TileGrid":
        """Build a grid from authored 0/1 rows.

        Raises:
            ValueError: If the matrix is empty, ragged, or holds values other
                than 0 and 1.
        """
        if not rows or not rows[0]:
            raise ValueError("Grid must have at least one row and one column")
        width = len(rows[0])
        cells = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Grid row {y} has {len(row)} cells, expected {width}")
            try:
                cells.append(tuple(GridCell(value) for value in row))
            except ValueError as exc:
                raise ValueError(f"Grid row {y} contains an unknown cell value") from exc
        return cls(width=width, height=len(cells), rows=tuple(cells))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> GridCell | None:
        if not self.in_bounds(x, y):
            return None
        return self.rows[y][x]

    def is_walkable(self, x: int, y: int) -> bool:
        # Out-of-range coordinates are simply not walkable.
        return self.cell(x, y) is GridCell.FLOOR

    def clamp(self, x: int, y: int) -> Tuple[int, int]:
        return (
            max(0, min(self.width - 1, x)),
            max(0, min(self.height - 1, y)),
        )

    def iter_cells(self) -> Iterator[Tuple[int, int, GridCell]]:
        for y, row in enumerate(self.rows):
            for x, cell in enumerate(row):
                yield x, y, cell


def default_grid() -> TileGrid:
    """Return the 18x12 school map the game ships with."""
    return TileGrid.from_rows(BASE_MAP)
