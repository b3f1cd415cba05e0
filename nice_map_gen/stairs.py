"""Level connections: the stairs squares linking one map level to another."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .squares import RGB, Square, SquareGrid
from .utils.colors import STAIRS_COLOR

# White is Empty on the room palette and Floor on the cave palette.
DEFAULT_REPLACEMENT: RGB = (255, 255, 255)


@dataclass(slots=True)
class StairLocation:
    row: int
    col: int
    square: Square

    def __str__(self) -> str:
        return f"Stairs at row {self.row}, col {self.col} (x:{self.square.x}, y:{self.square.y})"


def find_stairs(grid: SquareGrid) -> list[StairLocation]:
    """Every stairs square in the grid, row by row."""
    found: list[StairLocation] = []
    for row, col in grid.positions():
        square = grid.get(row, col)
        if square is not None and square.color == STAIRS_COLOR:
            found.append(StairLocation(row, col, square))
    return found


def remove_stairs(
    grid: SquareGrid,
    locations: Iterable[StairLocation | tuple[int, int]],
    replacement: RGB = DEFAULT_REPLACEMENT,
) -> list[Square]:
    """Recolor the given stairs squares and return the squares that changed.

    Locations that are off the grid or no longer hold stairs are skipped.
    """
    changed: list[Square] = []
    for loc in locations:
        row, col = (loc.row, loc.col) if isinstance(loc, StairLocation) else loc
        square = grid.get(row, col)
        if square is None or square.color != STAIRS_COLOR:
            continue
        square.color = tuple(replacement)
        changed.append(square)
    return changed
