"""
Cellular automata cave smoothing.

Every Wall/Floor square looks at the squares around it and becomes Wall when
enough of them are Wall, otherwise Floor. Squares near the edge of the grid
get extra Wall votes for each side their neighbourhood runs off, so caves
stay closed at the map border.
"""

from __future__ import annotations

import logging

from .squares import SquareGrid
from .utils.colors import CAVE_PALETTE, CaveTile, Tile

log = logging.getLogger(__name__)

# Flat bonus added to the count for every side the neighbourhood is clamped on.
EDGE_BONUS = 3


class CellularAutomata:
    def __init__(self, neighborhood_size: int = 1, neighborhood_threshold: int = 5):
        if int(neighborhood_size) < 1:
            raise ValueError(f"neighborhood_size must be at least 1, got {neighborhood_size}.")
        self.neighborhood_size = int(neighborhood_size)
        self.neighborhood_threshold = int(neighborhood_threshold)
        self._generations_run = 0
        self._grid: SquareGrid | None = None

    @property
    def generations_run(self) -> int:
        return self._generations_run

    @property
    def grid(self) -> SquareGrid | None:
        return self._grid

    def set_grid(self, grid: SquareGrid) -> None:
        self._grid = grid

    def with_grid(self, grid: SquareGrid) -> "CellularAutomata":
        self._grid = grid
        return self

    def pop_grid(self) -> SquareGrid | None:
        """Hand the grid back to the caller and forget it."""
        grid, self._grid = self._grid, None
        return grid

    def neighbor_count(self, row: int, col: int, target: Tile = CaveTile.WALL) -> int | None:
        """Count squares classified ``target`` around (row, col).

        Returns None when no grid is set. Each side of the neighbourhood that
        runs past the grid edge is clamped and adds ``EDGE_BONUS``.
        """
        grid = self._grid
        if grid is None:
            return None
        size = self.neighborhood_size
        count = 0

        top = row - size
        if top < 0:
            top = 0
            count += EDGE_BONUS
        bottom = row + size
        if bottom > grid.rows - 1:
            bottom = grid.rows - 1
            count += EDGE_BONUS
        left = col - size
        if left < 0:
            left = 0
            count += EDGE_BONUS
        right = col + size
        if right > grid.cols - 1:
            right = grid.cols - 1
            count += EDGE_BONUS

        for r in range(top, bottom + 1):
            for c in range(left, right + 1):
                if r == row and c == col:
                    continue
                square = grid.get(r, c)
                if square is None:
                    log.warning("Skipping square (%d, %d) outside the grid while counting neighbours", r, c)
                    continue
                if CAVE_PALETTE.classify(square.color) == target:
                    count += 1
        return count

    def run_generation(self) -> bool:
        """Run one generation over the current grid.

        Every count is taken before any square changes, so the result does not
        depend on iteration order. Returns False, without touching the grid,
        when there is no grid or a count could not be made.
        """
        grid = self._grid
        if grid is None:
            log.warning("No grid set; cannot run a cellular automata generation")
            return False

        updates = []
        for row, col in grid.positions():
            square = grid.get(row, col)
            if square is None:
                log.warning("Square (%d, %d) missing from the grid; skipping", row, col)
                continue
            tile = CAVE_PALETTE.classify(square.color)
            if tile not in (CaveTile.WALL, CaveTile.FLOOR):
                continue
            walls = self.neighbor_count(row, col, CaveTile.WALL)
            if walls is None:
                return False
            updates.append((square, CaveTile.WALL if walls >= self.neighborhood_threshold else CaveTile.FLOOR))

        for square, tile in updates:
            square.color = CAVE_PALETTE.color_of(tile)
        self._generations_run += 1
        log.debug("Finished cellular automata generation %d", self._generations_run)
        return True

    def run_generations(self, count: int) -> int:
        """Run up to ``count`` generations, stopping at the first failure."""
        done = 0
        for _ in range(max(0, int(count))):
            if not self.run_generation():
                break
            done += 1
        return done


CA = CellularAutomata
