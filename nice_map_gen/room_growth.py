"""
Constrained room growth.

Room starts (single red squares) are grown into rectangles all at once. In
every round each growing room claims the ring of squares just outside its
rectangle. A room whose ring runs into another room's claim, or into another
room, stops growing for good and the squares in between are left as the wall
between them. Rooms that can still move take their whole ring; a room whose
ring adds nothing (it fills the grid) stops as well.

Once nothing grows, room interiors become Floor and the ring around each room
becomes Wall, leaving doors, stairs and already painted floors alone.

Typical usage::

    crg = ConstrainedRoomGrowth(seed=7).with_grid(grid)
    crg.add_random_room_starts(4)
    crg.grow_rooms_from_starts()
    grid = crg.pop_grid()
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator

from .errors import NoGridError, NoRoomStartsError, NotEnoughEmptyCellsError
from .squares import SquareGrid
from .utils.colors import ROOM_PALETTE, Other, RoomTile
from .utils.seeds import make_rng

log = logging.getLogger(__name__)

Pos = tuple[int, int]

_NEIGHBOURHOOD = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1)]


@dataclass(slots=True)
class GrowthRoom:
    """Rectangle of squares grown from one room start, bounds inclusive."""
    id: int
    top: int
    left: int
    bottom: int
    right: int
    allowed_to_grow: bool = True

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        return self.top, self.left, self.bottom, self.right

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, row: int, col: int) -> bool:
        return self.top <= row <= self.bottom and self.left <= col <= self.right

    def cells(self) -> Iterator[Pos]:
        for row in range(self.top, self.bottom + 1):
            for col in range(self.left, self.right + 1):
                yield row, col

    def expanded(self, rows: int, cols: int) -> tuple[int, int, int, int]:
        """Bounds grown by one square on every side, clamped to the grid."""
        return (
            max(0, self.top - 1),
            max(0, self.left - 1),
            min(rows - 1, self.bottom + 1),
            min(cols - 1, self.right + 1),
        )

    def border_cells(self, rows: int, cols: int) -> list[Pos]:
        """Squares touching the rectangle from outside, corners included."""
        top, left, bottom, right = self.expanded(rows, cols)
        return [
            (row, col)
            for row in range(top, bottom + 1)
            for col in range(left, right + 1)
            if not self.contains(row, col)
        ]

    def overlaps(self, other: "GrowthRoom") -> bool:
        return not (
            self.right < other.left
            or other.right < self.left
            or self.bottom < other.top
            or other.bottom < self.top
        )


class ConstrainedRoomGrowth:
    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self._grid: SquareGrid | None = None
        self._rng = rng if rng is not None else make_rng(seed)
        self.rooms: list[GrowthRoom] = []
        self.rounds_run = 0

    @property
    def grid(self) -> SquareGrid | None:
        return self._grid

    def set_grid(self, grid: SquareGrid) -> None:
        self._grid = grid

    def with_grid(self, grid: SquareGrid) -> "ConstrainedRoomGrowth":
        self._grid = grid
        return self

    def pop_grid(self) -> SquareGrid | None:
        grid, self._grid = self._grid, None
        return grid

    def _require_grid(self) -> SquareGrid:
        if self._grid is None:
            raise NoGridError("No grid set for constrained room growth.")
        return self._grid

    def add_random_room_starts(self, count: int | None = None) -> list[Pos]:
        """Turn ``count`` random Empty squares into room starts.

        Without a count, picks one between (rows + cols) / 8 and
        (rows + cols) / 4. Raises ``NotEnoughEmptyCellsError`` and leaves the
        grid alone when there are fewer Empty squares than asked for.
        Returns the (row, col) of each new start.
        """
        grid = self._require_grid()
        if count is None:
            span = grid.rows + grid.cols
            low = max(1, span // 8)
            high = max(low, span // 4)
            count = self._rng.randint(low, high)
        count = int(count)
        if count < 0:
            raise ValueError(f"Room start count cannot be negative, got {count}.")

        empties = [
            (row, col)
            for row, col in grid.positions()
            if ROOM_PALETTE.classify(grid.get(row, col).color) is RoomTile.EMPTY
        ]
        if len(empties) < count:
            raise NotEnoughEmptyCellsError(count, len(empties))

        chosen = self._rng.sample(empties, count)
        start_color = ROOM_PALETTE.color_of(RoomTile.ROOM_START)
        for row, col in chosen:
            grid.get(row, col).color = start_color
        log.info("Placed %d room start(s) among %d empty square(s)", count, len(empties))
        return chosen

    def grow_rooms_from_starts(self) -> list[GrowthRoom]:
        """Grow every room start into a rectangle and paint floors and walls.

        Works on a copy of the grid, which replaces the engine's grid only
        once everything succeeded. Returns the grown rooms.
        """
        grid = self._require_grid()
        work = grid.copy()
        rows, cols = work.rows, work.cols

        starts = [
            (row, col)
            for row, col in work.positions()
            if ROOM_PALETTE.classify(work.get(row, col).color) is RoomTile.ROOM_START
        ]
        if not starts:
            raise NoRoomStartsError("No room starts to grow rooms from.")

        rooms = [GrowthRoom(i, row, col, row, col) for i, (row, col) in enumerate(starts)]
        rounds = 0
        while any(room.allowed_to_grow for room in rooms):
            rounds += 1
            self._grow_round(rooms, rows, cols)

        self._paint_rooms(work, rooms)
        self._grid = work
        self.rooms = rooms
        self.rounds_run = rounds
        log.info("Grew %d room(s) in %d round(s)", len(rooms), rounds)
        return rooms

    def _grow_round(self, rooms: list[GrowthRoom], rows: int, cols: int) -> None:
        growing = [room for room in rooms if room.allowed_to_grow]

        claims: dict[Pos, set[int]] = {}
        strips: dict[int, list[Pos]] = {}
        for room in growing:
            strip = room.border_cells(rows, cols)
            strips[room.id] = strip
            for pos in strip:
                claims.setdefault(pos, set()).add(room.id)

        owners: dict[Pos, int] = {}
        for room in rooms:
            for pos in room.cells():
                owners[pos] = room.id

        # every decision below reads the state from the start of the round
        for room in growing:
            strip = strips[room.id]
            if not strip or _is_contested(room.id, strip, claims, owners):
                room.allowed_to_grow = False
                continue
            new_bounds = (
                min(room.top, min(r for r, _ in strip)),
                min(room.left, min(c for _, c in strip)),
                max(room.bottom, max(r for r, _ in strip)),
                max(room.right, max(c for _, c in strip)),
            )
            if new_bounds == room.bounds:
                room.allowed_to_grow = False
                continue
            room.top, room.left, room.bottom, room.right = new_bounds

    @staticmethod
    def _paint_rooms(work: SquareGrid, rooms: list[GrowthRoom]) -> None:
        floor = ROOM_PALETTE.color_of(RoomTile.FLOOR)
        wall = ROOM_PALETTE.color_of(RoomTile.WALL)
        rows, cols = work.rows, work.cols

        for room in rooms:
            for row, col in room.cells():
                square = work.get(row, col)
                tile = ROOM_PALETTE.classify(square.color)
                if tile in (RoomTile.EMPTY, RoomTile.ROOM_START) or isinstance(tile, Other):
                    square.color = floor

        for room in rooms:
            for row, col in room.border_cells(rows, cols):
                square = work.get(row, col)
                tile = ROOM_PALETTE.classify(square.color)
                if tile is RoomTile.EMPTY or isinstance(tile, Other):
                    square.color = wall

    def grow_rooms_l_growth(self) -> None:
        """Grow grown rooms further into L shapes."""
        raise NotImplementedError("L-shaped room growth is not implemented yet.")

    def calculate_connectivity(self) -> int:
        """Minimum number of rooms one must pass through to reach any point."""
        raise NotImplementedError("Connectivity calculation is not implemented yet.")

    def enforce_connectivity(self, min_connectivity: int) -> None:
        """Add or remove doors until connectivity is at least ``min_connectivity``."""
        raise NotImplementedError("Connectivity enforcement is not implemented yet.")


def _is_contested(room_id: int, strip: list[Pos], claims: dict[Pos, set[int]], owners: dict[Pos, int]) -> bool:
    """True when a claimed square is shared with, or touches, another room's claim or rectangle."""
    for row, col in strip:
        for dr, dc in _NEIGHBOURHOOD:
            pos = (row + dr, col + dc)
            claimants = claims.get(pos)
            if claimants and (len(claimants) > 1 or room_id not in claimants):
                return True
            owner = owners.get(pos)
            if owner is not None and owner != room_id:
                return True
    return False


CRG = ConstrainedRoomGrowth
