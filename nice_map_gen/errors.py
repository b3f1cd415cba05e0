"""Exception types raised by the map generation core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .squares import Square


class MapGenError(Exception):
    """Base class for every failure the core reports."""


class SquareBoundsError(MapGenError):
    """A square reaches past the image it claims to belong to."""

    def __init__(self, square: "Square", message: str):
        super().__init__(message)
        self.square = square
        self.message = message


class SquareularizationError(MapGenError):
    """Pixels could not be turned into a grid of squares."""


class NoImageError(SquareularizationError):
    pass


class UnsupportedDepthError(SquareularizationError):
    def __init__(self, depth, message: str | None = None):
        super().__init__(message or f"Expected 3 color channels per pixel, got {depth}.")
        self.depth = depth


class RoomGrowthError(MapGenError):
    """Constrained room growth could not run; the grid was left untouched."""


class NoGridError(RoomGrowthError):
    pass


class NotEnoughEmptyCellsError(RoomGrowthError):
    def __init__(self, requested: int, available: int):
        super().__init__(
            f"Asked for {requested} room start(s) but only {available} empty square(s) are available."
        )
        self.requested = requested
        self.available = available


class NoRoomStartsError(RoomGrowthError):
    pass
