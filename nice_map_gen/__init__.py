"""
Sketch-driven dungeon and cave map generation.

A sketch painted with a small semantic palette is squareularized into a
``SquareGrid``, then either smoothed into a cave with ``CellularAutomata`` or
grown into rooms with ``ConstrainedRoomGrowth``.
"""

from .cellular_automata import CA, CellularAutomata
from .errors import (
    MapGenError,
    NoGridError,
    NoImageError,
    NoRoomStartsError,
    NotEnoughEmptyCellsError,
    RoomGrowthError,
    SquareBoundsError,
    SquareularizationError,
    UnsupportedDepthError,
)
from .room_growth import CRG, ConstrainedRoomGrowth, GrowthRoom
from .squareularize import squareularize, squareularize_image
from .squares import Square, SquareGrid
from .utils.colors import CAVE_PALETTE, ROOM_PALETTE, CaveTile, Other, Palette, RoomTile

__version__ = "0.1.0"

__all__ = [
    "CA",
    "CRG",
    "CAVE_PALETTE",
    "ROOM_PALETTE",
    "CaveTile",
    "CellularAutomata",
    "ConstrainedRoomGrowth",
    "GrowthRoom",
    "MapGenError",
    "NoGridError",
    "NoImageError",
    "NoRoomStartsError",
    "NotEnoughEmptyCellsError",
    "Other",
    "Palette",
    "RoomGrowthError",
    "RoomTile",
    "Square",
    "SquareBoundsError",
    "SquareGrid",
    "SquareularizationError",
    "UnsupportedDepthError",
    "squareularize",
    "squareularize_image",
]
