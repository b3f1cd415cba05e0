"""Palette, color and seed helpers shared by the generators."""

from .colors import (
    CAVE_PALETTE,
    DEBUG_MAGENTA,
    ROOM_PALETTE,
    STAIRS_COLOR,
    CaveTile,
    Other,
    Palette,
    RoomTile,
    get_palette,
)

__all__ = [
    "CAVE_PALETTE",
    "DEBUG_MAGENTA",
    "ROOM_PALETTE",
    "STAIRS_COLOR",
    "CaveTile",
    "Other",
    "Palette",
    "RoomTile",
    "get_palette",
]
