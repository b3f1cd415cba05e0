# nice_map_gen/utils/colors.py

"""
Semantic sketch palettes, one per generation algorithm.

Each palette is a closed set of tiles bound to one canonical color. Anything
else classifies as ``Other`` and keeps its original color.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Union

RGB = tuple[int, int, int]

# ---- Reserved colours ----
# Stairs      | 0 255 0      (shared by both palettes, heavily weighted when quantizing)
# Debug       | 255 0 255    (never wins a square, never snapped onto the palette)

STAIRS_COLOR: RGB = (0, 255, 0)
DEBUG_MAGENTA: RGB = (255, 0, 255)

# ---- Cave Palette ----
# Wall   | 0 0 0
# Floor  | 255 255 255
# Stairs | 0 255 0


class CaveTile(Enum):
    WALL = (0, 0, 0)
    FLOOR = (255, 255, 255)
    STAIRS = STAIRS_COLOR


# ---- Room Palette ----
# Wall       | 0 0 0
# Empty      | 255 255 255
# Floor      | 140 140 140   (older sketches: 230 230 230)
# Room Start | 255 0 0
# Door       | 0 0 255
# Stairs     | 0 255 0


class RoomTile(Enum):
    WALL = (0, 0, 0)
    EMPTY = (255, 255, 255)
    FLOOR = (140, 140, 140)
    ROOM_START = (255, 0, 0)
    DOOR = (0, 0, 255)
    STAIRS = STAIRS_COLOR


LEGACY_ROOM_FLOOR: RGB = (230, 230, 230)


@dataclass(frozen=True)
class Other:
    """Catch-all classification carrying the unrecognised color."""
    color: RGB


Tile = Union[Enum, Other]


@dataclass(frozen=True)
class Palette:
    name: str
    tiles: type[Enum]
    aliases: Mapping[RGB, Enum] = field(default_factory=dict)

    def classify(self, color) -> Tile:
        rgb = tuple(color[:3])
        try:
            return self.tiles(rgb)
        except ValueError:
            pass
        alias = self.aliases.get(rgb)
        if alias is not None:
            return alias
        return Other(rgb)

    def color_of(self, tile: Tile) -> RGB:
        if isinstance(tile, Other):
            return tile.color
        return tile.value

    def preferred_colors(self) -> tuple[RGB, ...]:
        """Canonical colors in declaration order (the quantizer's bias set)."""
        return tuple(member.value for member in self.tiles)

    def snap_targets(self) -> dict[RGB, RGB]:
        """Colors the quantizer snaps onto, each mapped to the color it becomes.

        Canonical colors map to themselves and come first; aliases map to
        their tile's canonical color.
        """
        targets = {color: color for color in self.preferred_colors()}
        for alias, tile in self.aliases.items():
            targets.setdefault(tuple(alias), tile.value)
        return targets

    def is_canonical(self, color) -> bool:
        return not isinstance(self.classify(color), Other)


CAVE_PALETTE = Palette("cave", CaveTile)
ROOM_PALETTE = Palette("room", RoomTile, aliases={LEGACY_ROOM_FLOOR: RoomTile.FLOOR})

PALETTES = {
    CAVE_PALETTE.name: CAVE_PALETTE,
    ROOM_PALETTE.name: ROOM_PALETTE,
}


def get_palette(name: str) -> Palette:
    try:
        return PALETTES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown palette {name!r}; expected one of {sorted(PALETTES)}.") from None


def normalize_rgb(value) -> RGB | None:
    """Accept "r,g,b", "r g b", "#rrggbb" or a sequence; clamp to 0-255."""
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("#"):
            hexstr = text[1:]
            if len(hexstr) == 3:
                hexstr = "".join(ch * 2 for ch in hexstr)
            if len(hexstr) != 6:
                return None
            try:
                return int(hexstr[0:2], 16), int(hexstr[2:4], 16), int(hexstr[4:6], 16)
            except ValueError:
                return None
        parts = re.split(r"[,\s]+", text)
    else:
        try:
            parts = list(value)
        except TypeError:
            return None
    if len(parts) < 3:
        return None
    try:
        r = int(parts[0])
        g = int(parts[1])
        b = int(parts[2])
    except (TypeError, ValueError):
        return None
    return (
        max(0, min(255, r)),
        max(0, min(255, g)),
        max(0, min(255, b)),
    )


def rgb_to_hex(rgb) -> str:
    r, g, b = tuple(rgb)[:3]
    return f"#{r:02x}{g:02x}{b:02x}"
