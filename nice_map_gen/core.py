# nice_map_gen/core.py
"""
Generation pipeline: sketch image -> squares -> cave or room generation -> map image.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from PIL import Image

from . import config as cfg
from .cellular_automata import CellularAutomata
from .export import writer
from .room_growth import ConstrainedRoomGrowth, GrowthRoom
from .squareularize import squareularize_image
from .squares import SquareGrid
from .utils import colors as palette_colors
from .utils.colors import Palette
from .utils.seeds import derive_seed

log = logging.getLogger(__name__)


class CaveResult(NamedTuple):
    grid: SquareGrid
    generations_run: int


class RoomResult(NamedTuple):
    grid: SquareGrid
    rooms: list[GrowthRoom]
    starts_added: int


def sketch_background(conf: dict) -> tuple[int, int, int]:
    bg = palette_colors.normalize_rgb(conf.get("canvas", {}).get("background"))
    return bg or (255, 255, 255)


def new_canvas(conf: dict) -> Image.Image:
    """Blank sketch sized ``squares * pixel_scale`` on each axis."""
    canvas = cfg.merge_config(conf)["canvas"]
    width = canvas["squares_width"] * canvas["pixel_scale"]
    height = canvas["squares_height"] * canvas["pixel_scale"]
    return Image.new("RGB", (width, height), sketch_background(conf))


def load_sketch(path, background=(255, 255, 255)) -> Image.Image:
    """Open a sketch as RGB; transparent pixels are flattened onto ``background``."""
    with Image.open(path) as src:
        src.load()
        if src.mode in ("RGBA", "LA") or (src.mode == "P" and "transparency" in src.info):
            rgba = src.convert("RGBA")
            flat = Image.new("RGBA", rgba.size, tuple(background) + (255,))
            flat.alpha_composite(rgba)
            return flat.convert("RGB")
        return src.convert("RGB")


def squareularize_sketch(conf: dict, img: Image.Image, palette: Palette) -> SquareGrid:
    canvas = cfg.merge_config(conf)["canvas"]
    return squareularize_image(img, canvas["pixel_scale"], canvas["subpixel_scale"], palette)


def generate_cave(conf: dict, img: Image.Image) -> CaveResult:
    conf = cfg.merge_config(conf)
    cave = conf["cave"]
    grid = squareularize_sketch(conf, img, palette_colors.CAVE_PALETTE)
    ca = CellularAutomata(cave["neighborhood_size"], cave["neighborhood_threshold"]).with_grid(grid)
    done = ca.run_generations(cave["generations"])
    if done < cave["generations"]:
        log.warning("Only %d of %d cave generations ran", done, cave["generations"])
    log.info("Cave map: %d x %d squares after %d generation(s)", grid.cols, grid.rows, ca.generations_run)
    return CaveResult(ca.pop_grid(), ca.generations_run)


def generate_rooms(conf: dict, img: Image.Image) -> RoomResult:
    conf = cfg.merge_config(conf)
    rooms_conf = conf["rooms"]
    grid = squareularize_sketch(conf, img, palette_colors.ROOM_PALETTE)
    seed = conf.get("seed")
    crg = ConstrainedRoomGrowth(seed=None if seed is None else derive_seed(seed, "room_starts"))
    crg.set_grid(grid)
    added = 0
    if rooms_conf.get("add_random_starts", True):
        added = len(crg.add_random_room_starts(rooms_conf.get("room_count")))
    rooms = crg.grow_rooms_from_starts()
    return RoomResult(crg.pop_grid(), rooms, added)


def generate_from_config(conf: dict, sketch_path, mode: str, out_path=None) -> Path:
    """Run the cave or room pipeline on a sketch file and write the map image."""
    conf = cfg.merge_config(conf)
    exp = conf["export"]
    img = load_sketch(sketch_path, sketch_background(conf))
    if mode == "cave":
        grid = generate_cave(conf, img).grid
        default_name = exp.get("cave_png") or "cave.png"
    elif mode == "rooms":
        grid = generate_rooms(conf, img).grid
        default_name = exp.get("rooms_png") or "rooms.png"
    else:
        raise ValueError(f"Unknown generation mode {mode!r}; expected 'cave' or 'rooms'.")

    if out_path is None:
        out_path = Path(conf.get("output_dir", "output")) / default_name
        return writer.save_grid(grid, out_path, exp.get("format"))
    # an explicit path picks its format from its extension
    return writer.save_grid(grid, out_path)
