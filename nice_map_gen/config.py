# nice_map_gen/config.py
import copy
import json
from pathlib import Path

# Ranges offered by the sketch canvas controls.
SQUARES_RANGE = (3, 1000)
PIXEL_SCALE_RANGE = (1, 30)


def default_config() -> dict:
    return {
        "seed": 12345,
        "output_dir": "output",
        "canvas": {
            # sketch size in squares, each square pixel_scale pixels across
            "squares_width": 50,
            "squares_height": 50,
            "pixel_scale": 2,
            "subpixel_scale": 1,
            "background": [255, 255, 255],
        },
        "cave": {
            "neighborhood_size": 1,
            "neighborhood_threshold": 5,
            "generations": 3,
        },
        "rooms": {
            # None => random count scaled to the grid size
            "room_count": None,
            "add_random_starts": True,
        },
        "export": {
            "format": "png",
            "cave_png": "cave.png",
            "rooms_png": "rooms.png",
            "canvas_png": "canvas.png",
        },
    }


def _clamp(value, lo: int, hi: int | None = None) -> int:
    value = int(value)
    if value < lo:
        return lo
    if hi is not None and value > hi:
        return hi
    return value


def merge_config(conf: dict | None) -> dict:
    """Fill missing keys from the defaults and clamp numbers into range."""
    merged = default_config()
    for key, value in (conf or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(copy.deepcopy(value))
        else:
            merged[key] = copy.deepcopy(value)

    canvas = merged["canvas"]
    canvas["squares_width"] = _clamp(canvas["squares_width"], *SQUARES_RANGE)
    canvas["squares_height"] = _clamp(canvas["squares_height"], *SQUARES_RANGE)
    canvas["pixel_scale"] = _clamp(canvas["pixel_scale"], *PIXEL_SCALE_RANGE)
    canvas["subpixel_scale"] = _clamp(canvas["subpixel_scale"], 1)

    cave = merged["cave"]
    cave["neighborhood_size"] = _clamp(cave["neighborhood_size"], 1)
    cave["neighborhood_threshold"] = _clamp(cave["neighborhood_threshold"], 0)
    cave["generations"] = _clamp(cave["generations"], 0)

    rooms = merged["rooms"]
    if rooms.get("room_count") is not None:
        rooms["room_count"] = _clamp(rooms["room_count"], 0)
    return merged


def load_config(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return merge_config(json.load(f))


def save_config(conf: dict, path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(conf, f, indent=2)
