"""
Command line front end for sketch-based map generation.

Usage:
    python -m nice_map_gen canvas blank.png
    python -m nice_map_gen cave sketch.png cave.png --generations 4
    python -m nice_map_gen rooms sketch.png rooms.png --rooms 6 --seed 7
    python -m nice_map_gen stairs sketch.png
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from . import config as cfg
from . import core
from .errors import MapGenError
from .stairs import find_stairs
from .utils.colors import get_palette


def _apply_overrides(conf: dict, args: argparse.Namespace) -> dict:
    canvas = conf.setdefault("canvas", {})
    for key in ("pixel_scale", "subpixel_scale", "squares_width", "squares_height"):
        value = getattr(args, key, None)
        if value is not None:
            canvas[key] = value
    if getattr(args, "seed", None) is not None:
        conf["seed"] = args.seed

    cave = conf.setdefault("cave", {})
    for key in ("neighborhood_size", "neighborhood_threshold", "generations"):
        value = getattr(args, key, None)
        if value is not None:
            cave[key] = value

    rooms = conf.setdefault("rooms", {})
    if getattr(args, "rooms", None) is not None:
        rooms["room_count"] = args.rooms
    if getattr(args, "no_random_starts", False):
        rooms["add_random_starts"] = False
    return cfg.merge_config(conf)


def handle_canvas(conf: dict, args: argparse.Namespace) -> int:
    img = core.new_canvas(conf)
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    img.save(out)
    print(f"[nice_map_gen.canvas] {img.width}x{img.height} blank sketch -> {out}")
    return 0


def handle_generate(conf: dict, args: argparse.Namespace) -> int:
    out = core.generate_from_config(conf, args.sketch, args.command, args.output)
    print(f"[nice_map_gen.{args.command}] map saved -> {out}")
    return 0


def handle_stairs(conf: dict, args: argparse.Namespace) -> int:
    img = core.load_sketch(args.sketch, core.sketch_background(conf))
    grid = core.squareularize_sketch(conf, img, get_palette(args.palette))
    stairs = find_stairs(grid)
    if not stairs:
        print("[nice_map_gen.stairs] No level connections found.")
        return 0
    for loc in stairs:
        print(f"[nice_map_gen.stairs] {loc}")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nice-map-gen",
        description="Generate cave and room maps from hand-painted sketches.",
    )
    parser.add_argument("--config", type=str, help="Optional config JSON path.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details.")
    sub = parser.add_subparsers(dest="command")

    def common_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--pixel-scale", dest="pixel_scale", type=int, help="Pixels across one square.")
        p.add_argument("--subpixel-scale", dest="subpixel_scale", type=int, help="Extra multiplier on the square size.")
        p.add_argument("--seed", type=int, help="Master seed for random steps (room start placement).")

    canvas_parser = sub.add_parser("canvas", help="Write a blank sketch to paint on.")
    canvas_parser.add_argument("output", help="PNG path for the blank sketch.")
    canvas_parser.add_argument("--width", dest="squares_width", type=int, help="Sketch width in squares.")
    canvas_parser.add_argument("--height", dest="squares_height", type=int, help="Sketch height in squares.")
    common_args(canvas_parser)

    cave_parser = sub.add_parser("cave", help="Smooth a sketch into a cave with cellular automata.")
    cave_parser.add_argument("sketch", help="Sketch painted with the cave palette.")
    cave_parser.add_argument("output", nargs="?", help="Map image path (defaults to the config export name).")
    cave_parser.add_argument("--size", dest="neighborhood_size", type=int, help="Neighbourhood radius.")
    cave_parser.add_argument("--threshold", dest="neighborhood_threshold", type=int,
                             help="Wall neighbours needed to become wall.")
    cave_parser.add_argument("--generations", type=int, help="Number of generations to run.")
    common_args(cave_parser)

    rooms_parser = sub.add_parser("rooms", help="Grow rectangular rooms from room starts.")
    rooms_parser.add_argument("sketch", help="Sketch painted with the room palette.")
    rooms_parser.add_argument("output", nargs="?", help="Map image path (defaults to the config export name).")
    rooms_parser.add_argument("--rooms", type=int, help="Random room starts to add (default scales with size).")
    rooms_parser.add_argument("--no-random-starts", action="store_true",
                              help="Only grow the room starts painted on the sketch.")
    common_args(rooms_parser)

    stairs_parser = sub.add_parser("stairs", help="List the level connections in a sketch.")
    stairs_parser.add_argument("sketch", help="Sketch to scan.")
    stairs_parser.add_argument("--palette", choices=("cave", "room"), default="room",
                               help="Palette the sketch was painted with (defaults to %(default)s).")
    common_args(stairs_parser)

    return parser


HANDLERS = {
    "canvas": handle_canvas,
    "cave": handle_generate,
    "rooms": handle_generate,
    "stairs": handle_stairs,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    if not args.command:
        parser.print_help()
        return 1

    try:
        conf = cfg.load_config(args.config) if args.config else cfg.default_config()
        conf = _apply_overrides(conf, args)
        return HANDLERS[args.command](conf, args)
    except (MapGenError, NotImplementedError, ValueError) as exc:
        logging.error("%s failed: %s", args.command, exc)
        return 1
    except FileNotFoundError as exc:
        logging.error("File not found: %s", exc.filename or exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
