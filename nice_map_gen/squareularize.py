"""
Squareularization: turn a painted sketch into a grid of single-color squares.

The sketch is cut into ``pixel_scale * subpixel_scale`` pixel squares, left
to right and top to bottom. Every square takes the color most of its pixels
vote for, after anti-aliased stroke edges are snapped back onto the active
palette so they don't split the vote.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

import numpy as np
from PIL import Image

from .errors import NoImageError, UnsupportedDepthError
from .squares import RGB, Square, SquareGrid
from .utils.colors import DEBUG_MAGENTA, STAIRS_COLOR, Palette

log = logging.getLogger(__name__)

# Largest mean per-channel difference (0-255) still snapped onto the palette.
SNAP_DISTANCE = 150
STAIRS_VOTE_MULTIPLIER = 500
DEBUG_VOTE_MULTIPLIER = 0
# Pixels snapped per numpy pass; bounds the pixels x palette x channels work array.
SNAP_BAND_PIXELS = 1 << 16


def squareularize(
    pixels,
    width: int,
    height: int,
    pixel_scale: int,
    subpixel_scale: int = 1,
    palette: Palette | Iterable[RGB] | None = None,
) -> SquareGrid:
    """Quantize a row-major RGB pixel buffer into a :class:`SquareGrid`.

    ``pixels`` is anything holding ``width * height * 3`` channel values:
    raw bytes, a flat sequence of ints, or a numpy array. ``palette`` is
    either a :class:`Palette` or an iterable of colors used as the snapping
    bias; ``None`` disables snapping.

    Raises ``NoImageError`` when there are no pixels and
    ``UnsupportedDepthError`` when the buffer is not 3 channels per pixel.
    """
    pixel_scale = int(pixel_scale)
    subpixel_scale = int(subpixel_scale)
    if pixel_scale < 1 or subpixel_scale < 1:
        raise ValueError(
            f"pixel_scale and subpixel_scale must be at least 1, got {pixel_scale} and {subpixel_scale}."
        )
    buf = _pixel_array(pixels, width, height)
    targets = _snap_targets(palette)
    snapped = snap_to_palette(buf, targets)

    side = pixel_scale * subpixel_scale
    squares: list[Square] = []
    for y0, h in cell_spans(height, side):
        for x0, w in cell_spans(width, side):
            block = snapped[y0:y0 + h, x0:x0 + w]
            squares.append(Square(x0, y0, w, h, vote_color(block)))

    grid = SquareGrid.from_squares(squares, width, height)
    log.debug(
        "Squareularized %dx%d image into %d rows x %d cols (side %d px)",
        width, height, grid.rows, grid.cols, side,
    )
    return grid


def squareularize_image(
    img: Image.Image | None,
    pixel_scale: int,
    subpixel_scale: int = 1,
    palette: Palette | Iterable[RGB] | None = None,
) -> SquareGrid:
    """Same as :func:`squareularize` for a Pillow image, which must be mode RGB."""
    if img is None:
        raise NoImageError("No image to squareularize.")
    if img.mode != "RGB":
        bands = len(img.getbands())
        raise UnsupportedDepthError(bands, f"Image mode {img.mode!r} has {bands} channel(s); need RGB.")
    width, height = img.size
    return squareularize(img.tobytes(), width, height, pixel_scale, subpixel_scale, palette)


def cell_spans(length: int, side: int) -> list[tuple[int, int]]:
    """(start, size) of every cell along one axis.

    The last cell is pulled back to stay inside the image, overlapping its
    neighbour instead of coming out undersized.
    """
    if length <= side:
        return [(0, length)]
    return [(min(start, length - side), side) for start in range(0, length, side)]


def snap_to_palette(buf: np.ndarray, targets: Sequence[RGB] | Mapping[RGB, RGB]) -> np.ndarray:
    """Replace near-palette pixels with their closest palette color.

    ``targets`` is either a sequence of palette colors or a mapping from every
    color pixels may snap onto to the color they become, so an alias such as
    an older floor grey turns into its canonical color. Distance is the mean
    absolute per-channel difference; the magenta debug color is never snapped.
    The image is worked through in bands of rows of about
    ``SNAP_BAND_PIXELS`` pixels each.
    """
    if not targets:
        return buf
    if not isinstance(targets, Mapping):
        targets = {tuple(color): tuple(color) for color in targets}
    pal = np.asarray(list(targets.keys()), dtype=np.int16).reshape(-1, 3)
    becomes = np.asarray(list(targets.values()), dtype=np.uint8).reshape(-1, 3)

    out = buf.copy()
    band = max(1, SNAP_BAND_PIXELS // max(1, buf.shape[1]))
    for top in range(0, buf.shape[0], band):
        rows = out[top:top + band]
        diff = np.abs(rows[:, :, None, :].astype(np.int16) - pal[None, None, :, :])
        # compare channel sums against 3 * limit to stay in integers
        dist = diff.sum(axis=3, dtype=np.int32)
        nearest = dist.argmin(axis=2)
        best = np.take_along_axis(dist, nearest[:, :, None], axis=2)[:, :, 0]
        magenta = np.all(rows == np.asarray(DEBUG_MAGENTA, dtype=np.uint8), axis=2)
        eligible = (best <= SNAP_DISTANCE * 3) & ~magenta
        rows[eligible] = becomes[nearest[eligible]]
    return out


def vote_color(block: np.ndarray) -> RGB:
    """Most voted color of a block; stairs count 500x and magenta never counts."""
    tally: dict[RGB, int] = {}
    for r, g, b in block.reshape(-1, 3).tolist():
        key = (r, g, b)
        tally[key] = tally.get(key, 0) + 1

    winner: RGB | None = None
    winner_votes = -1
    for color, count in tally.items():
        votes = count * _vote_multiplier(color)
        if votes > winner_votes:
            winner, winner_votes = color, votes
    if winner is None:
        raise NoImageError("Cannot vote on an empty block of pixels.")
    return winner


def _vote_multiplier(color: RGB) -> int:
    if color == STAIRS_COLOR:
        return STAIRS_VOTE_MULTIPLIER
    if color == DEBUG_MAGENTA:
        return DEBUG_VOTE_MULTIPLIER
    return 1


def _snap_targets(palette) -> dict[RGB, RGB]:
    if palette is None:
        return {}
    if isinstance(palette, Palette):
        return palette.snap_targets()
    colors = [tuple(int(c) for c in color[:3]) for color in palette]
    return {color: color for color in colors}


def _pixel_array(pixels, width: int, height: int) -> np.ndarray:
    if pixels is None:
        raise NoImageError("No pixel data given.")
    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise NoImageError(f"Image has no area ({width}x{height}).")

    if isinstance(pixels, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(pixels, dtype=np.uint8)
    else:
        flat = np.asarray(pixels).ravel()
        if flat.size and not np.issubdtype(flat.dtype, np.integer):
            raise ValueError(f"Pixel channel values must be integers, got {flat.dtype}.")
        if flat.size and (flat.min() < 0 or flat.max() > 255):
            raise ValueError("Pixel channel values must be within 0-255.")
        flat = flat.astype(np.uint8)
    if flat.size == 0:
        raise NoImageError("No pixel data given.")

    count = width * height
    if flat.size % count:
        raise UnsupportedDepthError(
            flat.size / count,
            f"{flat.size} channel values do not divide evenly over {width}x{height} pixels.",
        )
    depth = flat.size // count
    if depth != 3:
        raise UnsupportedDepthError(depth)
    return flat.reshape(height, width, 3)
