# nice_map_gen/export/writer.py
from pathlib import Path

from PIL import Image, ImageDraw

from ..squares import SquareGrid

# Formats offered by the Export menu, mapped to Pillow format names.
FORMATS = {
    "png": "PNG",
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "bmp": "BMP",
    "webp": "WEBP",
}


def render_grid(grid: SquareGrid) -> Image.Image:
    """Paint every square as one solid rectangle on an image of the grid's size."""
    img = Image.new("RGB", (grid.img_width, grid.img_height), (0, 0, 0))
    draw = ImageDraw.Draw(img)
    for square in grid:
        x2 = square.x + square.width - 1
        y2 = square.y + square.height - 1
        draw.rectangle([square.x, square.y, x2, y2], fill=tuple(square.color))
    return img


def save_grid(grid: SquareGrid, path, fmt: str | None = None) -> Path:
    """Render and save ``grid``; the file extension is forced to match the format."""
    path = Path(path)
    fmt = (fmt or path.suffix.lstrip(".") or "png").lower()
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported export format {fmt!r}; expected one of {sorted(set(FORMATS))}.")
    ext = "jpeg" if fmt == "jpg" else fmt
    path = path.with_suffix(f".{ext}")
    path.parent.mkdir(parents=True, exist_ok=True)
    render_grid(grid).save(path, format=FORMATS[fmt])
    return path
