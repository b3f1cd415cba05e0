"""
Squares and square grids.

A ``Square`` is one axis-aligned block of pixels taken from a sketch image,
tagged with a single color. A ``SquareGrid`` holds every square of one image
together with the image size, so there is always a record of the resolution a
classification was taken at even while square colors keep changing.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .errors import SquareBoundsError

RGB = tuple[int, int, int]

DEFAULT_SQUARE_COLOR: RGB = (0, 255, 255)


class Square:
    """Block of pixels whose top-left pixel is (x, y) in the source image.

    Position and size are fixed once created; only ``color`` may change.
    """

    __slots__ = ("_x", "_y", "_width", "_height", "color")

    def __init__(self, x: int, y: int, width: int, height: int, color: RGB = DEFAULT_SQUARE_COLOR):
        if x < 0 or y < 0:
            raise ValueError(f"Square origin must be non-negative, got ({x}, {y}).")
        if width <= 0 or height <= 0:
            raise ValueError(f"Square size must be positive, got {width}x{height}.")
        self._x = int(x)
        self._y = int(y)
        self._width = int(width)
        self._height = int(height)
        self.color = tuple(color)

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def with_color(self, color: RGB) -> "Square":
        """Set the color and return self, for building squares inline."""
        self.color = tuple(color)
        return self

    def set_color(self, color: RGB) -> None:
        self.color = tuple(color)

    def copy(self) -> "Square":
        return Square(self._x, self._y, self._width, self._height, self.color)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Square):
            return NotImplemented
        return (
            self._x == other._x
            and self._y == other._y
            and self._width == other._width
            and self._height == other._height
            and self.color == other.color
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Square(x={self._x}, y={self._y}, width={self._width}, "
            f"height={self._height}, color={self.color})"
        )


class SquareGrid:
    """All the squares of one image, addressed by (row, col).

    Build one with :meth:`from_squares`; the image dimensions and the row and
    column counts are fixed from then on.
    """

    __slots__ = ("_squares", "_img_width", "_img_height", "_rows", "_cols")

    def __init__(self, squares: list[Square], img_width: int, img_height: int, rows: int, cols: int):
        self._squares = squares
        self._img_width = img_width
        self._img_height = img_height
        self._rows = rows
        self._cols = cols

    @classmethod
    def from_squares(cls, squares: Iterable[Square], img_width: int, img_height: int) -> "SquareGrid":
        """Validate ``squares`` against the image size and wrap them in a grid.

        Raises ``SquareBoundsError`` for the first square that reaches past the
        image. Overlapping squares and uncovered pixels are not checked; that
        is up to the caller.
        """
        squares = list(squares)
        xs: set[int] = set()
        ys: set[int] = set()
        for square in squares:
            xs.add(square.x)
            ys.add(square.y)
            reach_x = square.x + square.width
            reach_y = square.y + square.height
            if reach_x > img_width or reach_y > img_height:
                complaint = (
                    f"Square with x:{square.x}, y:{square.y}, w:{square.width}, h:{square.height} "
                    f"has invalid bounds.\n"
                    f"Furthest x,y reach of square is ({reach_x},{reach_y}), while image has "
                    f"width of {img_width} and height of {img_height} "
                    f"(overflow of {max(0, reach_x - img_width)} by {max(0, reach_y - img_height)}).\n"
                    f"The color of this square is {square.color}."
                )
                raise SquareBoundsError(square.copy(), complaint)
        return cls(squares, int(img_width), int(img_height), len(ys), len(xs))

    @property
    def img_width(self) -> int:
        """Width of the image the squares were taken from."""
        return self._img_width

    @property
    def img_height(self) -> int:
        """Height of the image the squares were taken from."""
        return self._img_height

    @property
    def rows(self) -> int:
        """Number of distinct y origins."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of distinct x origins."""
        return self._cols

    def index_of(self, row: int, col: int) -> int | None:
        if row < 0 or col < 0 or row >= self._rows or col >= self._cols:
            return None
        index = row * self._cols + col
        if index >= len(self._squares):
            return None
        return index

    def get(self, row: int, col: int) -> Square | None:
        """Square at (row, col), or None when the address is off the grid."""
        index = self.index_of(row, col)
        if index is None:
            return None
        return self._squares[index]

    # Squares are shared references, so mutable access is the same lookup.
    get_mut = get

    def iter(self) -> Iterator[Square]:
        return iter(self._squares)

    iter_mut = iter

    def positions(self) -> Iterator[tuple[int, int]]:
        for row in range(self._rows):
            for col in range(self._cols):
                yield row, col

    def copy(self) -> "SquareGrid":
        return SquareGrid(
            [sq.copy() for sq in self._squares],
            self._img_width,
            self._img_height,
            self._rows,
            self._cols,
        )

    def colors(self) -> list[RGB]:
        return [sq.color for sq in self._squares]

    def __iter__(self) -> Iterator[Square]:
        return iter(self._squares)

    def __len__(self) -> int:
        return len(self._squares)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SquareGrid):
            return NotImplemented
        return (
            self._img_width == other._img_width
            and self._img_height == other._img_height
            and self._squares == other._squares
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"SquareGrid(rows={self._rows}, cols={self._cols}, "
            f"img={self._img_width}x{self._img_height}, squares={len(self._squares)})"
        )
