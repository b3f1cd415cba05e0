import pytest

from nice_map_gen.errors import SquareBoundsError
from nice_map_gen.squares import DEFAULT_SQUARE_COLOR, Square, SquareGrid

from map_test_utils import BLACK, WHITE, grid_from_rows


def test_square_defaults_and_fixed_geometry():
    sq = Square(2, 3, 4, 5)
    assert (sq.x, sq.y, sq.width, sq.height) == (2, 3, 4, 5)
    assert sq.color == DEFAULT_SQUARE_COLOR
    with pytest.raises(AttributeError):
        sq.x = 7
    assert sq.with_color(BLACK) is sq
    assert sq.color == BLACK


def test_square_rejects_empty_size():
    with pytest.raises(ValueError):
        Square(0, 0, 0, 2)


def test_from_squares_counts_rows_and_cols():
    squares = [Square(x, y, 2, 2) for y in (0, 2) for x in (0, 2, 4)]
    grid = SquareGrid.from_squares(squares, 6, 4)
    assert grid.rows == 2
    assert grid.cols == 3
    assert grid.img_width == 6
    assert grid.img_height == 4
    assert len(grid) == 6


def test_from_squares_reports_first_out_of_bounds_square():
    squares = [Square(0, 0, 2, 2), Square(2, 0, 3, 2), Square(4, 0, 9, 9)]
    with pytest.raises(SquareBoundsError) as info:
        SquareGrid.from_squares(squares, 4, 2)
    err = info.value
    assert err.square == squares[1]
    assert err.square is not squares[1]
    assert "(5,2)" in err.message
    assert "width of 4" in err.message


def test_from_squares_accepts_overlap_and_gaps():
    squares = [Square(0, 0, 3, 3), Square(1, 0, 3, 3)]
    grid = SquareGrid.from_squares(squares, 10, 10)
    assert grid.cols == 2
    assert grid.rows == 1


def test_get_is_row_major_and_bounds_checked():
    grid = grid_from_rows([[BLACK, WHITE, BLACK], [WHITE, WHITE, BLACK]])
    assert grid.get(0, 1).color == WHITE
    assert grid.get(1, 0).color == WHITE
    assert grid.get(1, 2).color == BLACK
    assert grid.get(2, 0) is None
    assert grid.get(0, 3) is None
    assert grid.get(-1, 0) is None
    grid.get_mut(1, 2).color = WHITE
    assert grid.get(1, 2).color == WHITE


def test_copy_is_independent():
    grid = grid_from_rows([[BLACK, WHITE]])
    clone = grid.copy()
    assert clone == grid
    clone.get(0, 0).color = WHITE
    assert grid.get(0, 0).color == BLACK
    assert (clone.rows, clone.cols, clone.img_width, clone.img_height) == (1, 2, 2, 1)


def test_iteration_preserves_order():
    grid = grid_from_rows([[BLACK, WHITE], [WHITE, BLACK]])
    assert [sq.color for sq in grid.iter()] == [BLACK, WHITE, WHITE, BLACK]
    for sq in grid.iter_mut():
        sq.color = WHITE
    assert set(grid.colors()) == {WHITE}
