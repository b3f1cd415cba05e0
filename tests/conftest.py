import pytest

from map_test_utils import filled_grid, grid_from_rows


@pytest.fixture
def make_grid():
    return grid_from_rows


@pytest.fixture
def make_filled_grid():
    return filled_grid
