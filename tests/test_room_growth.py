import pytest

from nice_map_gen.errors import (
    MapGenError,
    NoGridError,
    NoRoomStartsError,
    NotEnoughEmptyCellsError,
)
from nice_map_gen.room_growth import ConstrainedRoomGrowth, GrowthRoom
from nice_map_gen.utils.colors import ROOM_PALETTE, RoomTile

from map_test_utils import BLACK, BLUE, GREEN, GREY, RED, WHITE, filled_grid

OTHER = (90, 10, 200)


def _tile(grid, row, col):
    return ROOM_PALETTE.classify(grid.get(row, col).color)


def _gap(a: GrowthRoom, b: GrowthRoom) -> int:
    """Chebyshev distance between two rectangles (1 means touching)."""
    dr = max(a.top - b.bottom, b.top - a.bottom, 0)
    dc = max(a.left - b.right, b.left - a.right, 0)
    return max(dr, dc)


def test_two_corner_starts_grow_into_separated_rooms():
    grid = filled_grid(5, 5, WHITE)
    grid.get(0, 0).color = RED
    grid.get(4, 4).color = RED
    crg = ConstrainedRoomGrowth().with_grid(grid)

    rooms = crg.grow_rooms_from_starts()

    assert [room.bounds for room in rooms] == [(0, 0, 1, 1), (3, 3, 4, 4)]
    assert not rooms[0].overlaps(rooms[1])
    assert crg.rounds_run == 2
    out = crg.grid
    for i in range(5):
        assert _tile(out, 2, i) is RoomTile.WALL
        assert _tile(out, i, 2) is RoomTile.WALL
    for room in rooms:
        for row, col in room.cells():
            assert _tile(out, row, col) is RoomTile.FLOOR


def test_growth_works_on_a_copy_and_leaves_original_squares():
    grid = filled_grid(5, 5, WHITE)
    grid.get(2, 2).color = RED
    crg = ConstrainedRoomGrowth().with_grid(grid)
    crg.grow_rooms_from_starts()
    assert crg.grid is not grid
    assert grid.get(2, 2).color == RED
    assert grid.get(0, 0).color == WHITE


def test_single_start_fills_the_grid_and_stops():
    grid = filled_grid(5, 5, WHITE)
    grid.get(2, 2).color = RED
    crg = ConstrainedRoomGrowth().with_grid(grid)
    rooms = crg.grow_rooms_from_starts()
    assert len(rooms) == 1
    assert rooms[0].bounds == (0, 0, 4, 4)
    assert not rooms[0].allowed_to_grow
    assert all(ROOM_PALETTE.classify(sq.color) is RoomTile.FLOOR for sq in crg.grid)


def test_doors_and_stairs_inside_rooms_are_kept_other_colors_become_floor():
    grid = filled_grid(3, 3, WHITE)
    grid.get(1, 1).color = RED
    grid.get(0, 0).color = BLUE
    grid.get(2, 2).color = GREEN
    grid.get(0, 2).color = OTHER
    crg = ConstrainedRoomGrowth().with_grid(grid)
    crg.grow_rooms_from_starts()
    out = crg.grid
    assert _tile(out, 0, 0) is RoomTile.DOOR
    assert _tile(out, 2, 2) is RoomTile.STAIRS
    assert out.get(0, 2).color == GREY
    assert out.get(1, 1).color == GREY


def test_growing_room_stops_short_of_rooms_that_already_stopped():
    grid = filled_grid(7, 7, WHITE)
    for pos in ((0, 0), (0, 1), (6, 6)):
        grid.get(*pos).color = RED
    crg = ConstrainedRoomGrowth().with_grid(grid)

    first, second, big = crg.grow_rooms_from_starts()

    assert first.bounds == (0, 0, 0, 0)
    assert second.bounds == (0, 1, 0, 1)
    assert big.bounds == (2, 2, 6, 6)
    assert _gap(big, first) >= 2 and _gap(big, second) >= 2
    assert _tile(crg.grid, 1, 2) is RoomTile.WALL
    assert _tile(crg.grid, 2, 1) is RoomTile.WALL


def test_random_rooms_never_overlap_and_all_stop():
    grid = filled_grid(16, 12, WHITE)
    crg = ConstrainedRoomGrowth(seed=3).with_grid(grid)
    crg.add_random_room_starts(5)
    rooms = crg.grow_rooms_from_starts()

    assert len(rooms) == 5
    assert not any(room.allowed_to_grow for room in rooms)
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            assert not a.overlaps(b)
    assert not any(ROOM_PALETTE.classify(sq.color) is RoomTile.ROOM_START for sq in crg.grid)


def test_same_seed_gives_same_rooms():
    results = []
    for _ in range(2):
        crg = ConstrainedRoomGrowth(seed=99).with_grid(filled_grid(12, 12, WHITE))
        starts = crg.add_random_room_starts()
        crg.grow_rooms_from_starts()
        results.append((starts, crg.pop_grid()))
    assert results[0][0] == results[1][0]
    assert results[0][1] == results[1][1]


def test_add_random_room_starts_marks_distinct_empty_squares():
    grid = filled_grid(4, 4, WHITE)
    grid.get(0, 0).color = BLACK
    crg = ConstrainedRoomGrowth(seed=1).with_grid(grid)
    chosen = crg.add_random_room_starts(3)
    assert len(set(chosen)) == 3
    assert (0, 0) not in chosen
    for row, col in chosen:
        assert grid.get(row, col).color == RED
    assert sum(1 for sq in grid if sq.color == RED) == 3


def test_default_start_count_scales_with_grid_size():
    for seed in range(10):
        crg = ConstrainedRoomGrowth(seed=seed).with_grid(filled_grid(4, 4, WHITE))
        assert 1 <= len(crg.add_random_room_starts()) <= 2


def test_zero_starts_is_allowed():
    crg = ConstrainedRoomGrowth(seed=1).with_grid(filled_grid(2, 2, WHITE))
    assert crg.add_random_room_starts(0) == []


def test_not_enough_empty_squares_leaves_grid_untouched():
    grid = filled_grid(2, 2, BLACK)
    grid.get(1, 1).color = WHITE
    before = grid.copy()
    crg = ConstrainedRoomGrowth(seed=1).with_grid(grid)
    with pytest.raises(NotEnoughEmptyCellsError) as excinfo:
        crg.add_random_room_starts(2)
    assert excinfo.value.requested == 2
    assert excinfo.value.available == 1
    assert grid == before


def test_negative_start_count_is_rejected():
    crg = ConstrainedRoomGrowth().with_grid(filled_grid(2, 2, WHITE))
    with pytest.raises(ValueError):
        crg.add_random_room_starts(-1)


def test_no_grid_raises():
    crg = ConstrainedRoomGrowth()
    with pytest.raises(NoGridError):
        crg.add_random_room_starts(1)
    with pytest.raises(NoGridError):
        crg.grow_rooms_from_starts()


def test_no_room_starts_raises_without_touching_grid():
    grid = filled_grid(3, 3, WHITE)
    crg = ConstrainedRoomGrowth().with_grid(grid)
    with pytest.raises(NoRoomStartsError) as excinfo:
        crg.grow_rooms_from_starts()
    assert isinstance(excinfo.value, MapGenError)
    assert crg.grid is grid
    assert all(sq.color == WHITE for sq in grid)


@pytest.mark.parametrize(
    "call",
    [
        lambda crg: crg.grow_rooms_l_growth(),
        lambda crg: crg.calculate_connectivity(),
        lambda crg: crg.enforce_connectivity(2),
    ],
)
def test_unfinished_features_raise_not_implemented(call):
    crg = ConstrainedRoomGrowth().with_grid(filled_grid(3, 3, WHITE))
    with pytest.raises(NotImplementedError):
        call(crg)


def test_growth_room_geometry():
    room = GrowthRoom(0, 1, 1, 2, 3)
    assert (room.width, room.height, room.area) == (3, 2, 6)
    assert room.contains(2, 3) and not room.contains(0, 1)
    assert room.expanded(3, 4) == (0, 0, 2, 3)
    assert len(room.border_cells(3, 4)) == 12 - 6
    assert room.overlaps(GrowthRoom(1, 2, 3, 2, 3))
    assert not room.overlaps(GrowthRoom(1, 0, 0, 0, 0))
