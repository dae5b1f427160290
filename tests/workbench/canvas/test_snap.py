import pytest
from genma.core.element import Element, ElementKind
from genma.workbench.canvas.snap import (
    SnapResult,
    find_alignment,
    round_to_grid,
    snap_move,
)


def rect(x, y, w, h):
    return Element(ElementKind.RECTANGLE, x, y, w, h)


def test_snaps_edge_to_sibling():
    sibling = rect(160, 100, 50, 50)
    result = snap_move(100, 100, 50, 50, [sibling], dx=8, dy=0)
    # Trailing edge 158 is 2 away from the sibling's leading edge.
    assert result.dx == 10
    assert result.guide_x == 160
    # Tops already line up.
    assert result.dy == 0
    assert result.guide_y == 100


def test_center_alignment():
    sibling = rect(0, 500, 100, 10)  # center x = 50
    result = snap_move(300, 0, 20, 20, [sibling], dx=-263, dy=0)
    # Moving center at 47, snapped to 50
    assert result.dx == -260
    assert result.guide_x == 50


def test_threshold_is_inclusive():
    sibling = rect(0, 1000, 10, 10)
    # Leading edge lands at 15, exactly 5 from the sibling's trailing edge.
    result = snap_move(100, 0, 100, 10, [sibling], dx=-85, dy=0)
    assert result.dx == -90
    assert result.guide_x == 10


def test_falls_back_to_grid_without_guide():
    sibling = rect(500, 500, 10, 10)
    result = snap_move(100, 100, 30, 30, [sibling], dx=7, dy=-3)
    assert (result.dx, result.dy) == (10, 0)
    assert result.guides == (None, None)


def test_no_siblings_uses_grid():
    result = snap_move(0, 0, 10, 10, [], dx=14, dy=16)
    assert (result.dx, result.dy) == (10, 20)


def test_first_sibling_wins_ties():
    # Both siblings are 3 away from the moving leading edge at 0.
    right = rect(3, 1000, 400, 10)
    left = rect(-3, 1000, 400, 10)

    result = snap_move(0, 0, 100, 100, [right, left], dx=0, dy=0)
    assert (result.dx, result.guide_x) == (3, 3)

    result = snap_move(0, 0, 100, 100, [left, right], dx=0, dy=0)
    assert (result.dx, result.guide_x) == (-3, -3)


def test_snapping_disabled():
    sibling = rect(160, 100, 50, 50)
    result = snap_move(
        100, 100, 50, 50, [sibling], dx=8, dy=3,
        snap_to_objects=False, snap_to_grid=False,
    )
    assert result == SnapResult(8, 3)


def test_grid_only():
    sibling = rect(160, 100, 50, 50)
    result = snap_move(
        100, 100, 50, 50, [sibling], dx=8, dy=3, snap_to_objects=False
    )
    assert (result.dx, result.dy) == (10, 0)
    assert result.guides == (None, None)


@pytest.mark.parametrize(
    "value, expected",
    [(104.9, 100), (105, 110), (-105, -100), (-106, -110), (0, 0)],
)
def test_round_to_grid_halves_round_up(value, expected):
    assert round_to_grid(value, 10) == expected


def test_find_alignment_none_within_threshold():
    assert find_alignment(0, 10, [(100, 10)], 5) == (None, None)
    assert find_alignment(0, 10, [], 5) == (None, None)
