"""
Alignment snapping for dragged elements.

While an element is dragged, each axis is resolved on its own. The
leading edge, center and trailing edge of the moving element are compared
against the same three lines of every element that is not being dragged.
The closest pair wins if it is within the threshold, and the target line
is reported as a guide for the renderer. Otherwise the leading edge snaps
to the grid, without a guide.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from ...core.element import Element


SNAP_THRESHOLD = 5.0
GRID_SIZE = 10.0


@dataclass(frozen=True)
class SnapResult:
    dx: float
    dy: float
    # Absolute canvas coordinates of the guide lines, if any.
    guide_x: Optional[float] = None
    guide_y: Optional[float] = None

    @property
    def guides(self) -> Tuple[Optional[float], Optional[float]]:
        return self.guide_x, self.guide_y


def _lines(start: float, size: float) -> Tuple[float, float, float]:
    return start, start + size / 2, start + size


def round_to_grid(value: float, grid_size: float) -> float:
    """Nearest grid line; halves round up."""
    return math.floor(value / grid_size + 0.5) * grid_size


def find_alignment(
    start: float,
    size: float,
    targets: Iterable[Tuple[float, float]],
    threshold: float,
) -> Tuple[Optional[float], Optional[float]]:
    """
    Finds the smallest correction that aligns one of the three lines of
    the span (start, size) with a line of one of the target spans.

    Returns (correction, target_line), or (None, None) when nothing is
    within threshold. The first target with the minimal distance wins.
    """
    best_diff = threshold + 1
    best_target = None
    sources = _lines(start, size)
    for target_start, target_size in targets:
        for source in sources:
            for target in _lines(target_start, target_size):
                diff = target - source
                if abs(diff) < abs(best_diff):
                    best_diff = diff
                    best_target = target
    if best_target is None or abs(best_diff) > threshold:
        return None, None
    return best_diff, best_target


def _snap_axis(
    start: float,
    size: float,
    delta: float,
    targets: Iterable[Tuple[float, float]],
    threshold: float,
    grid_size: float,
    snap_to_objects: bool,
    snap_to_grid: bool,
) -> Tuple[float, Optional[float]]:
    if snap_to_objects:
        diff, guide = find_alignment(start, size, targets, threshold)
        if diff is not None:
            return delta + diff, guide

    if snap_to_grid and grid_size > 0:
        grid_diff = round_to_grid(start, grid_size) - start
        if abs(grid_diff) <= threshold:
            return delta + grid_diff, None

    return delta, None


def snap_move(
    x: float,
    y: float,
    width: float,
    height: float,
    siblings: Iterable[Element],
    dx: float,
    dy: float,
    threshold: float = SNAP_THRESHOLD,
    grid_size: float = GRID_SIZE,
    snap_to_objects: bool = True,
    snap_to_grid: bool = True,
) -> SnapResult:
    """
    Corrects a drag delta so the moved element lines up with a sibling
    or the grid.

    Args:
        x, y: Position of the element at drag start.
        width, height: Size of the element.
        siblings: Elements that are not being dragged.
        dx, dy: Raw delta since drag start, in canvas units.

    Returns:
        The corrected delta and the guide lines to draw.
    """
    siblings = list(siblings)
    current_x = x + dx
    current_y = y + dy

    final_dx, guide_x = _snap_axis(
        current_x,
        width,
        dx,
        ((s.x, s.width) for s in siblings),
        threshold,
        grid_size,
        snap_to_objects,
        snap_to_grid,
    )
    final_dy, guide_y = _snap_axis(
        current_y,
        height,
        dy,
        ((s.y, s.height) for s in siblings),
        threshold,
        grid_size,
        snap_to_objects,
        snap_to_grid,
    )
    return SnapResult(final_dx, final_dy, guide_x, guide_y)
