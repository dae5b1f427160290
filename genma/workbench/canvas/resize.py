from __future__ import annotations
from ...core.element import MIN_ELEMENT_SIZE, Rect
from .region import (
    ElementRegion,
    LEFT_HANDLES,
    RIGHT_HANDLES,
    TOP_HANDLES,
    BOTTOM_HANDLES,
)


def resize_rect(
    origin: Rect,
    handle: ElementRegion,
    dx: float,
    dy: float,
    min_size: float = MIN_ELEMENT_SIZE,
) -> Rect:
    """
    Computes the new geometry for a corner-handle resize.

    Args:
        origin: (x, y, w, h) of the element when the resize started.
        handle: The corner handle being dragged.
        dx, dy: Pointer delta since the resize started, canvas units.
        min_size: Smallest allowed width and height.

    The corner opposite to the handle is the anchor and stays in place.
    When a size falls below min_size it is pinned there, and for the
    left and top handles the origin is recomputed from the anchor, so the
    element never inverts or creeps past its anchor.
    """
    orig_x, orig_y, orig_w, orig_h = origin
    new_x, new_y, new_w, new_h = orig_x, orig_y, orig_w, orig_h

    if handle in RIGHT_HANDLES:
        new_w = orig_w + dx
    elif handle in LEFT_HANDLES:
        new_x, new_w = orig_x + dx, orig_w - dx

    if handle in BOTTOM_HANDLES:
        new_h = orig_h + dy
    elif handle in TOP_HANDLES:
        new_y, new_h = orig_y + dy, orig_h - dy

    if new_w < min_size:
        new_w = min_size
        if handle in LEFT_HANDLES:
            new_x = orig_x + orig_w - min_size
    if new_h < min_size:
        new_h = min_size
        if handle in TOP_HANDLES:
            new_y = orig_y + orig_h - min_size

    return new_x, new_y, new_w, new_h
