from __future__ import annotations
from enum import Enum, auto
from typing import Set, Tuple
from ...core.element import Rect


class ElementRegion(Enum):
    """Interactive regions of a selected element."""

    NONE = auto()
    BODY = auto()
    # Resize handles, centered on the corners
    TOP_LEFT = auto()
    TOP_RIGHT = auto()
    BOTTOM_LEFT = auto()
    BOTTOM_RIGHT = auto()


RESIZE_HANDLES: Set[ElementRegion] = {
    ElementRegion.TOP_LEFT,
    ElementRegion.TOP_RIGHT,
    ElementRegion.BOTTOM_LEFT,
    ElementRegion.BOTTOM_RIGHT,
}

LEFT_HANDLES: Set[ElementRegion] = {
    ElementRegion.TOP_LEFT,
    ElementRegion.BOTTOM_LEFT,
}

RIGHT_HANDLES: Set[ElementRegion] = {
    ElementRegion.TOP_RIGHT,
    ElementRegion.BOTTOM_RIGHT,
}

TOP_HANDLES: Set[ElementRegion] = {
    ElementRegion.TOP_LEFT,
    ElementRegion.TOP_RIGHT,
}

BOTTOM_HANDLES: Set[ElementRegion] = {
    ElementRegion.BOTTOM_LEFT,
    ElementRegion.BOTTOM_RIGHT,
}


def get_handle_center(region: ElementRegion, rect: Rect) -> Tuple[float, float]:
    x, y, w, h = rect
    hx = x if region in LEFT_HANDLES else x + w
    hy = y if region in TOP_HANDLES else y + h
    return hx, hy


def get_region_rect(
    region: ElementRegion,
    rect: Rect,
    handle_size: float,
) -> Rect:
    """
    Returns the (x, y, w, h) rectangle of a region of an element
    occupying rect, all in canvas units.

    Handles are squares of handle_size centered on the element corners.
    Callers pass the handle size divided by the zoom scale, so handles
    keep a constant size on screen.
    """
    if region == ElementRegion.BODY:
        return rect
    if region not in RESIZE_HANDLES:
        return 0.0, 0.0, 0.0, 0.0
    cx, cy = get_handle_center(region, rect)
    half = handle_size / 2.0
    return cx - half, cy - half, handle_size, handle_size


def check_region_hit(
    x: float,
    y: float,
    rect: Rect,
    handle_size: float,
    with_handles: bool = True,
) -> ElementRegion:
    """
    Checks which region of an element is hit by a canvas-space point.
    Handles win over the body, since they reach outside of it.
    """
    if with_handles:
        for region in (
            ElementRegion.TOP_LEFT,
            ElementRegion.TOP_RIGHT,
            ElementRegion.BOTTOM_LEFT,
            ElementRegion.BOTTOM_RIGHT,
        ):
            rx, ry, rw, rh = get_region_rect(region, rect, handle_size)
            if rx <= x <= rx + rw and ry <= y <= ry + rh:
                return region

    ex, ey, ew, eh = rect
    if ex <= x <= ex + ew and ey <= y <= ey + eh:
        return ElementRegion.BODY

    return ElementRegion.NONE
