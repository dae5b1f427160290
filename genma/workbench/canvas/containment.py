from __future__ import annotations
import logging
from typing import Iterable, List, Sequence
from ...core.element import Element, ElementKind


logger = logging.getLogger(__name__)


def center_inside(elem: Element, frame: Element) -> bool:
    """
    True if the center of elem lies strictly inside the frame bounds.
    An element centered exactly on a frame edge does not belong to it.
    """
    cx, cy = elem.center()
    return frame.x < cx < frame.right and frame.y < cy < frame.bottom


def collect_frame_children(
    elements: Sequence[Element], dragging_ids: Iterable[str]
) -> List[Element]:
    """
    Finds the elements that have to travel with the dragged frames.

    There is no stored parent/child relation between frames and their
    content. Membership is decided from geometry at drag start: every
    element whose center lies inside a dragged frame follows it. An
    element dragged out of a frame therefore stops following it.

    Args:
        elements: All elements, in store order.
        dragging_ids: Ids already captured by the drag.

    Returns:
        The additional elements, in store order, without duplicates.
    """
    captured = set(dragging_ids)
    frames = [
        e
        for e in elements
        if e.id in captured and e.kind == ElementKind.FRAME
    ]
    if not frames:
        return []

    children = []
    for elem in elements:
        if elem.id in captured:
            continue
        if any(center_inside(elem, frame) for frame in frames):
            children.append(elem)
            captured.add(elem.id)

    logger.debug(
        f"{len(frames)} dragged frames carry {len(children)} elements"
    )
    return children
