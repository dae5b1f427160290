"""
Input records and the gesture sessions of the canvas.

A session lives from the gesture's pointer-down to its pointer-up (or a
cancel) and carries only what that gesture needs. Exactly one session is
active at a time; `Idle` stands for "no gesture".
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple, Union
from ...core.element import Rect
from .path import PathRecorder
from .region import ElementRegion


class Tool(Enum):
    CURSOR = "cursor"
    HAND = "hand"
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    TEXT = "text"
    FRAME = "frame"
    PEN = "pen"
    PENCIL = "pencil"


DRAWING_TOOLS = {Tool.PEN, Tool.PENCIL}


class Button(Enum):
    PRIMARY = auto()
    MIDDLE = auto()
    SECONDARY = auto()


@dataclass(frozen=True)
class PointerEvent:
    """
    A pointer event in screen pixels.

    The host reports what the pointer is over: `target_id` for an element
    body, `handle` for a resize handle of that element. Both None means
    empty canvas. Canvas.pick() can compute them for hosts without their
    own hit testing.
    """

    x: float
    y: float
    button: Button = Button.PRIMARY
    shift: bool = False
    alt: bool = False
    ctrl: bool = False
    meta: bool = False
    target_id: Optional[str] = None
    handle: Optional[ElementRegion] = None


@dataclass(frozen=True)
class WheelEvent:
    dx: float
    dy: float
    x: float = 0.0
    y: float = 0.0
    ctrl: bool = False
    meta: bool = False


@dataclass
class Idle:
    pass


@dataclass
class Panning:
    start_screen: Tuple[float, float]
    start_offset: Tuple[float, float]


@dataclass
class Selecting:
    start: Tuple[float, float]
    current: Tuple[float, float]

    def rect(self) -> Rect:
        (x1, y1), (x2, y2) = self.start, self.current
        return min(x1, x2), min(y1, y2), abs(x2 - x1), abs(y2 - y1)


@dataclass(frozen=True)
class DragItem:
    id: str
    original_x: float
    original_y: float
    width: float
    height: float


@dataclass
class Dragging:
    start: Tuple[float, float]
    # The first item is the primary element, the reference for snapping.
    items: List[DragItem] = field(default_factory=list)

    @property
    def primary(self) -> DragItem:
        return self.items[0]

    def ids(self) -> List[str]:
        return [item.id for item in self.items]


@dataclass
class Resizing:
    id: str
    handle: ElementRegion
    start: Tuple[float, float]
    origin: Rect


@dataclass
class Drawing:
    recorder: PathRecorder


Session = Union[Idle, Panning, Selecting, Dragging, Resizing, Drawing]
