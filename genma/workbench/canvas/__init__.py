from .canvas import Canvas
from .region import ElementRegion
from .selection import Selection
from .session import Button, PointerEvent, Tool, WheelEvent
from .viewport import Viewport

__all__ = [
    "Button",
    "Canvas",
    "ElementRegion",
    "PointerEvent",
    "Selection",
    "Tool",
    "Viewport",
    "WheelEvent",
]
