from __future__ import annotations
import uuid
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

# Geometry floor enforced by the resize session.
MIN_ELEMENT_SIZE = 10.0

Rect = Tuple[float, float, float, float]


class ElementKind(Enum):
    FRAME = "FRAME"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    PATH = "PATH"

    @classmethod
    def parse(cls, value: Any) -> "ElementKind":
        """
        Accepts an ElementKind or its wire name. Generated layouts call
        ellipses "CIRCLE".
        """
        if isinstance(value, ElementKind):
            return value
        name = str(value).upper()
        if name == "CIRCLE":
            return cls.ELLIPSE
        return cls(name)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Element:
    """
    An immutable snapshot of one canvas element.

    The store owns elements; everyone else reads them and asks the store
    to replace them by id. `x, y` is the top-left corner in canvas units.
    `rotation` is only used for display, all geometry below ignores it.
    `content` depends on the kind (text, path commands, asset reference)
    and is never interpreted by the canvas.
    """

    kind: ElementKind
    x: float = 0.0
    y: float = 0.0
    width: float = 100.0
    height: float = 100.0
    id: str = field(default_factory=_new_id)
    name: str = ""
    rotation: float = 0.0
    locked: bool = False
    content: Optional[str] = None
    fill: str = "#333333"
    stroke: Optional[str] = None
    opacity: float = 1.0
    border_radius: float = 0.0
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[str] = None

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def rect(self) -> Rect:
        return self.x, self.y, self.width, self.height

    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def contains_point(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def is_inside(self, rect: Rect) -> bool:
        """True if this element lies completely within rect."""
        rx, ry, rw, rh = rect
        return (
            self.x >= rx
            and self.right <= rx + rw
            and self.y >= ry
            and self.bottom <= ry + rh
        )

    def evolve(self, **changes: Any) -> "Element":
        """
        Returns a copy with the given fields replaced. Unknown field names
        raise TypeError.
        """
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, ElementKind):
                value = value.value
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Element":
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        kwargs["kind"] = ElementKind.parse(data["kind"])
        if kwargs.get("id") is None:
            kwargs.pop("id", None)
        return cls(**kwargs)
