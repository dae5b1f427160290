from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

Point = Tuple[float, float]


class PathMode(Enum):
    CONTINUOUS = auto()  # pencil: every pointer move adds a point
    CLICK = auto()  # pen: every pointer press adds a point


@dataclass(frozen=True)
class PathGeometry:
    """A captured path, ready to become a vector element."""

    x: float
    y: float
    width: float
    height: float
    points: Tuple[Point, ...]  # relative to (x, y)
    commands: str


def format_number(value: float) -> str:
    """Shortest plain rendering: 20.0 -> '20', 12.5 -> '12.5'."""
    value = round(float(value), 4)
    if value == int(value):
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def to_commands(points: Sequence[Point]) -> str:
    parts = []
    for i, (px, py) in enumerate(points):
        op = "M" if i == 0 else "L"
        parts.append(f"{op} {format_number(px)} {format_number(py)}")
    return " ".join(parts)


def build_path(points: Sequence[Point]) -> Optional[PathGeometry]:
    """
    Normalizes canvas-space points into an element-local path.

    The bounding box minimum becomes the element position and is
    subtracted from every point, so local coordinates are never
    negative. Width and height are at least 1. Fewer than two points give
    None; a single click is not a path.
    """
    if len(points) < 2:
        return None

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x, min_y = min(xs), min(ys)
    width = max(1.0, max(xs) - min_x)
    height = max(1.0, max(ys) - min_y)

    local = tuple((px - min_x, py - min_y) for px, py in points)
    return PathGeometry(
        x=min_x,
        y=min_y,
        width=width,
        height=height,
        points=local,
        commands=to_commands(local),
    )


class PathRecorder:
    """Accumulates canvas-space samples of one drawing gesture."""

    def __init__(self, mode: PathMode):
        self.mode = mode
        self.points: List[Point] = []

    def __len__(self) -> int:
        return len(self.points)

    def append(self, x: float, y: float):
        # The presses of a finishing double-click land on the last point.
        if (
            self.mode == PathMode.CLICK
            and self.points
            and self.points[-1] == (x, y)
        ):
            return
        self.points.append((x, y))

    def preview(self) -> str:
        """Commands in canvas coordinates, for drawing the open path."""
        return to_commands(self.points)

    def build(self) -> Optional[PathGeometry]:
        return build_path(self.points)
