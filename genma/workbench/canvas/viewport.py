import logging
from typing import Tuple
from blinker import Signal
from ...core.matrix import Matrix


logger = logging.getLogger(__name__)


class Viewport:
    """
    Pan offset (screen pixels) and zoom scale of the infinite canvas.

    The mapping between the two spaces is

        canvas = (screen - offset) / scale

    There are no pan bounds. Zooming changes only the mapping, never the
    elements. Anchoring a zoom at the pointer is left to the caller; see
    zoom_at() for the helper the canvas uses.
    """

    def __init__(
        self,
        offset: Tuple[float, float] = (0.0, 0.0),
        scale: float = 1.0,
        min_scale: float = 0.1,
        max_scale: float = 5.0,
    ):
        self.min_scale = min_scale
        self.max_scale = max_scale
        self._offset_x, self._offset_y = float(offset[0]), float(offset[1])
        self._scale = self._clamp(scale)
        self.changed = Signal()

    def _clamp(self, scale: float) -> float:
        return min(max(float(scale), self.min_scale), self.max_scale)

    @property
    def offset(self) -> Tuple[float, float]:
        return self._offset_x, self._offset_y

    @property
    def scale(self) -> float:
        return self._scale

    def get_transform(self) -> Matrix:
        """The canvas-to-screen matrix, for renderers."""
        return Matrix.translation(self._offset_x, self._offset_y) @ (
            Matrix.scale(self._scale, self._scale)
        )

    def to_canvas(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        return (
            (screen_x - self._offset_x) / self._scale,
            (screen_y - self._offset_y) / self._scale,
        )

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return self.get_transform().transform_point((x, y))

    def set_offset(self, x: float, y: float):
        if (x, y) == (self._offset_x, self._offset_y):
            return
        self._offset_x, self._offset_y = float(x), float(y)
        self.changed.send(self)

    def pan(self, dx: float, dy: float):
        self.set_offset(self._offset_x + dx, self._offset_y + dy)

    def set_scale(self, scale: float):
        new_scale = self._clamp(scale)
        if new_scale == self._scale:
            return
        self._scale = new_scale
        logger.debug(f"Zoom is now {new_scale:.3f}")
        self.changed.send(self)

    def zoom(self, delta: float):
        self.set_scale(self._scale + delta)

    def zoom_at(self, delta: float, screen_x: float, screen_y: float):
        """
        Zooms and then shifts the offset so the canvas point under
        (screen_x, screen_y) stays under it.
        """
        anchor_x, anchor_y = self.to_canvas(screen_x, screen_y)
        self.zoom(delta)
        self.set_offset(
            screen_x - anchor_x * self._scale,
            screen_y - anchor_y * self._scale,
        )
