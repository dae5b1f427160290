from typing import Any, Tuple
import numpy as np


class Matrix:
    """
    A 3x3 affine matrix for 2D points, stored as a numpy array with the
    translation in the last column.

    The viewport only composes a translation with an axis scale, so
    that is all this class offers.
    """

    def __init__(self, data: Any = None):
        if data is None:
            self.m: np.ndarray = np.identity(3, dtype=float)
            return
        try:
            self.m = np.array(data, dtype=float)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Could not create Matrix from data: {e}")
        if self.m.shape != (3, 3):
            raise ValueError(f"Expected a 3x3 matrix, got {self.m.shape}")

    def __matmul__(self, other: "Matrix") -> "Matrix":
        """Applied to a point, `other` acts first and `self` second."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix(self.m @ other.m)

    @staticmethod
    def translation(tx: float, ty: float) -> "Matrix":
        m = Matrix()
        m.m[0, 2], m.m[1, 2] = tx, ty
        return m

    @staticmethod
    def scale(sx: float, sy: float) -> "Matrix":
        m = Matrix()
        m.m[0, 0], m.m[1, 1] = sx, sy
        return m

    def transform_point(
        self, point: Tuple[float, float]
    ) -> Tuple[float, float]:
        x, y, _w = self.m @ np.array([point[0], point[1], 1.0])
        return float(x), float(y)
