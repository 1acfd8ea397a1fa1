from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from scipy.spatial import cKDTree

from agcombine_filter.errors import DimensionMismatch

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)


class SpatialIndex:
    """
    Static 2D point index answering axis-aligned bounding-box queries.

    The index is built once from the point coordinates and cannot be changed
    afterwards; the coordinate arrays it holds are read-only copies. Queries
    go through a k-d tree, so building costs O(n log n) and a query costs
    roughly O(log n + k) for k results.

    Usage:
        index = SpatialIndex(x, y)
        candidates = index.search(x0 - r, y0 - r, x0 + r, y0 + r)
    """

    def __init__(
        self, x: Sequence[float] | np.ndarray, y: Sequence[float] | np.ndarray
    ):
        x = np.array(x, dtype=float)
        y = np.array(y, dtype=float)
        if x.shape != y.shape:
            raise DimensionMismatch(
                f"x and y must have the same length, got {x.size} and {y.size}"
            )
        x.setflags(write=False)
        y.setflags(write=False)
        self._x = x
        self._y = y
        self._tree = cKDTree(np.column_stack([x, y])) if x.size else None
        self._extent = (x.min(), y.min(), x.max(), y.max()) if x.size else None
        LOGGER.debug(f"Built spatial index over {x.size} points")

    def __len__(self) -> int:
        return self._x.size

    @property
    def x(self) -> np.ndarray:
        return self._x

    @property
    def y(self) -> np.ndarray:
        return self._y

    def search(
        self, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> np.ndarray:
        """
        Positions of all points inside the closed box
        ``[min_x, max_x] x [min_y, max_y]``.

        Args:
            min_x: Left edge of the query box.
            min_y: Bottom edge of the query box.
            max_x: Right edge of the query box.
            max_y: Top edge of the query box.

        Returns:
            Integer array of point positions, in no particular order.
        """
        # Negated comparisons so NaN edges give an empty result too
        if self._tree is None or not (min_x <= max_x and min_y <= max_y):
            return np.zeros(0, dtype=np.intp)

        # Clip to the point extent so unbounded boxes stay finite
        lo_x, lo_y, hi_x, hi_y = self._extent
        min_x, min_y = max(min_x, lo_x), max(min_y, lo_y)
        max_x, max_y = min(max_x, hi_x), min(max_y, hi_y)
        if min_x > max_x or min_y > max_y:
            return np.zeros(0, dtype=np.intp)

        cx = (min_x + max_x) / 2
        cy = (min_y + max_y) / 2
        reach = max(max_x - cx, max_y - cy)
        # Widen by a few ulps so rounding in the centre never drops edge points
        reach += 4 * np.spacing(max(abs(cx), abs(cy), reach))

        # Chebyshev ball = axis-aligned square around the box centre
        found = np.asarray(
            self._tree.query_ball_point([cx, cy], r=reach, p=np.inf), dtype=np.intp
        )
        if found.size == 0:
            return found
        px = self._x[found]
        py = self._y[found]
        inside = (px >= min_x) & (px <= max_x) & (py >= min_y) & (py <= max_y)
        return found[inside]
