from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from agcombine_filter.errors import DimensionMismatch
from agcombine_filter.filtering.global_filter import median_bounds

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence

    from agcombine_filter.spatial.index import SpatialIndex


@dataclass(frozen=True)
class Neighbourhood:
    """Spatial neighbours of one point, excluding the point itself."""

    positions: np.ndarray
    dx: np.ndarray
    dy: np.ndarray
    values: np.ndarray

    def __len__(self) -> int:
        return self.positions.size

    @property
    def angles(self) -> np.ndarray:
        """Bearing from the centre point to each neighbour, in (-pi, pi]."""
        return np.arctan2(self.dy, self.dx)

    def subset(self, mask: np.ndarray) -> Neighbourhood:
        return Neighbourhood(
            self.positions[mask], self.dx[mask], self.dy[mask], self.values[mask]
        )


def as_point_arrays(
    x: Sequence[float] | np.ndarray,
    y: Sequence[float] | np.ndarray,
    values: Sequence[float] | np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    values = np.asarray(values, dtype=float)
    if not x.size == y.size == values.size:
        raise DimensionMismatch(
            "x, y and values must have the same length, "
            f"got {x.size}, {y.size} and {values.size}"
        )
    return x, y, values


def find_neighbours(
    index: SpatialIndex, values: np.ndarray, i: int, radius: float
) -> Neighbourhood:
    """
    Points within ``radius`` of point ``i``.

    The index returns everything in the enclosing square; candidates are then
    checked against the exact squared distance.
    """
    xi = index.x[i]
    yi = index.y[i]
    candidates = index.search(xi - radius, yi - radius, xi + radius, yi + radius)
    candidates = candidates[candidates != i]

    dx = index.x[candidates] - xi
    dy = index.y[candidates] - yi
    within = dx * dx + dy * dy <= radius * radius
    candidates = candidates[within]
    return Neighbourhood(candidates, dx[within], dy[within], values[candidates])


def within_tolerance(value: float, centre: float, variation_pct: float) -> bool:
    """Whether ``value`` lies in the closed tolerance interval around ``centre``."""
    lower, upper = median_bounds(centre, variation_pct)
    return bool(lower <= value <= upper)
