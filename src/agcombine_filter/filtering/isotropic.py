from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from tqdm import tqdm

from agcombine_filter.filtering.median import median
from agcombine_filter.filtering.neighbours import (
    as_point_arrays,
    find_neighbours,
    within_tolerance,
)
from agcombine_filter.spatial.index import SpatialIndex

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)


def isotropic_filter(
    x: Sequence[float] | np.ndarray,
    y: Sequence[float] | np.ndarray,
    values: Sequence[float] | np.ndarray,
    variation_pct: float,
    radius: float,
    min_neighbours: int,
    show_progress: bool = False,
) -> np.ndarray:
    """
    Compare every point with the median of its circular neighbourhood.

    Points with fewer than ``min_neighbours`` neighbours inside ``radius`` are
    kept because there is not enough evidence to judge them.

    Args:
        x: Planar x coordinates in metres.
        y: Planar y coordinates in metres.
        values: Measured values, one per point.
        variation_pct: Allowed deviation from the local median, in percent.
        radius: Neighbour search radius in metres.
        min_neighbours: Neighbours needed before a point is judged.
        show_progress: Display a progress bar over the points.

    Returns:
        Boolean keep-mask with one entry per point.
    """
    x, y, values = as_point_arrays(x, y, values)
    n = values.size
    if n == 0:
        return np.zeros(0, dtype=bool)

    index = SpatialIndex(x, y)
    keep = np.zeros(n, dtype=bool)
    sparse = 0

    for i in tqdm(range(n), desc="Isotropic filter", disable=not show_progress):
        neighbours = find_neighbours(index, values, i, radius)
        if len(neighbours) < min_neighbours:
            keep[i] = True
            sparse += 1
            continue

        local_median = median(neighbours.values)
        keep[i] = within_tolerance(values[i], local_median, variation_pct)

    LOGGER.debug(f"{sparse} points had fewer than {min_neighbours} neighbours")
    LOGGER.info(f"Isotropic filter kept {int(keep.sum())} of {n} points")
    return keep
