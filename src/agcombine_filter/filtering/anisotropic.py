"""Anisotropic local filter.

Yield monitors record points along the harvester's passes, so the values that
best describe a point are usually the ones on the same line of travel. For
each point the filter estimates the dominant bearing of its neighbourhood from
a smoothed directional histogram and compares the point only with the
neighbours lying in a double wedge around that bearing. Direction is worked
out per point from geometry alone, so the result does not depend on the order
of the input rows.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from tqdm import tqdm

from agcombine_filter.config import (
    ADJACENT_BIN_WEIGHT,
    DEFAULT_WEDGE_ANGLE_DEG,
    NUM_DIRECTION_BINS,
)
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

TWO_PI = 2 * np.pi
BIN_WIDTH = TWO_PI / NUM_DIRECTION_BINS


def angle_difference(angle1: float | np.ndarray, angle2: float) -> float | np.ndarray:
    """Signed difference ``angle1 - angle2`` wrapped into [-pi, pi)."""
    return (np.asarray(angle1) - angle2 + np.pi) % TWO_PI - np.pi


def direction_histogram(angles: np.ndarray) -> np.ndarray:
    """
    Smoothed circular histogram of bearings.

    Each bearing adds 1 to its own 30 degree sector and ``ADJACENT_BIN_WEIGHT``
    to the two sectors either side of it, wrapping at 0 / 2pi.
    """
    normalised = np.where(angles < 0, angles + TWO_PI, angles)
    bins = np.floor(normalised / BIN_WIDTH).astype(int) % NUM_DIRECTION_BINS
    counts = np.bincount(bins, minlength=NUM_DIRECTION_BINS).astype(float)
    spill = np.roll(counts, 1) + np.roll(counts, -1)
    return counts + ADJACENT_BIN_WEIGHT * spill


def dominant_direction(angles: Sequence[float] | np.ndarray) -> float:
    """
    Centre of the heaviest sector of the smoothed direction histogram.

    Ties go to the lowest sector. No bearings at all gives 0.
    """
    angles = np.asarray(angles, dtype=float)
    if angles.size == 0:
        return 0.0
    weights = direction_histogram(angles)
    dominant_bin = int(np.argmax(weights))
    return (dominant_bin + 0.5) * BIN_WIDTH


def wedge_mask(
    angles: Sequence[float] | np.ndarray,
    direction: float,
    wedge_angle_deg: float = DEFAULT_WEDGE_ANGLE_DEG,
) -> np.ndarray:
    """Bearings within the wedge around ``direction`` or its opposite."""
    angles = np.asarray(angles, dtype=float)
    wedge = np.deg2rad(wedge_angle_deg)
    forward = np.abs(angle_difference(angles, direction)) <= wedge
    backward = np.abs(angle_difference(angles, direction + np.pi)) <= wedge
    return forward | backward


def anisotropic_filter(
    x: Sequence[float] | np.ndarray,
    y: Sequence[float] | np.ndarray,
    values: Sequence[float] | np.ndarray,
    variation_pct: float,
    radius: float,
    min_neighbours: int,
    wedge_angle_deg: float = DEFAULT_WEDGE_ANGLE_DEG,
    show_progress: bool = False,
) -> np.ndarray:
    """
    Compare every point with the median of its directional neighbourhood.

    Args:
        x: Planar x coordinates in metres.
        y: Planar y coordinates in metres.
        values: Measured values, one per point.
        variation_pct: Allowed deviation from the local median, in percent.
        radius: Neighbour search radius in metres.
        min_neighbours: Neighbours needed before a point is judged. Capped
            at 2 here, both for judging and for the wedge fallback.
        wedge_angle_deg: Half-width of the wedge around the dominant bearing.
        show_progress: Display a progress bar over the points.

    Returns:
        Boolean keep-mask with one entry per point.
    """
    x, y, values = as_point_arrays(x, y, values)
    n = values.size
    if n == 0:
        return np.zeros(0, dtype=bool)

    required = min(min_neighbours, 2)
    index = SpatialIndex(x, y)
    keep = np.zeros(n, dtype=bool)
    sparse = 0
    fallbacks = 0

    for i in tqdm(range(n), desc="Anisotropic filter", disable=not show_progress):
        neighbours = find_neighbours(index, values, i, radius)
        if len(neighbours) < required:
            keep[i] = True
            sparse += 1
            continue

        angles = neighbours.angles
        direction = dominant_direction(angles)
        selected = neighbours.subset(wedge_mask(angles, direction, wedge_angle_deg))
        if len(selected) < required:
            selected = neighbours
            fallbacks += 1

        if len(selected) == 0:
            keep[i] = True
            continue

        local_median = median(selected.values)
        keep[i] = within_tolerance(values[i], local_median, variation_pct)

    LOGGER.debug(
        f"{sparse} points had fewer than {required} neighbours, "
        f"{fallbacks} fell back to the full neighbourhood"
    )
    LOGGER.info(f"Anisotropic filter kept {int(keep.sum())} of {n} points")
    return keep
