from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from agcombine_filter.filtering.median import median

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)


def median_bounds(centre: float, variation_pct: float) -> tuple[float, float]:
    """
    Tolerance interval ``centre -/+ centre * variation_pct / 100``.

    The interval is not reordered: a negative centre yields a "lower" bound
    above the "upper" one and a zero centre yields a zero-width interval.
    """
    v = variation_pct / 100
    return centre - centre * v, centre + centre * v


def global_filter(
    values: Sequence[float] | np.ndarray, variation_pct: float
) -> np.ndarray:
    """
    Keep values within ``variation_pct`` percent of the dataset median.

    Args:
        values: Measured values, one per point.
        variation_pct: Allowed deviation from the median, in percent of it.

    Returns:
        Boolean keep-mask with one entry per value. Empty input gives an
        empty mask.
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return np.zeros(0, dtype=bool)

    centre = median(values)
    lower, upper = median_bounds(centre, variation_pct)
    LOGGER.debug(
        "Global median %g, bounds [%g, %g] for %g%%",
        centre,
        lower,
        upper,
        variation_pct,
    )
    keep = (values >= lower) & (values <= upper)
    LOGGER.info(f"Global filter kept {int(keep.sum())} of {values.size} points")
    return keep
