"""Descriptive statistics used to report the effect of a filtering run.

None of these feed back into the keep/reject decision.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from agcombine_filter.config import HISTOGRAM_BINS

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatValues:
    """Summary of a set of values.

    Attributes:
        min: Smallest value.
        max: Largest value.
        mean: Arithmetic mean.
        std_dev: Sample standard deviation, 0 for fewer than two values.
        cv: Coefficient of variation in percent, 0 when the mean is 0.
        count: Number of values.
    """

    min: float
    max: float
    mean: float
    std_dev: float
    cv: float
    count: int


def calculate_stats(values: Sequence[float] | np.ndarray) -> StatValues:
    """
    Count, range, mean, sample standard deviation and CV of ``values``.

    An empty input gives all zeros.
    """
    values = np.asarray(values, dtype=float)
    n = values.size
    if n == 0:
        return StatValues(min=0.0, max=0.0, mean=0.0, std_dev=0.0, cv=0.0, count=0)

    mean = float(values.mean())
    std_dev = float(values.std(ddof=1)) if n > 1 else 0.0
    cv = std_dev / abs(mean) * 100 if mean != 0 else 0.0
    return StatValues(
        min=float(values.min()),
        max=float(values.max()),
        mean=mean,
        std_dev=std_dev,
        cv=cv,
        count=n,
    )


def stats_table(before: StatValues, after: StatValues) -> pd.DataFrame:
    """Before/after statistics side by side, one row per statistic."""
    return pd.DataFrame(
        {"before": asdict(before), "after": asdict(after)},
        index=["count", "min", "max", "mean", "std_dev", "cv"],
    )


def value_histogram(
    values: Sequence[float] | np.ndarray, num_bins: int = HISTOGRAM_BINS
) -> pd.DataFrame:
    """
    Equal-width histogram of ``values`` between their min and max.

    Args:
        values: Values to bin.
        num_bins: Number of bins.

    Returns:
        DataFrame with columns ``x0``, ``x1`` and ``count``, one row per bin.
        The maximum always lands in the last bin; when every value is the
        same a single bin is returned.
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return pd.DataFrame({"x0": [], "x1": [], "count": []}).astype(
            {"count": int}
        )

    lo = float(values.min())
    hi = float(values.max())
    if lo == hi:
        return pd.DataFrame({"x0": [lo], "x1": [hi], "count": [values.size]})

    width = (hi - lo) / num_bins
    edges = lo + width * np.arange(num_bins + 1)
    bins = np.floor((values - lo) / width).astype(int)
    bins[values == hi] = num_bins - 1
    bins = np.clip(bins, 0, num_bins - 1)
    counts = np.bincount(bins, minlength=num_bins)
    LOGGER.debug(f"Binned {values.size} values into {num_bins} bins of width {width:g}")
    return pd.DataFrame({"x0": edges[:-1], "x1": edges[1:], "count": counts})
