from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence


def median(values: Sequence[float] | np.ndarray) -> float:
    """
    Exact median of a numeric sequence.

    The input is copied before sorting, so the caller's sequence is left
    untouched. An empty sequence gives 0.

    Args:
        values: Numbers to take the median of.

    Returns:
        The central element for odd lengths, the mean of the two central
        elements for even lengths.
    """
    ordered = np.sort(np.asarray(values, dtype=float))
    n = ordered.size
    if n == 0:
        return 0.0
    mid = n // 2
    if n % 2 == 0:
        return float((ordered[mid - 1] + ordered[mid]) / 2)
    return float(ordered[mid])
