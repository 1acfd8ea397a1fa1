"""Staged outlier filtering: global median filter, then a local filter.

The stages compose sequentially. The local filter only ever sees the points
that survived the global filter, so a globally rejected point can neither be
kept nor act as anybody's neighbour.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from agcombine_filter.config import FilterMode, FilterParams
from agcombine_filter.errors import DimensionMismatch
from agcombine_filter.filtering.anisotropic import anisotropic_filter
from agcombine_filter.filtering.global_filter import global_filter
from agcombine_filter.filtering.isotropic import isotropic_filter

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one pipeline run.

    Attributes:
        kept: The kept records, in input order.
        keep_mask: One entry per input position, True where the record is kept.
        global_mask: Keep-mask of the global stage over all input positions.
        local_mask: Keep-mask of the local stage over the global survivors.
        kept_positions: Input positions of the kept records.
    """

    kept: Any
    keep_mask: np.ndarray
    global_mask: np.ndarray
    local_mask: np.ndarray
    kept_positions: np.ndarray

    @property
    def rejected_positions(self) -> np.ndarray:
        return np.flatnonzero(~self.keep_mask)


def take_records(records: Any, positions: np.ndarray) -> Any:
    """Select ``records`` at ``positions``, keeping the container type."""
    if isinstance(records, (pd.DataFrame, pd.Series)):
        return records.iloc[positions]
    return [records[p] for p in positions]


def filter_outliers(
    records: pd.DataFrame | Sequence[Any],
    x: Sequence[float] | np.ndarray,
    y: Sequence[float] | np.ndarray,
    values: Sequence[float] | np.ndarray,
    params: FilterParams,
    show_progress: bool = False,
) -> PipelineResult:
    """
    Run the global filter and then the configured local filter.

    Args:
        records: Input rows, aligned with ``x``, ``y`` and ``values``.
        x: Planar x coordinates in metres.
        y: Planar y coordinates in metres.
        values: Measured values to clean.
        params: Filter parameters; ``params.mode`` selects the local filter.
        show_progress: Display progress bars for the local filter.

    Returns:
        A :class:`PipelineResult` holding the kept records and the masks.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    values = np.asarray(values, dtype=float)
    n = len(records)
    if not n == x.size == y.size == values.size:
        raise DimensionMismatch(
            "records, x, y and values must have the same length, "
            f"got {n}, {x.size}, {y.size} and {values.size}"
        )
    mode = FilterMode(params.mode)
    LOGGER.info(f"Filtering {n} points with {mode.value} local filter")

    # 1. Global filter over everything
    global_mask = global_filter(values, params.global_variation_pct)

    # 2. Compact to the survivors, remembering where they came from
    survivors = np.flatnonzero(global_mask)
    if survivors.size == 0:
        LOGGER.info("No points survived the global filter")
        empty = np.zeros(0, dtype=np.intp)
        return PipelineResult(
            kept=take_records(records, empty),
            keep_mask=np.zeros(n, dtype=bool),
            global_mask=global_mask,
            local_mask=np.zeros(0, dtype=bool),
            kept_positions=empty,
        )

    # 3. Local filter over the survivors only
    local_kwargs = {
        "variation_pct": params.local_variation_pct,
        "radius": params.radius,
        "min_neighbours": params.min_neighbours,
        "show_progress": show_progress,
    }
    sub_x, sub_y, sub_values = x[survivors], y[survivors], values[survivors]
    if mode is FilterMode.ISOTROPIC:
        local_mask = isotropic_filter(sub_x, sub_y, sub_values, **local_kwargs)
    else:
        local_mask = anisotropic_filter(
            sub_x,
            sub_y,
            sub_values,
            wedge_angle_deg=params.wedge_angle_deg,
            **local_kwargs,
        )

    # 4. Map back to input positions
    kept_positions = survivors[local_mask]
    keep_mask = np.zeros(n, dtype=bool)
    keep_mask[kept_positions] = True
    LOGGER.info(f"Kept {kept_positions.size} of {n} points")
    return PipelineResult(
        kept=take_records(records, kept_positions),
        keep_mask=keep_mask,
        global_mask=global_mask,
        local_mask=local_mask,
        kept_positions=kept_positions,
    )
