"""Turn a measurement table into the arrays the filtering pipeline works on.

The table must contain the chosen value column and either a latitude/longitude
pair or a planar X/Y pair. Rows with a missing or non-numeric value or
coordinate are dropped and counted; every remaining row gets a stable integer
identifier in the ``__id`` column.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from agcombine_filter.config import ID_COLUMN, FilterParams
from agcombine_filter.errors import MissingCoordinates, NoNumericValues, UnknownColumn
from agcombine_filter.pipeline import filter_outliers
from agcombine_filter.spatial.projection import to_cartesian
from agcombine_filter.statistics import StatValues, calculate_stats

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Iterable

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoordinateColumns:
    """Names of the coordinate columns found in a table, if any."""

    lat: str | None = None
    lon: str | None = None
    x: str | None = None
    y: str | None = None

    @property
    def geographic(self) -> bool:
        return self.lat is not None and self.lon is not None

    @property
    def planar(self) -> bool:
        return self.x is not None and self.y is not None

    def pair(self) -> tuple[str, str]:
        """The column pair used for positions, lat/lon taking precedence."""
        if self.geographic:
            return self.lat, self.lon
        if self.planar:
            return self.x, self.y
        raise MissingCoordinates("Coordinate columns (Lat/Lon or X/Y) not found")


def find_coordinate_columns(columns: Iterable[str]) -> CoordinateColumns:
    """
    Detect coordinate columns by name.

    Latitude is the first column whose lower-cased name starts with ``lat``
    and longitude the first starting with ``lon`` (which covers ``long``).
    Planar columns must be named ``X`` and ``Y``, in any case.
    """
    columns = [str(c) for c in columns]
    lat = next((c for c in columns if c.lower().startswith("lat")), None)
    lon = next((c for c in columns if c.lower().startswith("lon")), None)
    x = next((c for c in columns if c.upper() == "X"), None)
    y = next((c for c in columns if c.upper() == "Y"), None)
    return CoordinateColumns(lat=lat, lon=lon, x=x, y=y)


@dataclass(frozen=True)
class PreparedDataset:
    """Records plus the aligned coordinate and value arrays."""

    records: pd.DataFrame
    x: np.ndarray
    y: np.ndarray
    values: np.ndarray
    value_column: str
    coordinate_columns: CoordinateColumns
    excluded_count: int

    @property
    def geographic(self) -> bool:
        return self.coordinate_columns.geographic

    def __len__(self) -> int:
        return self.values.size


def _numeric(column: pd.Series) -> pd.Series:
    return pd.to_numeric(column, errors="coerce").astype(float)


def prepare_dataset(frame: pd.DataFrame, value_column: str) -> PreparedDataset:
    """
    Validate ``frame`` and extract positions and values.

    Args:
        frame: The measurement table, one row per point.
        value_column: Name of the numeric column to clean.

    Returns:
        A :class:`PreparedDataset` over the usable rows.

    Raises:
        UnknownColumn: ``value_column`` is not a column of ``frame``.
        NoNumericValues: ``value_column`` holds no numeric entries.
        MissingCoordinates: No usable coordinate pair is present.
    """
    if value_column not in frame.columns:
        raise UnknownColumn(f"Value column '{value_column}' not found in the header")

    values = _numeric(frame[value_column])
    usable = np.isfinite(values.to_numpy())
    if not usable.any():
        raise NoNumericValues(f"No numeric values found in column '{value_column}'")

    coordinate_columns = find_coordinate_columns(frame.columns)
    first, second = coordinate_columns.pair()
    first_coord = _numeric(frame[first])
    second_coord = _numeric(frame[second])
    usable &= np.isfinite(first_coord.to_numpy()) & np.isfinite(second_coord.to_numpy())
    if not usable.any():
        raise MissingCoordinates(
            f"No rows with numeric coordinates in columns '{first}' and '{second}'"
        )

    excluded = int((~usable).sum())
    if excluded:
        LOGGER.warning(
            f"Filtered out {excluded} rows with non-numeric or missing values "
            f"in '{value_column}' or its coordinates"
        )

    records = frame.loc[usable].reset_index(drop=True)
    records[ID_COLUMN] = np.arange(len(records))
    first_coord = first_coord.to_numpy()[usable]
    second_coord = second_coord.to_numpy()[usable]

    if coordinate_columns.geographic:
        LOGGER.debug(f"Projecting coordinates from '{first}'/'{second}'")
        x, y = to_cartesian(first_coord, second_coord)
    else:
        LOGGER.debug(f"Using planar coordinates from '{first}'/'{second}'")
        x, y = first_coord, second_coord

    return PreparedDataset(
        records=records,
        x=x,
        y=y,
        values=values.to_numpy()[usable],
        value_column=value_column,
        coordinate_columns=coordinate_columns,
        excluded_count=excluded,
    )


@dataclass(frozen=True)
class FilterReport:
    """Everything a caller needs to present one filtering run.

    Attributes:
        dataset: The prepared input.
        kept: Kept rows, same shape and ``__id`` values as the input rows.
        keep_mask: Keep/reject decision per prepared row.
        before: Statistics of the values before filtering.
        after: Statistics of the kept values.
    """

    dataset: PreparedDataset
    kept: pd.DataFrame
    keep_mask: np.ndarray
    before: StatValues
    after: StatValues

    @property
    def rejected(self) -> pd.DataFrame:
        return self.dataset.records.loc[~self.keep_mask]

    @property
    def original_count(self) -> int:
        return len(self.dataset)

    @property
    def kept_count(self) -> int:
        return len(self.kept)

    @property
    def kept_fraction(self) -> float:
        if self.original_count == 0:
            return 0.0
        return self.kept_count / self.original_count

    @property
    def excluded_count(self) -> int:
        return self.dataset.excluded_count


def run_filter(
    frame: pd.DataFrame, params: FilterParams, show_progress: bool = False
) -> FilterReport:
    """
    Prepare ``frame``, run the pipeline and collect before/after statistics.

    Args:
        frame: The measurement table.
        params: Filter parameters, validated before anything runs.
        show_progress: Display progress bars for the local filter.

    Returns:
        A :class:`FilterReport` for the run.
    """
    params.validate()
    dataset = prepare_dataset(frame, params.value_column)
    before = calculate_stats(dataset.values)
    result = filter_outliers(
        dataset.records,
        dataset.x,
        dataset.y,
        dataset.values,
        params,
        show_progress=show_progress,
    )
    after = calculate_stats(dataset.values[result.keep_mask])
    LOGGER.info(
        f"Kept {len(result.kept)} of {len(dataset)} rows; "
        f"CV {before.cv:.2f}% -> {after.cv:.2f}%"
    )
    return FilterReport(
        dataset=dataset,
        kept=result.kept,
        keep_mask=result.keep_mask,
        before=before,
        after=after,
    )
