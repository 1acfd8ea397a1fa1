from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from agcombine_filter.config import DEFAULT_OUTPUT_FILE, ID_COLUMN

if TYPE_CHECKING:
    from agcombine_filter.dataset import FilterReport

LOGGER = logging.getLogger(__name__)


def read_dataset(path: str | Path) -> pd.DataFrame:
    """
    Read a measurement table from a CSV file with a header row.

    Args:
        path: Path to the CSV file.

    Returns:
        A DataFrame with numeric columns typed automatically.
    """
    LOGGER.info(f"Reading dataset from {path}")
    frame = pd.read_csv(path, skip_blank_lines=True)
    LOGGER.debug(f"Read {len(frame)} rows with columns {list(frame.columns)}")
    return frame


def save_cleaned(kept: pd.DataFrame, path: str | Path = DEFAULT_OUTPUT_FILE) -> Path:
    """
    Write the kept rows to a CSV file without the internal identifier column.

    Args:
        kept: The kept rows.
        path: Destination file.

    Returns:
        The path written to.
    """
    path = Path(path)
    kept.drop(columns=[ID_COLUMN], errors="ignore").to_csv(path, index=False)
    LOGGER.info(f"Saved {len(kept)} cleaned rows to {path}")
    return path


def format_summary(report: FilterReport) -> str:
    """
    One-line summary of a run, e.g. ``"Kept 1,234 out of 1,500 rows (82.3%)."``.
    """
    return (
        f"Kept {report.kept_count:,} out of {report.original_count:,} rows "
        f"({report.kept_fraction * 100:.1f}%)."
    )
