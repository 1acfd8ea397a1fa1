from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

from agcombine_filter.config import (
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PARAMS,
    FilterMode,
    FilterParams,
)
from agcombine_filter.dataset import run_filter
from agcombine_filter.errors import FilterInputError
from agcombine_filter.io.utils import format_summary, read_dataset, save_cleaned
from agcombine_filter.statistics import stats_table

if TYPE_CHECKING:
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agcombine-filter",
        description="Remove spatial outliers from geo-referenced measurements",
    )
    parser.add_argument("input", help="CSV file with a header row")
    parser.add_argument(
        "-o", "--output", default=DEFAULT_OUTPUT_FILE, help="Where to write kept rows"
    )
    parser.add_argument(
        "--value-column",
        default=DEFAULT_PARAMS.value_column,
        help="Numeric column to clean",
    )
    parser.add_argument(
        "--global-v",
        type=float,
        default=DEFAULT_PARAMS.global_variation_pct,
        help="Global variation around the dataset median (%%)",
    )
    parser.add_argument(
        "--local-v",
        type=float,
        default=DEFAULT_PARAMS.local_variation_pct,
        help="Local variation around the neighbourhood median (%%)",
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=DEFAULT_PARAMS.radius,
        help="Neighbour search radius in metres",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in FilterMode],
        default=DEFAULT_PARAMS.mode.value,
        help="Local filter to apply after the global filter",
    )
    parser.add_argument(
        "--min-neighbours",
        type=int,
        default=DEFAULT_PARAMS.min_neighbours,
        help="Neighbours required before a point is judged",
    )
    parser.add_argument(
        "--wedge-angle",
        type=float,
        default=DEFAULT_PARAMS.wedge_angle_deg,
        help="Half-width of the anisotropic wedge in degrees",
    )
    parser.add_argument("--progress", action="store_true", help="Show progress bars")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command line entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    params = FilterParams(
        value_column=args.value_column,
        global_variation_pct=args.global_v,
        local_variation_pct=args.local_v,
        radius=args.radius,
        mode=FilterMode(args.mode),
        min_neighbours=args.min_neighbours,
        wedge_angle_deg=args.wedge_angle,
    )

    try:
        frame = read_dataset(args.input)
        report = run_filter(frame, params, show_progress=args.progress)
    except FilterInputError as exc:
        LOGGER.error(f"{type(exc).__name__}: {exc}")
        return 1

    print(format_summary(report))
    table = stats_table(report.before, report.after)
    print(table.to_string(float_format="{:.2f}".format))
    save_cleaned(report.kept, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
