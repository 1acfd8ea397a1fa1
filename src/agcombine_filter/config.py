# src/agcombine_filter/config.py
"""
Configuration constants and parameter dataclasses for the outlier filter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from agcombine_filter.errors import InvalidParameter

logger = logging.getLogger(__name__)

# =============================================================================
# GEOMETRY
# =============================================================================

EARTH_RADIUS_M = 6_371_000.0

# Directional histogram used by the anisotropic filter: 12 sectors of 30 deg
NUM_DIRECTION_BINS = 12
ADJACENT_BIN_WEIGHT = 0.3
DEFAULT_WEDGE_ANGLE_DEG = 45.0

# =============================================================================
# DATASET / REPORTING
# =============================================================================

ID_COLUMN = "__id"
HISTOGRAM_BINS = 20
DEFAULT_OUTPUT_FILE = "cleaned_data.csv"


class FilterMode(str, Enum):
    """Local filter applied after the global filter."""

    ISOTROPIC = "isotropic"
    ANISOTROPIC = "anisotropic"


@dataclass
class FilterParams:
    """Parameters for one run of the filtering pipeline.

    Attributes:
        value_column: Name of the numeric column to clean.
        global_variation_pct: Tolerance around the dataset median, in percent.
        local_variation_pct: Tolerance around the local median, in percent.
        radius: Neighbour search radius in metres.
        mode: Local filter to use after the global filter.
        min_neighbours: Neighbours required before a point is judged.
        wedge_angle_deg: Half-width of the anisotropic wedge in degrees.
    """

    value_column: str = "Yield"
    global_variation_pct: float = 20.0
    local_variation_pct: float = 15.0
    radius: float = 30.0
    mode: FilterMode = FilterMode.ANISOTROPIC
    min_neighbours: int = 2
    wedge_angle_deg: float = field(default=DEFAULT_WEDGE_ANGLE_DEG)

    def __post_init__(self) -> None:
        if isinstance(self.mode, str) and not isinstance(self.mode, FilterMode):
            try:
                self.mode = FilterMode(self.mode.lower())
            except ValueError as exc:
                raise InvalidParameter(
                    f"Unknown filter mode '{self.mode}'. "
                    f"Use one of: {', '.join(m.value for m in FilterMode)}"
                ) from exc

    def validate(self) -> None:
        """Check every parameter against its allowed range."""
        if not self.value_column:
            raise InvalidParameter("A value column name must be given")
        for name in ("global_variation_pct", "local_variation_pct"):
            pct = getattr(self, name)
            if not 0.0 <= pct <= 100.0:
                raise InvalidParameter(f"{name} must be within [0, 100], got {pct}")
        if not self.radius >= 0:
            raise InvalidParameter(f"radius must be non-negative, got {self.radius}")
        if self.min_neighbours < 1:
            raise InvalidParameter(
                f"min_neighbours must be at least 1, got {self.min_neighbours}"
            )
        if self.wedge_angle_deg > 90.0:
            # Two opposite wedges wider than 90 deg overlap and cover every bearing
            logger.warning(
                "Wedge angle %.1f deg covers all directions; anisotropic filter "
                "behaves like the isotropic one",
                self.wedge_angle_deg,
            )


DEFAULT_PARAMS = FilterParams()
