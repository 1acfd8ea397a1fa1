from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from agcombine_filter.config import EARTH_RADIUS_M
from agcombine_filter.errors import DimensionMismatch

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)


def to_cartesian(
    lat: Sequence[float] | np.ndarray, lon: Sequence[float] | np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    """
    Project latitude/longitude in degrees onto a local plane in metres.

    Uses an equirectangular projection around the mean latitude of the whole
    set, which is only accurate over small extents such as a single field.

    Args:
        lat: Latitudes in degrees.
        lon: Longitudes in degrees, same length as ``lat``.

    Returns:
        Tuple of ``(x, y)`` float64 arrays in metres.
    """
    lat = np.asarray(lat, dtype=float)
    lon = np.asarray(lon, dtype=float)
    if lat.shape != lon.shape:
        raise DimensionMismatch(
            "Latitude and longitude arrays must have the same length, "
            f"got {lat.size} and {lon.size}"
        )
    if lat.size == 0:
        return np.zeros(0, dtype=float), np.zeros(0, dtype=float)

    mean_lat = lat.mean()
    cos_mean_lat = np.cos(mean_lat * (np.pi / 180))
    LOGGER.debug(f"Projecting {lat.size} points around mean latitude {mean_lat:.6f}")

    lat_rad = lat * (np.pi / 180)
    lon_rad = lon * (np.pi / 180)
    x = EARTH_RADIUS_M * lon_rad * cos_mean_lat
    y = EARTH_RADIUS_M * lat_rad
    return x, y
