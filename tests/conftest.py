"""
Common pytest fixtures for the filter tests.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so random layouts are reproducible."""
    return np.random.default_rng(20240611)


@pytest.fixture
def grid_with_spike() -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """5x5 grid at 1 m spacing, all values 10 except 100 in the centre."""
    gx, gy = np.meshgrid(np.arange(5.0), np.arange(5.0), indexing="ij")
    x = gx.ravel()
    y = gy.ravel()
    values = np.full(x.size, 10.0)
    values[(x == 2) & (y == 2)] = 100.0
    return x, y, values


@pytest.fixture
def scattered_field(
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Random points over a 100 m square with noisy values and a few spikes."""
    n = 300
    x = rng.uniform(0.0, 100.0, n)
    y = rng.uniform(0.0, 100.0, n)
    values = rng.normal(10.0, 1.5, n)
    spikes = rng.choice(n, size=15, replace=False)
    values[spikes] *= rng.choice([0.2, 3.0], size=spikes.size)
    return x, y, values


@pytest.fixture
def yield_frame() -> pd.DataFrame:
    """Small harvest table with latitude/longitude columns."""
    lat = 40.8 + np.repeat(np.arange(4), 4) * 1e-4
    lon = -96.7 + np.tile(np.arange(4), 4) * 1e-4
    values = np.full(lat.size, 12.0)
    values[5] = 60.0
    return pd.DataFrame(
        {
            "Latitude": lat,
            "Longitude": lon,
            "Yield": values,
            "Moisture": np.linspace(14.0, 16.0, lat.size),
        }
    )
