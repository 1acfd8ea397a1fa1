"""
Tests for agcombine_filter.config module.
"""

from __future__ import annotations

import logging

import pytest

from agcombine_filter.config import DEFAULT_PARAMS, FilterMode, FilterParams
from agcombine_filter.errors import InvalidParameter


class TestFilterParams:
    """Tests for FilterParams dataclass."""

    def test_defaults(self):
        assert DEFAULT_PARAMS.value_column == "Yield"
        assert DEFAULT_PARAMS.global_variation_pct == 20.0
        assert DEFAULT_PARAMS.local_variation_pct == 15.0
        assert DEFAULT_PARAMS.radius == 30.0
        assert DEFAULT_PARAMS.mode is FilterMode.ANISOTROPIC
        assert DEFAULT_PARAMS.min_neighbours == 2
        assert DEFAULT_PARAMS.wedge_angle_deg == 45.0
        DEFAULT_PARAMS.validate()

    @pytest.mark.parametrize("mode", ["isotropic", "ISOTROPIC", FilterMode.ISOTROPIC])
    def test_mode_coercion(self, mode):
        assert FilterParams(mode=mode).mode is FilterMode.ISOTROPIC

    def test_unknown_mode(self):
        with pytest.raises(InvalidParameter, match="Unknown filter mode"):
            FilterParams(mode="radial")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"value_column": ""},
            {"global_variation_pct": -1.0},
            {"global_variation_pct": 101.0},
            {"local_variation_pct": -0.5},
            {"radius": -1.0},
            {"radius": float("nan")},
            {"min_neighbours": 0},
        ],
    )
    def test_validate_rejects_out_of_range(self, overrides):
        with pytest.raises(InvalidParameter):
            FilterParams(**overrides).validate()

    def test_wide_wedge_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            FilterParams(wedge_angle_deg=120.0).validate()
        assert "covers all directions" in caplog.text

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            FilterParams(radius=-5.0).validate()

    def test_infinite_radius_allowed(self):
        FilterParams(radius=float("inf")).validate()
