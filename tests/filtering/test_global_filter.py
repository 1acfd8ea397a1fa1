"""
Tests for agcombine_filter.filtering.global_filter module.
"""

from __future__ import annotations

import numpy as np
import pytest

from agcombine_filter.filtering.global_filter import global_filter, median_bounds


class TestGlobalFilter:
    """Tests for global_filter function."""

    @pytest.mark.parametrize(
        "variation_pct,expected",
        [
            (0.0, [False, False, True, False, False]),
            (34.0, [False, True, True, True, False]),
            (100.0, [True, True, True, True, True]),
        ],
    )
    def test_bounds_around_median(self, variation_pct, expected):
        values = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        assert global_filter(values, variation_pct).tolist() == expected

    def test_bounds_are_closed(self):
        """Values exactly on the bounds are kept."""
        values = np.array([5.0, 10.0, 10.0, 15.0, 15.5])
        assert global_filter(values, 50.0).tolist() == [True, True, True, True, False]

    def test_empty_input(self):
        result = global_filter(np.array([]), 10.0)
        assert result.dtype == bool
        assert result.size == 0

    def test_accepts_plain_lists(self):
        assert global_filter([10.0, 10.5, 30.0], 10.0).tolist() == [True, True, False]

    def test_zero_median_rejects_every_nonzero_value(self):
        """A zero median collapses the tolerance to nothing."""
        values = np.array([0.0, 0.0, 0.0, 1.0, -1.0])
        assert global_filter(values, 50.0).tolist() == [True, True, True, False, False]

    def test_negative_median_inverts_bounds(self):
        """With a negative median the bounds swap and nothing can pass."""
        values = np.array([-10.0, -9.0, -1.0])
        assert global_filter(values, 10.0).tolist() == [False, False, False]


class TestMedianBounds:
    """Tests for median_bounds function."""

    @pytest.mark.parametrize(
        "centre,variation_pct,expected",
        [
            (10.0, 10.0, (9.0, 11.0)),
            (10.0, 0.0, (10.0, 10.0)),
            (0.0, 50.0, (0.0, 0.0)),
            (-10.0, 10.0, (-9.0, -11.0)),
        ],
    )
    def test_median_bounds(self, centre, variation_pct, expected):
        assert median_bounds(centre, variation_pct) == pytest.approx(expected)
