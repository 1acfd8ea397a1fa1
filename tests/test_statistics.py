"""
Tests for agcombine_filter.statistics module.
"""

from __future__ import annotations

import numpy as np
import pytest

from agcombine_filter.statistics import (
    StatValues,
    calculate_stats,
    stats_table,
    value_histogram,
)


class TestCalculateStats:
    """Tests for calculate_stats function."""

    def test_textbook_values(self):
        stats = calculate_stats([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        assert stats.count == 8
        assert stats.min == 2.0
        assert stats.max == 9.0
        assert stats.mean == pytest.approx(5.0)
        assert stats.std_dev == pytest.approx(np.sqrt(32.0 / 7.0))
        assert stats.std_dev == pytest.approx(2.138, abs=1e-3)
        assert stats.cv == pytest.approx(42.76, abs=1e-2)

    def test_empty(self):
        assert calculate_stats([]) == StatValues(0.0, 0.0, 0.0, 0.0, 0.0, 0)

    def test_single_value_has_no_spread(self):
        stats = calculate_stats(np.array([3.5]))
        assert stats.std_dev == 0.0
        assert stats.cv == 0.0
        assert stats.count == 1

    def test_zero_mean_gives_zero_cv(self):
        stats = calculate_stats([-1.0, 1.0])
        assert stats.mean == 0.0
        assert stats.std_dev > 0.0
        assert stats.cv == 0.0

    def test_negative_mean_uses_magnitude(self):
        stats = calculate_stats([-2.0, -4.0])
        assert stats.cv == pytest.approx(stats.std_dev / 3.0 * 100)
        assert stats.cv > 0.0


class TestStatsTable:
    """Tests for stats_table function."""

    def test_before_after_columns(self):
        before = calculate_stats([1.0, 2.0, 3.0])
        after = calculate_stats([2.0])
        table = stats_table(before, after)
        assert list(table.columns) == ["before", "after"]
        assert list(table.index) == ["count", "min", "max", "mean", "std_dev", "cv"]
        assert table.loc["count", "before"] == 3
        assert table.loc["mean", "after"] == 2.0


class TestValueHistogram:
    """Tests for value_histogram function."""

    def test_equal_width_bins(self):
        hist = value_histogram(np.arange(10.0), num_bins=5)
        assert hist["count"].tolist() == [2, 2, 2, 2, 2]
        assert hist["x0"].iloc[0] == 0.0
        assert hist["x1"].iloc[-1] == pytest.approx(9.0)

    def test_maximum_goes_in_last_bin(self):
        hist = value_histogram([0.0, 1.0, 2.0], num_bins=2)
        assert hist["count"].tolist() == [1, 2]

    def test_default_bin_count(self):
        hist = value_histogram(np.linspace(0.0, 1.0, 101))
        assert len(hist) == 20
        assert hist["count"].sum() == 101

    def test_constant_values_single_bin(self):
        hist = value_histogram([4.0, 4.0, 4.0])
        assert hist.to_dict("list") == {"x0": [4.0], "x1": [4.0], "count": [3]}

    def test_empty(self):
        hist = value_histogram([])
        assert hist.empty
        assert list(hist.columns) == ["x0", "x1", "count"]
