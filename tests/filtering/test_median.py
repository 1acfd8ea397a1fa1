"""
Tests for agcombine_filter.filtering.median module.
"""

from __future__ import annotations

import numpy as np
import pytest

from agcombine_filter.filtering.median import median


@pytest.mark.parametrize(
    "values,expected",
    [
        ([3.0, 1.0, 2.0], 2.0),
        ([5.0, 1.0, 4.0, 2.0], 3.0),
        ([7.0], 7.0),
        ([-1.0, -5.0], -3.0),
        ([], 0.0),
        (np.array([1.0, 2.0, 3.0, 4.0, 100.0]), 3.0),
    ],
)
def test_median(values, expected):
    assert median(values) == pytest.approx(expected)


def test_median_does_not_mutate_input():
    values = [9.0, 1.0, 5.0]
    array = np.array(values)
    median(values)
    median(array)
    assert values == [9.0, 1.0, 5.0]
    assert np.array_equal(array, [9.0, 1.0, 5.0])


def test_median_returns_python_float():
    assert isinstance(median(np.array([1, 2, 3])), float)
