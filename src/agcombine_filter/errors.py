"""Errors raised for invalid input data or parameters.

Every error is scoped to a single filtering invocation and is reported to the
caller straight away; none of them is transient, so nothing is retried.
"""

from __future__ import annotations


class FilterInputError(ValueError):
    """Base class for caller configuration or data errors."""


class DimensionMismatch(FilterInputError):
    """Coordinate or value arrays of unequal length."""


class MissingCoordinates(FilterInputError):
    """Neither a latitude/longitude pair nor an X/Y pair is present."""


class NoNumericValues(FilterInputError):
    """The chosen value column has no usable numeric entries."""


class UnknownColumn(FilterInputError):
    """The chosen value column is absent from the dataset."""


class InvalidParameter(FilterInputError):
    """A filter parameter lies outside its allowed range."""
