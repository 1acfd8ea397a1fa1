"""Outlier filters for geo-referenced measurements.

Modules cover the global median filter and the isotropic and anisotropic
local median filters, all sharing the exact median and neighbour search
helpers.
"""

# Importing * is a bad practice and you should be punished for using it
__all__: list[str] = []
