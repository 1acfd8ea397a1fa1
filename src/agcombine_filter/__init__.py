"""Public interface for the agcombine_filter package.

The package removes spatial outliers from geo-referenced measurement data
(for example per-point harvest yield) with a global median filter followed by
an isotropic or anisotropic local median filter.
"""

# Importing * is a bad practice and you should be punished for using it
__all__ = []
