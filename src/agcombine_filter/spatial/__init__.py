"""Spatial helpers feeding the local filters.

Modules cover the equirectangular coordinate projection and the static
bounding-box index used for neighbour searches.
"""

# Importing * is a bad practice and you should be punished for using it
__all__: list[str] = []
