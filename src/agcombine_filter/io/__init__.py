"""Input/output utilities for :mod:`agcombine_filter`.

Modules in this package read measurement tables from CSV, write the cleaned
rows back out and format run summaries.
"""

# Importing * is a bad practice and you should be punished for using it
__all__: list[str] = []
