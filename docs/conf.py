"""Configuration file for the Sphinx documentation builder."""

from __future__ import annotations

import importlib.metadata
import sys
from datetime import datetime
from pathlib import Path

# -- Path setup --------------------------------------------------------------

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

# -- Project information -----------------------------------------------------

project = "agcombine_filter"
author = "agcombine_filter developers"
current_year = datetime.now().year
copyright = f"{current_year}, {author}"  # noqa: A001

try:
    release = importlib.metadata.version("agcombine-filter")
except importlib.metadata.PackageNotFoundError:
    release = "0.1.0"
version = release

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx_autodoc_typehints",
    "myst_parser",
]

autosummary_generate = True
autodoc_member_order = "bysource"
autodoc_default_options = {
    "members": True,
    "undoc-members": False,
    "show-inheritance": True,
}
autodoc_typehints = "description"
suppress_warnings = ["autosummary", "ref.python"]
napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_use_param = False
napoleon_use_rtype = False

exclude_patterns: list[str] = ["_build", "Thumbs.db", ".DS_Store"]

nitpicky = False

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"
html_title = "agcombine_filter documentation"
html_theme_options = {
    "sidebar_hide_name": True,
}

# -- Intersphinx configuration ----------------------------------------------

intersphinx_mapping: dict[str, tuple[str, str | None]] = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "pandas": ("https://pandas.pydata.org/pandas-docs/stable/", None),
}
