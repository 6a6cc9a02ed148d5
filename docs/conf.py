"""Sphinx configuration for chartly docs."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

project = "chartly"
copyright = "2026, chartly developers"
author = "chartly developers"
release = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "myst_parser",
    "nbsphinx",
]

root_doc = "index"
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

html_theme = "sphinx_rtd_theme"

# MyST settings
myst_enable_extensions = ["colon_fence"]

# nbsphinx settings
nbsphinx_execute = "never"

# autodoc: document the public API re-exported from chartly/__init__.py
autodoc_member_order = "bysource"
autodoc_typehints = "description"
napoleon_numpy_docstring = True
