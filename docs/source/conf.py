"""Sphinx documentation configuration for logstamp."""

from __future__ import annotations

import sys
from pathlib import Path

# Make package importable for autodoc (src layout)
REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT / "src"))

from logstamp import __version__  # noqa: E402

# -- Project information -----------------------------------------------------

project = "logstamp"
copyright = "2026, logstamp contributors"
author = "logstamp contributors"
release = __version__

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
]

# Google style docstrings throughout
napoleon_numpy_docstring = False

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"
