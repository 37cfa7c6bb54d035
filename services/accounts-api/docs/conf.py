"""Sphinx configuration for the accounts service API reference."""

from __future__ import annotations

import os
import sys

SERVICE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
# accounts_api and the shared platform_schemas package live in separate trees
sys.path[:0] = [SERVICE_DIR, os.path.join(SERVICE_DIR, "..", "..", "libs", "python")]

project = "accounts-api"
release = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx_autodoc_typehints",
]

# docstrings use the NumPy "Parameters / Raises" sections
napoleon_numpy_docstring = True
napoleon_google_docstring = False
autodoc_member_order = "bysource"
