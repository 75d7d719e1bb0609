"""
pipsbom: virtual environment and checksum helpers for pip SBOMs

pipsbom inspects a Python project directory and gathers what an SBOM
generator needs from the pip ecosystem:

    • Root module validation (``setup.py`` / ``setup.cfg``)
    • Requirement sufficiency checks over manifest declarations
    • Virtual environment discovery (active env, ``.venv``/``venv``, ``pyvenv.cfg``)
    • Package checksum resolution from PyPI, guided by local wheel tags
"""

from __future__ import annotations

from pipsbom.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "pipsbom Contributors"
__license__ = "Apache-2.0"
__description__ = "Virtual environment discovery and checksum resolution for pip SBOMs."

__all__ = [
    "__version__",
]
