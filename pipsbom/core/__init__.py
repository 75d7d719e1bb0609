"""
Core functionality exports for pipsbom.

    from pipsbom.core import search_venv, get_package_checksum
"""

from __future__ import annotations

from pipsbom.core.manifest import load_modules
from pipsbom.core.pypi_index import PyPIChecksumIndex
from pipsbom.core.checksum import TagOutcome, get_package_checksum, resolve_tag
from pipsbom.core.wheel import find_wheel_metadata, get_wheel_distribution_last_tag
from pipsbom.core.root import (
    RequirementThresholds,
    is_requirement_met,
    is_valid_root_module,
)
from pipsbom.core.venv import (
    get_venv_from_env,
    has_default_venv,
    scan_pyvenv_cfg,
    search_venv,
)

__all__ = [
    "load_modules",
    "is_valid_root_module",
    "is_requirement_met",
    "RequirementThresholds",
    "search_venv",
    "get_venv_from_env",
    "has_default_venv",
    "scan_pyvenv_cfg",
    "get_wheel_distribution_last_tag",
    "find_wheel_metadata",
    "get_package_checksum",
    "resolve_tag",
    "TagOutcome",
    "PyPIChecksumIndex",
]
