"""Root module validation and requirement sufficiency checks.

Both checks gate whether a directory is analyzed at all: a directory is a
root module when it carries a setup manifest, and a manifest is "complete
enough" when it declares the expected number of modules.
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass
from typing import Optional, Union

from pipsbom.utils.filesystem import exists
from pipsbom.utils.logger import get_logger
from pipsbom.core.manifest import load_modules
from pipsbom.constants import (
    ROOT_MANIFESTS,
    DEFAULT_ROOT_MODULE_COUNT,
    DEFAULT_DEPENDENCY_MODULE_THRESHOLD,
)

logger = get_logger("core.root")


@dataclass(frozen=True)
class RequirementThresholds:
    """Module counts at which a manifest counts as sufficiently resolved.

    Attributes:
        root_module_count: A root manifest must declare exactly this many.
        dependency_module_threshold: A dependency manifest must declare
            strictly more than this many.
    """

    root_module_count: int = DEFAULT_ROOT_MODULE_COUNT
    dependency_module_threshold: int = DEFAULT_DEPENDENCY_MODULE_THRESHOLD


def is_valid_root_module(path: Union[str, Path]) -> bool:
    """Return True if ``setup.py`` or ``setup.cfg`` exists directly in ``path``.

    A missing directory yields False, same as a directory without manifests.
    """
    root = Path(path)
    return any(exists(root / manifest) for manifest in ROOT_MANIFESTS)


def is_requirement_met(
    root: bool,
    data: str,
    thresholds: Optional[RequirementThresholds] = None,
) -> bool:
    """Decide whether a manifest declares enough modules to proceed.

    A False result means "insufficient data", not an error.

    Args:
        root: Whether the manifest belongs to the root module.
        data: Raw manifest text.
        thresholds: Count heuristics; defaults to ``== 1`` for root
            manifests and ``> 3`` for dependency manifests.
    """
    limits = thresholds or RequirementThresholds()
    count = len(load_modules(data))

    if root:
        met = count == limits.root_module_count
    else:
        met = count > limits.dependency_module_threshold

    logger.debug("Requirement check (root=%s): %d modules, met=%s", root, count, met)
    return met
