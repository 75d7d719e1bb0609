"""Virtual environment discovery for a project root.

Three strategies are tried in order and the first hit wins:

1. The active environment named by ``VIRTUAL_ENV``. It reflects the
   interpreter actually in use, so it overrides anything on disk.
2. A conventional ``.venv`` or ``venv`` directory under the root (the
   hidden variant first).
3. A depth-first scan for a directory holding ``pyvenv.cfg``. The scan
   stops at the first match; one environment per project is assumed.

Typical usage::

    from pipsbom.core.venv import search_venv

    env = search_venv("path/to/project")
    if env.found:
        print(env.name, env.path)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional, Union

from pipsbom.utils.logger import get_logger
from pipsbom.models import EnvironmentReference
from pipsbom.utils.filesystem import (
    WalkAction,
    WalkOutcome,
    exists,
    walk_directories,
)
from pipsbom.constants import DEFAULT_VENV_DIRS, PYVENV_CFG, VIRTUAL_ENV

logger = get_logger("core.venv")

PathLike = Union[str, Path]


def get_venv_from_env(
    environ: Optional[Mapping[str, str]] = None,
) -> EnvironmentReference:
    """Report the active virtual environment from ``VIRTUAL_ENV``.

    The display name is the last ``/``-separated segment of the variable's
    value; the filesystem is never consulted.

    Args:
        environ: Environment mapping to read; defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    full_path = env.get(VIRTUAL_ENV, "")
    if not full_path:
        return EnvironmentReference.not_found()

    name = full_path.rstrip("/").split("/")[-1]
    if not name:
        logger.debug("Ignoring %s=%r: no directory name", VIRTUAL_ENV, full_path)
        return EnvironmentReference.not_found()

    return EnvironmentReference.located(name, full_path)


def has_default_venv(path: PathLike) -> EnvironmentReference:
    """Look for ``.venv`` then ``venv`` directly under ``path``."""
    for module in DEFAULT_VENV_DIRS:
        candidate = Path(path) / module
        if exists(candidate):
            return EnvironmentReference.located(module, os.path.abspath(candidate))
    return EnvironmentReference.not_found()


def has_pyvenv_cfg(path: PathLike) -> bool:
    """Return True if ``path`` directly contains ``pyvenv.cfg``."""
    return exists(Path(path) / PYVENV_CFG)


def scan_pyvenv_cfg(path: PathLike) -> EnvironmentReference:
    """Walk ``path`` for the first directory containing ``pyvenv.cfg``.

    Raises:
        TraversalError: Part of the tree could not be read.
    """
    match: Optional[Path] = None

    def _visit(directory: Path) -> WalkAction:
        nonlocal match
        if has_pyvenv_cfg(directory):
            match = directory
            return WalkAction.STOP_FOUND
        return WalkAction.CONTINUE

    outcome = walk_directories(path, _visit)
    if outcome is WalkOutcome.FOUND and match is not None:
        absolute = os.path.abspath(match)
        return EnvironmentReference.located(os.path.basename(absolute), absolute)
    return EnvironmentReference.not_found()


def search_venv(
    path: PathLike,
    environ: Optional[Mapping[str, str]] = None,
) -> EnvironmentReference:
    """Locate the virtual environment for the project rooted at ``path``.

    Args:
        path: Project root directory.
        environ: Environment mapping used for the ``VIRTUAL_ENV`` lookup;
            defaults to ``os.environ``.

    Returns:
        The first environment found, or an empty reference.

    Raises:
        TraversalError: The ``pyvenv.cfg`` scan hit an unreadable directory.
    """
    env = get_venv_from_env(environ)
    if env.found:
        logger.debug("Using active environment %s", env.path)
        return env

    env = has_default_venv(path)
    if env.found:
        logger.debug("Using conventional environment %s", env.path)
        return env

    env = scan_pyvenv_cfg(path)
    if env.found:
        logger.debug("Found %s in %s", PYVENV_CFG, env.path)
    else:
        logger.debug("No virtual environment under %s", path)
    return env
