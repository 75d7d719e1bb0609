"""
Filesystem utilities for pipsbom.

This module provides the existence probe used by every discovery step, a
depth-first directory walker whose visitor can stop the walk early, and a
size-limited text reader for manifests. Access failures are normalized to
``FileOperationError`` (or its ``TraversalError`` subclass for walks).
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from pipsbom.constants import MAX_FILE_SIZE
from pipsbom.utils.logger import get_logger
from pipsbom.exceptions import FileOperationError, TraversalError

logger = get_logger("filesystem")

PathLike = Union[str, Path]


class WalkAction(Enum):
    """Decision returned by a :func:`walk_directories` visitor."""

    CONTINUE = "continue"
    STOP_FOUND = "stop-found"
    STOP_ERROR = "stop-error"


class WalkOutcome(Enum):
    """How a :func:`walk_directories` call ended."""

    COMPLETED = "completed"
    FOUND = "found"


#: Visitor signature: receives each directory, returns what to do next.
DirectoryVisitor = Callable[[Path], WalkAction]


def exists(path: PathLike) -> bool:
    """Return True if ``path`` exists on disk.

    Broken symlinks and paths that cannot be stat'ed count as absent.
    """
    try:
        return Path(path).exists()
    except OSError:
        return False


def walk_directories(root: PathLike, visitor: DirectoryVisitor) -> WalkOutcome:
    """Walk every directory under ``root`` depth-first, root included.

    Children are visited in sorted order so results are deterministic.
    Symlinked directories are not followed.

    Args:
        root: Directory to start from.
        visitor: Called once per directory. ``STOP_FOUND`` ends the walk
            successfully, ``STOP_ERROR`` aborts it.

    Returns:
        ``WalkOutcome.FOUND`` when the visitor stopped the walk,
        ``WalkOutcome.COMPLETED`` when every directory was visited.

    Raises:
        TraversalError: A directory could not be listed, or the visitor
            returned ``STOP_ERROR``.
    """
    start = Path(root)

    def _on_error(exc: OSError) -> None:
        raise TraversalError(
            f"Cannot walk directory: {exc}",
            file_path=exc.filename or str(start),
            original_error=exc,
        ) from exc

    if not start.is_dir():
        raise TraversalError(
            f"Not a directory: {start}",
            file_path=str(start),
        )

    for dirpath, dirnames, _filenames in os.walk(start, onerror=_on_error):
        dirnames.sort()
        current = Path(dirpath)
        action = visitor(current)

        if action is WalkAction.STOP_FOUND:
            logger.debug("Walk stopped at %s", current)
            return WalkOutcome.FOUND
        if action is WalkAction.STOP_ERROR:
            raise TraversalError(
                f"Walk aborted at {current}",
                file_path=str(current),
            )

    return WalkOutcome.COMPLETED


def _validated_file(path: Path) -> Path:
    """Validate that ``path`` is an existing regular file and resolve it."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Safely read a text file with optional size limits.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc
