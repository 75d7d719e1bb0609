"""Package checksum resolution.

Combines the build tag of a locally installed wheel with a package index
lookup. The local tag is only a hint: a missing or unreadable wheel
metadata file downgrades the lookup to "no tag" and resolution carries on.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable, NamedTuple, Optional, Union

from pipsbom.models import ChecksumRecord
from pipsbom.utils.logger import get_logger
from pipsbom.core.wheel import get_wheel_distribution_last_tag
from pipsbom.exceptions import WheelNotFoundError, WheelOpenError

logger = get_logger("core.checksum")

PathLike = Union[str, Path]

#: ``(package_name, package_json_url, use_tag, wheel_tag) -> ChecksumRecord``
ChecksumLookup = Callable[[str, str, bool, str], ChecksumRecord]


class TagOutcome(Enum):
    """Result of reading the build tag from wheel metadata."""

    FOUND = "found"
    EMPTY = "empty"
    NOT_FOUND = "not-found"
    UNREADABLE = "unreadable"


class TagHint(NamedTuple):
    use_tag: bool
    tag: str
    outcome: TagOutcome


def resolve_tag(package_wheel_path: Optional[PathLike]) -> TagHint:
    """Read the wheel build tag, turning lookup failures into outcomes.

    A ``None`` or empty path counts as a missing wheel.
    """
    if not package_wheel_path:
        return TagHint(False, "", TagOutcome.NOT_FOUND)

    try:
        tag = get_wheel_distribution_last_tag(package_wheel_path)
    except WheelNotFoundError:
        logger.debug("Wheel metadata not found: %s", package_wheel_path)
        return TagHint(False, "", TagOutcome.NOT_FOUND)
    except WheelOpenError as exc:
        logger.warning("Cannot read wheel metadata %s: %s", package_wheel_path, exc)
        return TagHint(False, "", TagOutcome.UNREADABLE)

    if not tag:
        return TagHint(False, "", TagOutcome.EMPTY)
    return TagHint(True, tag, TagOutcome.FOUND)


def get_package_checksum(
    package_name: str,
    package_json_url: str,
    package_wheel_path: Optional[PathLike],
    lookup: ChecksumLookup,
) -> ChecksumRecord:
    """Resolve the checksum of ``package_name``.

    Args:
        package_name: Distribution name.
        package_json_url: Index endpoint for the package, passed through to
            ``lookup`` unchanged.
        package_wheel_path: ``WHEEL`` metadata file of the installed
            distribution; it may be missing or ``None``.
        lookup: Index lookup, e.g. a
            :class:`~pipsbom.core.pypi_index.PyPIChecksumIndex`.

    Returns:
        Whatever ``lookup`` returns for the best locally derived hint.
    """
    hint = resolve_tag(package_wheel_path)
    logger.debug(
        "Resolving checksum for %s (tag outcome=%s, tag=%r)",
        package_name,
        hint.outcome.value,
        hint.tag,
    )
    return lookup(package_name, package_json_url, hint.use_tag, hint.tag)
