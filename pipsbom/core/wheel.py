"""Wheel metadata helpers.

Installed wheels leave a ``WHEEL`` file in their ``*.dist-info`` directory::

    Wheel-Version: 1.0
    Generator: bdist_wheel (0.41.2)
    Root-Is-Purelib: true
    Tag: py3-none-any

The build tag tells which release file of the package was installed, which
in turn selects the right digest from the package index.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from packaging.utils import canonicalize_name

from pipsbom.utils.filesystem import exists
from pipsbom.utils.logger import get_logger
from pipsbom.exceptions import WheelNotFoundError, WheelOpenError
from pipsbom.constants import WHEEL_METADATA_FILE, WHEEL_TAG_KEY

logger = get_logger("core.wheel")

PathLike = Union[str, Path]


def get_wheel_distribution_last_tag(package_wheel_path: PathLike) -> str:
    """Return the last ``Tag:`` value in a wheel metadata file.

    Each line is split on its first colon; a key equal to ``tag`` (any
    case) makes the trimmed remainder the current candidate, so the last
    such line wins. A file without tag lines yields ``""``.

    Raises:
        WheelNotFoundError: The file does not exist.
        WheelOpenError: The file exists but cannot be opened or read.
    """
    path = Path(package_wheel_path)
    if not exists(path):
        raise WheelNotFoundError(str(path))

    last_tag = ""
    try:
        with path.open("r", encoding="utf-8", errors="replace") as fh:
            for line in fh:
                key, sep, value = line.partition(":")
                if sep and key.lower() == WHEEL_TAG_KEY:
                    last_tag = value.strip()
    except OSError as exc:
        raise WheelOpenError(str(path), original_error=exc) from exc

    return last_tag


def find_wheel_metadata(
    site_packages: PathLike,
    name: str,
    version: Optional[str] = None,
) -> Optional[Path]:
    """Locate the ``WHEEL`` file of an installed distribution.

    Distribution directory names are compared after PEP 503 normalization,
    so ``Flask_Login`` matches ``flask_login-0.6.3.dist-info``.

    Args:
        site_packages: A ``site-packages`` directory.
        name: Distribution name.
        version: Installed version; any version matches when omitted.

    Returns:
        Path to the ``WHEEL`` file, or ``None`` when no installed
        distribution matches.
    """
    root = Path(site_packages)
    if not root.is_dir():
        return None

    wanted = canonicalize_name(name)
    for dist_info in sorted(root.glob("*.dist-info")):
        dist_name, _, dist_version = dist_info.name[: -len(".dist-info")].partition("-")
        if canonicalize_name(dist_name) != wanted:
            continue
        if version is not None and dist_version != version:
            continue

        candidate = dist_info / WHEEL_METADATA_FILE
        if candidate.is_file():
            return candidate
        logger.debug("%s has no %s file", dist_info, WHEEL_METADATA_FILE)

    return None
