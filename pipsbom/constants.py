"""
Centralized constants for pipsbom.

This module defines immutable configuration values used across pipsbom,
including filesystem conventions, network settings, requirement heuristics,
and logging formats. All values are intended to be treated as read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = "pipsbom/{version}"

# ---------------------------------------------------------------------------
# PyPI endpoints
# ---------------------------------------------------------------------------

#: Base URL for the PyPI JSON API.
PYPI_JSON_API: Final[str] = "https://pypi.org/pypi/{package}/json"

#: Algorithm label attached to checksums taken from PyPI digests.
CHECKSUM_ALGORITHM: Final[str] = "SHA256"

# ---------------------------------------------------------------------------
# HTTP configuration
# ---------------------------------------------------------------------------

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[int] = 30

#: Maximum number of retries for failed HTTP requests.
DEFAULT_MAX_RETRIES: Final[int] = 3

# ---------------------------------------------------------------------------
# Root module manifests
# ---------------------------------------------------------------------------

MANIFEST_SETUP_PY: Final[str] = "setup.py"
MANIFEST_SETUP_CFG: Final[str] = "setup.cfg"

#: Manifests whose presence marks a directory as an analysis root.
ROOT_MANIFESTS: Final[Sequence[str]] = (MANIFEST_SETUP_CFG, MANIFEST_SETUP_PY)

#: Requirements manifest read when none is given explicitly.
DEFAULT_MANIFEST: Final[str] = "requirements.txt"

# ---------------------------------------------------------------------------
# Virtual environment conventions
# ---------------------------------------------------------------------------

#: Environment variable set by an activated virtual environment.
VIRTUAL_ENV: Final[str] = "VIRTUAL_ENV"

MODULE_DOT_VENV: Final[str] = ".venv"
MODULE_VENV: Final[str] = "venv"

#: Conventional environment directories, in priority order.
DEFAULT_VENV_DIRS: Final[Sequence[str]] = (MODULE_DOT_VENV, MODULE_VENV)

#: Marker file written at the top of every virtual environment.
PYVENV_CFG: Final[str] = "pyvenv.cfg"

# ---------------------------------------------------------------------------
# Wheel metadata
# ---------------------------------------------------------------------------

#: Metadata file inside a ``*.dist-info`` directory carrying build tags.
WHEEL_METADATA_FILE: Final[str] = "WHEEL"

#: Key (case-insensitive) of build tag lines in wheel metadata.
WHEEL_TAG_KEY: Final[str] = "tag"

# ---------------------------------------------------------------------------
# Requirement sufficiency heuristics
# ---------------------------------------------------------------------------

#: A root manifest is complete when it declares exactly this many modules.
DEFAULT_ROOT_MODULE_COUNT: Final[int] = 1

#: A dependency manifest is complete when it declares more than this many.
DEFAULT_DEPENDENCY_MODULE_THRESHOLD: Final[int] = 3

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading manifest files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
