"""Configuration file loader for pipsbom.

Supports two formats:

- ``pipsbom.toml``: settings under ``[pipsbom]`` table
- ``pyproject.toml``: settings under ``[tool.pipsbom]`` table

Discovery order:

1. Explicit path from ``--config`` or ``PIPSBOM_CONFIG``
2. ``pipsbom.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.pipsbom]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``pipsbom.toml``)::

    [pipsbom]
    root_module_count = 1
    dependency_module_threshold = 3
    index_url = "https://pypi.org/pypi/{package}/json"
    timeout = 30
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from pipsbom.exceptions import ConfigError
from pipsbom.utils.logger import get_logger
from pipsbom.core.root import RequirementThresholds
from pipsbom.constants import (
    PYPI_JSON_API,
    DEFAULT_TIMEOUT,
    DEFAULT_ROOT_MODULE_COUNT,
    DEFAULT_DEPENDENCY_MODULE_THRESHOLD,
)

logger = get_logger("config")

_INT_OPTIONS = ("root_module_count", "dependency_module_threshold", "timeout")
_STR_OPTIONS = ("index_url",)


@dataclass
class PipSbomConfig:
    """Parsed and validated pipsbom configuration.

    Attributes:
        root_module_count: Exact module count a root manifest must declare.
        dependency_module_threshold: A dependency manifest must declare
            more modules than this.
        index_url: PyPI JSON endpoint template containing ``{package}``.
        timeout: HTTP timeout in seconds.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    root_module_count: int = DEFAULT_ROOT_MODULE_COUNT
    dependency_module_threshold: int = DEFAULT_DEPENDENCY_MODULE_THRESHOLD
    index_url: str = PYPI_JSON_API
    timeout: int = DEFAULT_TIMEOUT

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    @property
    def thresholds(self) -> RequirementThresholds:
        return RequirementThresholds(
            root_module_count=self.root_module_count,
            dependency_module_threshold=self.dependency_module_threshold,
        )

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration options (without ``source_path``) for logging."""
        return {
            "root_module_count": self.root_module_count,
            "dependency_module_threshold": self.dependency_module_threshold,
            "index_url": self.index_url,
            "timeout": self.timeout,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    pipsbom_toml = cwd / "pipsbom.toml"
    if pipsbom_toml.is_file():
        logger.debug("Found pipsbom.toml: %s", pipsbom_toml)
        return pipsbom_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_pipsbom_section(pyproject_toml):
        logger.debug("Found [tool.pipsbom] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_pipsbom_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.pipsbom] section.

    Unreadable or invalid files count as not having one.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return "pipsbom" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> PipSbomConfig:
    """Load and validate pipsbom configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`PipSbomConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        return PipSbomConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("pipsbom", {})
    else:
        section = raw.get("pipsbom", {})

    if not section:
        logger.debug("Config file found but no pipsbom section, using defaults")
        return PipSbomConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> PipSbomConfig:
    """Validate a ``[pipsbom]`` / ``[tool.pipsbom]`` table.

    Raises:
        ConfigError: Unknown keys, wrong types, or out-of-range values.
    """
    config = PipSbomConfig()

    unknown = set(section.keys()) - set(_INT_OPTIONS) - set(_STR_OPTIONS)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    for option in _INT_OPTIONS:
        if option not in section:
            continue
        val = section[option]
        # bool is a subclass of int
        if isinstance(val, bool) or not isinstance(val, int):
            raise ConfigError(
                f"{option} must be an integer, got {type(val).__name__}",
                config_path=config_path,
                option=option,
            )
        if val < 0:
            raise ConfigError(
                f"{option} must not be negative, got {val}",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, val)

    if "index_url" in section:
        val = section["index_url"]
        if not isinstance(val, str) or "{package}" not in val:
            raise ConfigError(
                "index_url must be a string containing '{package}'",
                config_path=config_path,
                option="index_url",
            )
        config.index_url = val

    return config
