"""
Logging utilities for pipsbom.

All pipsbom loggers live under the ``pipsbom`` namespace. Library code only
ever calls :func:`get_logger`; the CLI calls :func:`setup_logging` once with
a level derived from its ``-v`` flags.
"""

from __future__ import annotations

import os
import sys
import copy
import logging
import threading
from typing import IO, Optional

from pipsbom.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

ROOT_LOGGER_NAME = "pipsbom"

_logging_configured: bool = False
_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Logging formatter that colors the level name on terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
        stream: Optional[IO[str]] = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color
        self.stream = stream

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color and self.use_color and self._should_use_color(self.stream):
            # Records are shared between handlers; color a copy only.
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)

    @staticmethod
    def _should_use_color(stream: Optional[IO[str]] = None) -> bool:
        """Determine whether ANSI colors should be emitted."""
        if os.environ.get("NO_COLOR"):
            return False
        if os.environ.get("CI"):
            return False
        try:
            return (stream or sys.stderr).isatty()
        except (AttributeError, OSError, ValueError):
            return False


def level_for_verbosity(verbose: int) -> int:
    """Map a count of ``-v`` flags to a logging level.

    0 gives WARNING, 1 gives INFO, anything higher gives DEBUG.
    """
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure the ``pipsbom`` logger hierarchy.

    Safe to call repeatedly: existing handlers are replaced, never stacked.

    Args:
        level: Logging level (e.g., ``logging.INFO``, ``logging.DEBUG``).
        verbose: Use the timestamped format including logger names.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.handlers.clear()
        root_logger.setLevel(level)

        target = stream or sys.stderr
        handler = logging.StreamHandler(target)
        handler.setLevel(level)
        handler.setFormatter(
            ColoredFormatter(
                LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
                datefmt=LOG_DATE_FORMAT,
                use_color=not os.environ.get("NO_COLOR"),
                stream=target,
            )
        )

        root_logger.addHandler(handler)
        root_logger.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger within the pipsbom namespace.

    Args:
        name: Logger name, either relative (``"core.venv"``) or already
            prefixed with ``pipsbom.``.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return _library_safe(logging.getLogger(ROOT_LOGGER_NAME))
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return _library_safe(logging.getLogger(name))
    return _library_safe(logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"))


def _library_safe(logger: logging.Logger) -> logging.Logger:
    """Silence "no handler" warnings while logging is unconfigured."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return logger


def is_logging_configured() -> bool:
    """Return True if pipsbom logging has been configured."""
    return _logging_configured


def disable_logging() -> None:
    """Disable all pipsbom logging output."""
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.handlers.clear()
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.NOTSET)
        _logging_configured = False
