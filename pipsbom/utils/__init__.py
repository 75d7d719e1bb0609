"""
Utility helpers for pipsbom.

This package provides reusable utilities used across pipsbom, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem probes and directory walking
- HTTP client utilities

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from pipsbom.utils.filesystem import (
    WalkAction,
    WalkOutcome,
    exists,
    safe_read_file,
    walk_directories,
)

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from pipsbom.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from pipsbom.utils.console import (
    get_raw_console,
    print_error,
    print_key_values,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# HTTP utilities
# ---------------------------------------------------------------------------

from pipsbom.utils.http import HTTPClient

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_warning",
    "print_key_values",
    "get_raw_console",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "level_for_verbosity",
    "is_logging_configured",
    # Filesystem
    "exists",
    "safe_read_file",
    "walk_directories",
    "WalkAction",
    "WalkOutcome",
    # HTTP
    "HTTPClient",
]
