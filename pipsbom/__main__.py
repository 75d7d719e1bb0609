"""
Executable module for pipsbom.

Running:
    python -m pipsbom

is equivalent to:
    pipsbom
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Write diagnostics for a CLI that failed to import."""
    sys.stderr.write("pipsbom CLI could not be loaded.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from pipsbom.__version__ import __version__

        sys.stderr.write(f"pipsbom version: {__version__}\n")
    except Exception:
        sys.stderr.write("pipsbom version: <unknown>\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """
    Main entrypoint when executing `python -m pipsbom`.

    Returns:
        Exit code returned by the CLI.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from pipsbom.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
