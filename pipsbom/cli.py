"""
Command-line interface for pipsbom.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from pipsbom.config import load_config
from pipsbom.__version__ import __version__
from pipsbom.context import PipSbomContext
from pipsbom.exceptions import ConfigError, PipSbomError
from pipsbom.utils.logger import get_logger, level_for_verbosity, setup_logging
from pipsbom.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="PIPSBOM_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="PIPSBOM_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="pipsbom",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """pipsbom: virtual environment and checksum helpers for pip SBOMs.

    \b
    Available commands:
      pipsbom venv [PATH]          Locate the project's virtual environment
      pipsbom root [PATH]          Check that PATH is an analyzable root module
      pipsbom checksum NAME        Resolve a package checksum from PyPI

    Use ``pipsbom COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose)

    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    pipsbom_ctx = PipSbomContext()
    pipsbom_ctx.config_path = config or loaded_config.source_path
    pipsbom_ctx.color = color
    pipsbom_ctx.verbose = verbose
    pipsbom_ctx.config = loaded_config
    ctx.obj = pipsbom_ctx

    logger.debug("pipsbom v%s", __version__)
    logger.debug("Config path: %s", pipsbom_ctx.config_path)
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from pipsbom.commands.venv import venv  # noqa: E402
from pipsbom.commands.root import root  # noqa: E402
from pipsbom.commands.checksum import checksum  # noqa: E402

cli.add_command(venv)
cli.add_command(root)
cli.add_command(checksum)


def main() -> int:
    """Main entry point for the pipsbom CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except PipSbomError as exc:
        print_error(str(exc))
        logger.debug(
            "PipSbomError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except SystemExit as exc:
        # Commands exit with their own status code
        if exc.code is None:
            return 0
        return exc.code if isinstance(exc.code, int) else 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
