"""Venv command implementation for pipsbom.

Reports the virtual environment associated with a project directory::

    $ pipsbom venv path/to/project
    $ pipsbom venv --format json
"""

from __future__ import annotations

import sys
import json
import click
from pathlib import Path

from pipsbom.core import search_venv
from pipsbom.exceptions import PipSbomError
from pipsbom.context import pass_context, PipSbomContext
from pipsbom.utils import (
    get_logger,
    get_raw_console,
    print_error,
    print_key_values,
    print_warning,
)

logger = get_logger("commands.venv")


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def venv(ctx: PipSbomContext, path: Path, format: str) -> None:
    """Locate the virtual environment of a project.

    Checks the active environment (``VIRTUAL_ENV``) first, then ``.venv``
    and ``venv`` under PATH, then scans PATH for ``pyvenv.cfg``.

    Exits 0 when an environment is found, 1 otherwise.
    """
    try:
        env = search_venv(path)
    except PipSbomError as e:
        print_error(f"{e}")
        sys.exit(1)

    site_packages = [str(p) for p in env.site_packages()]

    if format == "json":
        payload = env.to_dict()
        payload["site_packages"] = site_packages
        get_raw_console().print_json(json.dumps(payload))
    elif env.found:
        print_key_values(
            {
                "Name": env.name,
                "Path": env.path,
                "site-packages": ", ".join(site_packages) or "-",
            },
            title="Virtual environment",
        )
    else:
        print_warning(f"No virtual environment found for {path}")

    sys.exit(0 if env.found else 1)
