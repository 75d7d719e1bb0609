"""Checksum command implementation for pipsbom.

Resolves the PyPI checksum of a package, using the build tag of its
installed wheel when one can be found::

    # Explicit WHEEL metadata file
    $ pipsbom checksum requests --wheel .venv/lib/python3.12/site-packages/requests-2.31.0.dist-info/WHEEL

    # Find the installed wheel through the project's virtual environment
    $ pipsbom checksum requests --project . --format json
"""

from __future__ import annotations

import sys
import json
import click
from pathlib import Path
from typing import Optional

from pipsbom.exceptions import PipSbomError
from pipsbom.context import pass_context, PipSbomContext
from pipsbom.core import (
    PyPIChecksumIndex,
    find_wheel_metadata,
    get_package_checksum,
    search_venv,
)
from pipsbom.utils import (
    HTTPClient,
    get_logger,
    get_raw_console,
    print_error,
    print_key_values,
    print_warning,
)

logger = get_logger("commands.checksum")


@click.command()
@click.argument("name")
@click.option(
    "--wheel",
    "-w",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="WHEEL metadata file of the installed distribution.",
)
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root whose virtual environment holds the installed package.",
)
@click.option(
    "--package-version",
    default=None,
    help="Installed version to match when searching --project.",
)
@click.option(
    "--index-url",
    default=None,
    help="PyPI JSON endpoint for the package (default: from configuration).",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def checksum(
    ctx: PipSbomContext,
    name: str,
    wheel: Optional[Path],
    project: Optional[Path],
    package_version: Optional[str],
    index_url: Optional[str],
    format: str,
) -> None:
    """Resolve the checksum of package NAME."""
    try:
        wheel_path = wheel or _find_installed_wheel(name, project, package_version)
        package_url = index_url or ctx.config.index_url.format(package=name)

        with HTTPClient(timeout=ctx.config.timeout) as client:
            record = get_package_checksum(
                name,
                package_url,
                wheel_path,
                PyPIChecksumIndex(client, ctx.config.index_url),
            )
    except PipSbomError as e:
        print_error(f"{e}")
        sys.exit(1)

    if format == "json":
        payload = {"package": name, **record.to_dict()}
        get_raw_console().print_json(json.dumps(payload))
    else:
        print_key_values(
            {"Package": name, "Algorithm": record.algorithm, "Value": record.value or "-"},
            title="Checksum",
        )

    if record.is_empty:
        print_warning(f"No checksum resolved for {name}")
        sys.exit(1)


def _find_installed_wheel(
    name: str,
    project: Optional[Path],
    version: Optional[str],
) -> Optional[Path]:
    """Search the project's environment for the package's WHEEL file."""
    if project is None:
        return None

    env = search_venv(project)
    for site_packages in env.site_packages():
        found = find_wheel_metadata(site_packages, name, version)
        if found is not None:
            logger.debug("Using wheel metadata %s", found)
            return found

    logger.info("No installed wheel for %s under %s", name, project)
    return None
