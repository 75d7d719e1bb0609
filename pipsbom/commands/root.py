"""Root command implementation for pipsbom.

Checks whether a directory can be analyzed: it must be a root module
(``setup.py`` or ``setup.cfg`` present) and, when a manifest is given or
``requirements.txt`` exists, the manifest must declare enough modules.
"""

from __future__ import annotations

import sys
import click
from pathlib import Path
from typing import Optional

from pipsbom.constants import DEFAULT_MANIFEST
from pipsbom.exceptions import PipSbomError
from pipsbom.context import pass_context, PipSbomContext
from pipsbom.core import is_requirement_met, is_valid_root_module
from pipsbom.utils import (
    get_logger,
    print_error,
    print_key_values,
    print_warning,
    safe_read_file,
)

logger = get_logger("commands.root")


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--manifest",
    "-m",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Manifest to judge (default: PATH/requirements.txt when present).",
)
@click.option(
    "--dependency",
    is_flag=True,
    help="Judge the manifest as a dependency manifest rather than a root one.",
)
@pass_context
def root(
    ctx: PipSbomContext,
    path: Path,
    manifest: Optional[Path],
    dependency: bool,
) -> None:
    """Check whether PATH is a valid root module for analysis.

    Exits 1 when PATH has neither ``setup.py`` nor ``setup.cfg``. An
    insufficient manifest only produces a warning.
    """
    valid = is_valid_root_module(path)
    rows = {"Directory": str(path), "Root module": "yes" if valid else "no"}

    if manifest is None and (path / DEFAULT_MANIFEST).is_file():
        manifest = path / DEFAULT_MANIFEST

    met: Optional[bool] = None
    if manifest is not None:
        try:
            data = safe_read_file(manifest)
        except PipSbomError as e:
            print_error(f"{e}")
            sys.exit(1)
        met = is_requirement_met(not dependency, data, ctx.config.thresholds)
        rows["Manifest"] = str(manifest)
        rows["Requirements met"] = "yes" if met else "no"

    print_key_values(rows, title="Root module")

    if met is False:
        print_warning("Manifest declares too few modules; results may be incomplete")
    if not valid:
        sys.exit(1)
