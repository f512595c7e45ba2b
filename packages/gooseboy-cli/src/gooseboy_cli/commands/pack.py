"""gooseboy pack command - Build, pack and install a crate."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from gooseboy_cli.output import info, success

if TYPE_CHECKING:
    from gooseboy_core.config import GooseboySettings


@click.command()
@click.option(
    "-r",
    "--release",
    is_flag=True,
    default=False,
    help="Build and pack the release profile.",
)
@click.option(
    "--no-copy",
    is_flag=True,
    default=False,
    help="Do not copy the archive into the crates directory.",
)
@click.argument("package", required=False)
@click.argument("destination_path", required=False, type=click.Path(file_okay=False))
@click.pass_obj
def pack(
    settings: GooseboySettings | None,
    release: bool,
    no_copy: bool,
    package: str | None,
    destination_path: str | None,
) -> None:
    """Build a crate and pack it into a .gbcrate archive.

    The archive is written next to the compiled binary and then copied to
    DESTINATION_PATH, or to `~/.gooseboy` (or `$GOOSEBOY_CRATES_DIR`)
    when no destination is given.

    Examples:

        gooseboy pack

        gooseboy pack --release my-package

        gooseboy pack --no-copy

        gooseboy pack . ./dist
    """
    from gooseboy_cli.errors import handle_gooseboy_error, handle_permission_error
    from gooseboy_core.errors import GooseboyError
    from gooseboy_core.pipeline import CratePipeline

    destination = Path(destination_path) if destination_path else None

    try:
        result = CratePipeline(settings).pack(
            package,
            release,
            install=not no_copy,
            destination=destination,
        )
    except GooseboyError as e:
        handle_gooseboy_error(e)
    except PermissionError as e:
        handle_permission_error(str(e.filename or "."), "access")

    success(f"Packed {result.archive_path}")
    if result.installed_path is not None:
        success(f"Installed {result.installed_path}")
    else:
        info("Skipped install (--no-copy)")
