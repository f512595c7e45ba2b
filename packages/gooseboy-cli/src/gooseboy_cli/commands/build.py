"""gooseboy build command - Compile a crate for WebAssembly."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gooseboy_cli.output import success

if TYPE_CHECKING:
    from gooseboy_core.config import GooseboySettings


@click.command()
@click.option(
    "-r",
    "--release",
    is_flag=True,
    default=False,
    help="Build with the release profile.",
)
@click.argument("package", required=False)
@click.pass_obj
def build(settings: GooseboySettings | None, release: bool, package: str | None) -> None:
    """Compile a crate to wasm32-unknown-unknown.

    PACKAGE is a path to a crate directory or the name of a package in the
    current workspace. Defaults to the current directory.

    Examples:

        gooseboy build

        gooseboy build --release

        gooseboy build path/to/crate

        gooseboy build my-package
    """
    from gooseboy_cli.errors import handle_gooseboy_error, handle_permission_error
    from gooseboy_core.errors import GooseboyError
    from gooseboy_core.pipeline import CratePipeline

    try:
        project = CratePipeline(settings).build(package, release)
    except GooseboyError as e:
        handle_gooseboy_error(e)
    except PermissionError as e:
        handle_permission_error(str(e.filename or "."), "access")

    success(f"Built {project.package_name or project.project_directory.name}")
