"""CLI entry point for gooseboy.

This module defines the main CLI group using LazyGroup pattern so that
``gooseboy --help`` does not import the pipeline.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from gooseboy_cli import __version__
from gooseboy_cli.output import set_no_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True

# -v / -vv map to these levels; without the flag the settings value is used
VERBOSITY_LEVELS = {1: "INFO", 2: "DEBUG"}


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Commands are only imported when actually invoked, not at import time.

    Attributes:
        lazy_subcommands: Mapping of command names to module paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"build": "gooseboy_cli.commands.build.build"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return sorted list of available command names."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, loading lazily if needed.

        Args:
            ctx: Click context.
            cmd_name: Name of the command to get.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "build": "gooseboy_cli.commands.build.build",
    "pack": "gooseboy_cli.commands.pack.pack",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="gooseboy")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase log verbosity (-v info, -vv debug).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """gooseboy command line tool.

    Build Rust crates for WebAssembly and pack them into `.gbcrate` archives.

    **Getting Started:**

    - `gooseboy build` - Compile the crate in the current directory
    - `gooseboy build --release my-crate` - Compile a workspace package
    - `gooseboy pack` - Build, pack and install into `~/.gooseboy`
    - `gooseboy pack --no-copy` - Build and pack without installing
    """
    from gooseboy_core.config import GooseboySettings
    from gooseboy_core.observability import configure_logging

    settings = GooseboySettings()
    log_level = VERBOSITY_LEVELS.get(min(verbose, 2), settings.log_level)
    configure_logging(log_level=log_level, json_format=settings.log_json)
    ctx.obj = settings


if __name__ == "__main__":
    cli()
