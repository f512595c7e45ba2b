"""CLI error handling for gooseboy-cli.

This module wraps gooseboy-core exceptions into user-friendly messages
with appropriate exit codes.
"""

from __future__ import annotations

from typing import NoReturn

import click

from gooseboy_cli.output import error
from gooseboy_core.errors import (
    ArchiveWriteError,
    GooseboyError,
    HomeDirectoryUnavailableError,
    InputReadError,
    InstallError,
    MalformedMetadataError,
    ProcessSpawnError,
    ToolchainInvocationError,
)

# Exit codes following sysexits.h convention
EXIT_USER_ERROR = 1  # Problem with the project or arguments
EXIT_SYSTEM_ERROR = 2  # Toolchain or filesystem failure

# Core errors caused by the environment rather than the user's project
SYSTEM_ERRORS: tuple[type[GooseboyError], ...] = (
    ToolchainInvocationError,
    MalformedMetadataError,
    ProcessSpawnError,
    ArchiveWriteError,
    InstallError,
    InputReadError,
    HomeDirectoryUnavailableError,
)


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def exit_code_for(err: GooseboyError) -> int:
    """Pick the exit code for a core error."""
    return EXIT_SYSTEM_ERROR if isinstance(err, SYSTEM_ERRORS) else EXIT_USER_ERROR


def handle_gooseboy_error(err: GooseboyError) -> NoReturn:
    """Convert a core error into a CLIError.

    Args:
        err: Exception raised by gooseboy-core.

    Raises:
        CLIError: Always raises with the error's user message.
    """
    raise CLIError(err.user_message, exit_code=exit_code_for(err)) from err


def handle_permission_error(path: str, operation: str = "access") -> NoReturn:
    """Handle permission errors.

    Args:
        path: Path that caused the permission error.
        operation: Operation that failed (read, write, etc.).

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(
        f"Permission denied: Cannot {operation} {path}",
        exit_code=EXIT_SYSTEM_ERROR,
    )
