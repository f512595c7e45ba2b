"""Compile a project to WebAssembly with ``cargo build``."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

import structlog

from gooseboy_core.errors import BuildFailedError, ProcessSpawnError
from gooseboy_core.models import TARGET_TRIPLE

logger = structlog.get_logger(__name__)


def build_arguments(release: bool) -> list[str]:
    """Return cargo arguments for a wasm build.

    Example:
        >>> build_arguments(release=True)
        ['build', '--release', '--target', 'wasm32-unknown-unknown']
    """
    args = ["build"]
    if release:
        args.append("--release")
    args.extend(["--target", TARGET_TRIPLE])
    return args


class Builder(Protocol):
    """Anything that can compile a project directory."""

    def build(self, project_directory: Path, release: bool) -> None:
        """Compile the project, raising on failure."""
        ...


class CargoBuilder:
    """Builder that shells out to cargo.

    Cargo's own output is passed through to the terminal. The call blocks
    until cargo exits; there is no timeout.
    """

    def __init__(self, cargo: str = "cargo") -> None:
        """Initialize the builder.

        Args:
            cargo: Cargo executable name or path.
        """
        self.cargo = cargo
        self._log = logger.bind(component="builder")

    def build(self, project_directory: Path, release: bool) -> None:
        """Run ``cargo build --target wasm32-unknown-unknown`` in the project.

        Args:
            project_directory: Directory to build in.
            release: Build with the release profile.

        Raises:
            ProcessSpawnError: If cargo cannot be launched.
            BuildFailedError: If cargo exits non-zero.
        """
        argv = [self.cargo, *build_arguments(release)]
        self._log.debug("running_command", argv=argv, cwd=str(project_directory))
        self._log.info("build_started", project_directory=str(project_directory), release=release)

        try:
            completed = subprocess.run(argv, cwd=project_directory, check=False)
        except OSError as e:
            raise ProcessSpawnError(self.cargo, internal_details=str(e)) from e

        if completed.returncode != 0:
            raise BuildFailedError(completed.returncode)

        self._log.info("build_finished", project_directory=str(project_directory))
