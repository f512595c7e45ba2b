"""Workspace metadata queries against cargo.

The provider runs ``cargo metadata`` once per call and parses the result
into a WorkspaceMetadata. Queries are deterministic, so failures are not
retried.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

import structlog

from gooseboy_core.errors import ToolchainInvocationError
from gooseboy_core.models import WorkspaceMetadata

logger = structlog.get_logger(__name__)

# Dependency-free, version-pinned output scoped to the workspace at cwd
METADATA_ARGS = ("metadata", "--format-version", "1", "--no-deps")


class MetadataProvider(Protocol):
    """Anything that can describe the workspace rooted at a directory."""

    def fetch(self, project_directory: Path) -> WorkspaceMetadata:
        """Return metadata for the workspace containing ``project_directory``."""
        ...


class CargoMetadataProvider:
    """MetadataProvider backed by the ``cargo metadata`` subcommand.

    Attributes:
        cargo: Cargo executable name or path.

    Example:
        >>> provider = CargoMetadataProvider()
        >>> meta = provider.fetch(Path("."))
        >>> meta.package_names()
        ['game']
    """

    def __init__(self, cargo: str = "cargo") -> None:
        """Initialize the provider.

        Args:
            cargo: Cargo executable name or path.
        """
        self.cargo = cargo
        self._log = logger.bind(component="metadata_provider")

    def fetch(self, project_directory: Path) -> WorkspaceMetadata:
        """Query cargo for workspace metadata.

        Args:
            project_directory: Directory the query runs in.

        Returns:
            Parsed workspace metadata.

        Raises:
            ToolchainInvocationError: If cargo cannot be started or exits non-zero.
            MalformedMetadataError: If stdout is not a valid metadata document.
        """
        argv = [self.cargo, *METADATA_ARGS]
        self._log.debug("running_command", argv=argv, cwd=str(project_directory))

        try:
            completed = subprocess.run(
                argv,
                cwd=project_directory,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise ToolchainInvocationError(
                f"Could not run '{self.cargo} metadata' in {project_directory}",
                internal_details=str(e),
            ) from e

        if completed.returncode != 0:
            raise ToolchainInvocationError(
                f"'{self.cargo} metadata' exited with code {completed.returncode}",
                internal_details=completed.stderr.decode(errors="replace").strip() or None,
            )

        metadata = WorkspaceMetadata.from_json(completed.stdout)
        self._log.debug(
            "metadata_fetched",
            target_directory=str(metadata.target_directory),
            packages=metadata.package_names(),
        )
        return metadata
