"""Project resolution: map a path-or-name argument to a project directory.

Resolution rules:
1. No argument: search from the current directory.
2. An existing path: canonicalize it and search from there.
3. Anything else: a package name, searched from the current directory.

One metadata query is made from the search root. A named package is
looked up by exact name. Without a name, the package whose manifest is
``<search root>/Cargo.toml`` is used. The project directory is the parent
of the matched manifest.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from gooseboy_core.errors import AmbiguousPackageError, PackageNotFoundError
from gooseboy_core.metadata import MetadataProvider
from gooseboy_core.models import CARGO_MANIFEST, ResolvedProject, canonical_or_none

logger = structlog.get_logger(__name__)


class ProjectResolver:
    """Resolves user arguments to a ResolvedProject.

    Resolution performs filesystem existence checks and a single metadata
    fetch. It never writes anything.

    Attributes:
        provider: Source of workspace metadata.
        cwd: Directory used when the argument is absent or is a package name.

    Example:
        >>> resolver = ProjectResolver(CargoMetadataProvider())
        >>> resolver.resolve("engine").project_directory
        PosixPath('/work/engine')
    """

    def __init__(self, provider: MetadataProvider, cwd: Path | None = None) -> None:
        """Initialize the resolver.

        Args:
            provider: Source of workspace metadata.
            cwd: Working directory override. Defaults to Path.cwd().
        """
        self.provider = provider
        self.cwd = cwd
        self._log = logger.bind(component="project_resolver")

    def _working_directory(self) -> Path:
        cwd = self.cwd if self.cwd is not None else Path.cwd()
        return canonical_or_none(cwd) or cwd.absolute()

    def split_argument(self, argument: str | None) -> tuple[Path, str | None]:
        """Decide whether ``argument`` is a path or a package name.

        Args:
            argument: Path, package name, or None.

        Returns:
            Tuple of (search root, package name or None).
        """
        if argument is None:
            return self._working_directory(), None

        candidate = Path(argument)
        if not candidate.is_absolute() and self.cwd is not None:
            candidate = self.cwd / candidate
        if candidate.exists():
            return candidate.resolve(), None

        return self._working_directory(), argument

    def resolve(self, argument: str | None) -> ResolvedProject:
        """Resolve ``argument`` to a project directory and optional package.

        Args:
            argument: Path, package name, or None for the current directory.

        Returns:
            ResolvedProject carrying the metadata used for resolution.

        Raises:
            PackageNotFoundError: If a named package is not in the workspace.
            AmbiguousPackageError: If no argument was given, the current
                directory is not a package, and the workspace has several.
            ToolchainInvocationError: If the metadata query fails.
            MalformedMetadataError: If the metadata cannot be parsed.
        """
        search_root, package_name = self.split_argument(argument)
        metadata = self.provider.fetch(search_root)

        if package_name is not None:
            record = metadata.find_by_name(package_name)
            if record is None:
                raise PackageNotFoundError(package_name, metadata.package_names())
            project_directory = record.directory
        else:
            record = metadata.find_by_manifest(search_root / CARGO_MANIFEST)
            if record is not None:
                project_directory = record.directory
            elif len(metadata.packages) > 1:
                raise AmbiguousPackageError(search_root, metadata.package_names())
            else:
                project_directory = search_root

        self._log.info(
            "project_resolved",
            argument=argument,
            project_directory=str(project_directory),
            package=package_name,
        )
        return ResolvedProject(
            project_directory=project_directory,
            package_name=package_name,
            metadata=metadata,
        )
