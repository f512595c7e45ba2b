"""Command-level orchestration: resolve, build, pack, install.

Metadata is fetched once per command by the resolver and passed along to
the packager.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import structlog

from gooseboy_core.builder import Builder, CargoBuilder
from gooseboy_core.config import GooseboySettings, default_crates_directory
from gooseboy_core.installer import CrateInstaller
from gooseboy_core.metadata import CargoMetadataProvider, MetadataProvider
from gooseboy_core.models import PackResult, ResolvedProject
from gooseboy_core.packager import CratePackager
from gooseboy_core.resolver import ProjectResolver

logger = structlog.get_logger(__name__)


class CratePipeline:
    """Runs the build and pack commands.

    Attributes:
        settings: Active configuration.
        provider: Metadata source (cargo by default).
        builder: Compiler front end (cargo by default).

    Example:
        >>> pipeline = CratePipeline(GooseboySettings())
        >>> result = pipeline.pack("engine", release=True)
        >>> result.installed_path
        PosixPath('/home/me/.gooseboy/engine.gbcrate')
    """

    def __init__(
        self,
        settings: GooseboySettings | None = None,
        *,
        provider: MetadataProvider | None = None,
        builder: Builder | None = None,
        cwd: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Configuration. Read from the environment when omitted.
            provider: Metadata source override.
            builder: Builder override.
            cwd: Working directory override for resolution.
            environ: Environment used to locate the home directory.
        """
        self.settings = settings or GooseboySettings()
        self.provider = provider or CargoMetadataProvider(self.settings.cargo)
        self.builder = builder or CargoBuilder(self.settings.cargo)
        self.resolver = ProjectResolver(self.provider, cwd=cwd)
        self.packager = CratePackager(self.provider)
        self._environ = environ

    def build(self, argument: str | None, release: bool) -> ResolvedProject:
        """Resolve ``argument`` and compile it.

        Args:
            argument: Path, package name, or None for the current directory.
            release: Build with the release profile.

        Returns:
            The resolved project that was built.
        """
        project = self.resolver.resolve(argument)
        self.builder.build(project.project_directory, release)
        return project

    def pack(
        self,
        argument: str | None,
        release: bool,
        *,
        install: bool = True,
        destination: Path | None = None,
    ) -> PackResult:
        """Build, package and optionally install a crate.

        Args:
            argument: Path, package name, or None for the current directory.
            release: Build and package the release profile.
            install: Copy the archive into the install directory.
            destination: Install directory. Defaults to the configured
                crates directory.

        Returns:
            PackResult with the archive path and the installed copy.
        """
        project = self.build(argument, release)
        archive_path = self.packager.pack(
            project.project_directory, release, metadata=project.metadata
        )

        if not install:
            logger.info("install_skipped", archive_path=str(archive_path))
            return PackResult(archive_path=archive_path)

        if destination is None:
            destination = default_crates_directory(self.settings, self._environ)
        installed = CrateInstaller(destination).install(archive_path)
        return PackResult(archive_path=archive_path, installed_path=installed)
