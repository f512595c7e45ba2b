"""gooseboy-core: build and package WebAssembly crates.

This package provides:
- ProjectResolver: map a path or package name to a project directory
- CargoMetadataProvider / CargoBuilder: cargo front ends
- locate(): compute where the compiled binary lives
- CratePackager / CrateInstaller: produce and install .gbcrate archives
- CratePipeline: the build and pack commands end to end
"""

from __future__ import annotations

__version__ = "1.0.0"

from gooseboy_core.builder import Builder, CargoBuilder, build_arguments
from gooseboy_core.config import GooseboySettings, default_crates_directory, home_directory
from gooseboy_core.errors import (
    AmbiguousPackageError,
    ArchiveNotFoundError,
    ArchiveWriteError,
    ArtifactNotFoundError,
    BuildFailedError,
    GooseboyError,
    HomeDirectoryUnavailableError,
    InputReadError,
    InstallError,
    MalformedMetadataError,
    ManifestNotFoundError,
    PackageNotFoundError,
    ProcessSpawnError,
    ToolchainInvocationError,
)
from gooseboy_core.installer import CrateInstaller
from gooseboy_core.locator import locate, package_name_for
from gooseboy_core.metadata import CargoMetadataProvider, MetadataProvider
from gooseboy_core.models import (
    CARGO_MANIFEST,
    CRATE_EXTENSION,
    CRATE_MANIFEST,
    TARGET_TRIPLE,
    ArtifactPath,
    BuildProfile,
    PackageRecord,
    PackResult,
    ResolvedProject,
    WorkspaceMetadata,
)
from gooseboy_core.packager import CratePackager, write_archive
from gooseboy_core.pipeline import CratePipeline
from gooseboy_core.resolver import ProjectResolver

__all__ = [
    "__version__",
    # Pipeline
    "CratePipeline",
    "ProjectResolver",
    "CratePackager",
    "CrateInstaller",
    "locate",
    "package_name_for",
    "write_archive",
    # Toolchain
    "MetadataProvider",
    "CargoMetadataProvider",
    "Builder",
    "CargoBuilder",
    "build_arguments",
    # Configuration
    "GooseboySettings",
    "default_crates_directory",
    "home_directory",
    # Models
    "BuildProfile",
    "PackageRecord",
    "WorkspaceMetadata",
    "ResolvedProject",
    "ArtifactPath",
    "PackResult",
    "TARGET_TRIPLE",
    "CARGO_MANIFEST",
    "CRATE_MANIFEST",
    "CRATE_EXTENSION",
    # Errors
    "GooseboyError",
    "ToolchainInvocationError",
    "MalformedMetadataError",
    "PackageNotFoundError",
    "AmbiguousPackageError",
    "BuildFailedError",
    "ProcessSpawnError",
    "ArtifactNotFoundError",
    "ManifestNotFoundError",
    "InputReadError",
    "ArchiveWriteError",
    "ArchiveNotFoundError",
    "InstallError",
    "HomeDirectoryUnavailableError",
]
