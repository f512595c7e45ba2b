"""Compute where cargo writes the wasm binary for a project."""

from __future__ import annotations

from pathlib import Path

from gooseboy_core.errors import PackageNotFoundError
from gooseboy_core.models import (
    CARGO_MANIFEST,
    TARGET_TRIPLE,
    WASM_EXTENSION,
    ArtifactPath,
    BuildProfile,
    WorkspaceMetadata,
)


def package_name_for(project_directory: Path, metadata: WorkspaceMetadata) -> str:
    """Return the name of the package whose manifest is in ``project_directory``.

    Raises:
        PackageNotFoundError: If no workspace package lives there.
    """
    manifest = project_directory / CARGO_MANIFEST
    record = metadata.find_by_manifest(manifest)
    if record is None:
        raise PackageNotFoundError(str(manifest), metadata.package_names())
    return record.name


def locate(
    project_directory: Path,
    profile: BuildProfile,
    metadata: WorkspaceMetadata,
) -> ArtifactPath:
    """Compute the expected path of the compiled binary.

    Pure path computation: the file is not required to exist.

    Args:
        project_directory: Directory holding the package's Cargo.toml.
        profile: Build profile the binary was compiled with.
        metadata: Metadata of the workspace containing the project.

    Returns:
        ArtifactPath for ``{target}/wasm32-unknown-unknown/{profile}/{name}.wasm``.

    Raises:
        PackageNotFoundError: If the project is not a workspace package.

    Example:
        >>> locate(Path("/work/foo"), BuildProfile.DEBUG, meta).path
        PosixPath('/work/foo/target/wasm32-unknown-unknown/debug/foo.wasm')
    """
    filename = f"{package_name_for(project_directory, metadata)}{WASM_EXTENSION}"
    path = metadata.target_directory / TARGET_TRIPLE / profile.value / filename
    return ArtifactPath(filename=filename, path=path)
