"""Bundle a compiled wasm binary and its crate.json into a .gbcrate archive.

Archive layout (fixed entry order)::

    {package}.wasm
    crate.json

The archive is written next to the binary as ``{package}.gbcrate``. It is
first written to a temporary file in the same directory and then moved
into place, so the final path is either absent or a complete archive.
"""

from __future__ import annotations

import os
import tempfile
import zipfile
from pathlib import Path

import structlog

from gooseboy_core.errors import (
    ArchiveWriteError,
    ArtifactNotFoundError,
    InputReadError,
    ManifestNotFoundError,
)
from gooseboy_core.locator import locate
from gooseboy_core.metadata import MetadataProvider
from gooseboy_core.models import (
    CRATE_EXTENSION,
    CRATE_MANIFEST,
    WASM_EXTENSION,
    BuildProfile,
    WorkspaceMetadata,
)

logger = structlog.get_logger(__name__)

# Earliest timestamp zip can store; keeps repeated packs byte-identical
ENTRY_TIMESTAMP = (1980, 1, 1, 0, 0, 0)

# rw-r--r-- regular file
ENTRY_MODE = 0o100644

# mkstemp creates 0600 files
ARCHIVE_MODE = 0o644


def _read_input(path: Path, missing: type[ArtifactNotFoundError | ManifestNotFoundError]) -> bytes:
    try:
        return path.read_bytes()
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
        raise missing(path) from e
    except OSError as e:
        raise InputReadError(path, internal_details=str(e)) from e


def _entry(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=ENTRY_TIMESTAMP)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = ENTRY_MODE << 16
    return info


def write_archive(archive_path: Path, entries: list[tuple[str, bytes]]) -> None:
    """Write ``entries`` to a zip archive at ``archive_path``, atomically.

    Any existing file at ``archive_path`` is replaced only once the new
    archive is complete.

    Args:
        archive_path: Final archive location.
        entries: (name, data) pairs in the order they are stored.

    Raises:
        ArchiveWriteError: On any I/O failure. The temporary file is removed.
    """
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{archive_path.name}.",
            suffix=".tmp",
            dir=archive_path.parent,
        )
    except OSError as e:
        raise ArchiveWriteError(archive_path, internal_details=str(e)) from e

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh, zipfile.ZipFile(fh, mode="w") as archive:
            for name, data in entries:
                archive.writestr(_entry(name), data)
        tmp_path.chmod(ARCHIVE_MODE)
        os.replace(tmp_path, archive_path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise ArchiveWriteError(archive_path, internal_details=str(e)) from e


class CratePackager:
    """Assembles crate archives from build output.

    The packager never builds; the binary must already exist.

    Attributes:
        provider: Metadata source used when the caller has no metadata yet.

    Example:
        >>> packager = CratePackager(CargoMetadataProvider())
        >>> packager.pack(Path("/work/foo"), release=False)
        PosixPath('/work/foo/target/wasm32-unknown-unknown/debug/foo.gbcrate')
    """

    def __init__(self, provider: MetadataProvider) -> None:
        """Initialize the packager.

        Args:
            provider: Metadata source.
        """
        self.provider = provider
        self._log = logger.bind(component="packager")

    def pack(
        self,
        project_directory: Path,
        release: bool,
        metadata: WorkspaceMetadata | None = None,
    ) -> Path:
        """Package the project's compiled binary and crate.json.

        Args:
            project_directory: Directory holding Cargo.toml and crate.json.
            release: Package the release build instead of the debug build.
            metadata: Workspace metadata already fetched for this command.
                Fetched from the provider when omitted.

        Returns:
            Path of the written ``.gbcrate`` archive.

        Raises:
            ArtifactNotFoundError: If the compiled binary is missing.
            ManifestNotFoundError: If crate.json is missing.
            InputReadError: If either input exists but cannot be read.
            ArchiveWriteError: If the archive cannot be written.
            PackageNotFoundError: If the project is not a workspace package.
        """
        if metadata is None:
            metadata = self.provider.fetch(project_directory)

        artifact = locate(project_directory, BuildProfile.from_release(release), metadata)
        package_name = artifact.filename.removesuffix(WASM_EXTENSION)
        archive_path = artifact.directory / f"{package_name}{CRATE_EXTENSION}"

        self._log.debug(
            "packing_crate",
            archive_path=str(archive_path),
            wasm_path=str(artifact.path),
        )

        wasm = _read_input(artifact.path, ArtifactNotFoundError)
        manifest = _read_input(project_directory / CRATE_MANIFEST, ManifestNotFoundError)

        write_archive(archive_path, [(artifact.filename, wasm), (CRATE_MANIFEST, manifest)])

        self._log.info("crate_packed", archive_path=str(archive_path), package=package_name)
        return archive_path
