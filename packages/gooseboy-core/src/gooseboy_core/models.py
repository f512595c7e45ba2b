"""Typed records for workspace metadata and pipeline results.

cargo metadata returns a large untyped JSON document. Only the fields the
pipeline relies on are modelled here; everything else is ignored. Parsing
fails with MalformedMetadataError when a required field is missing or has
the wrong type.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from gooseboy_core.errors import MalformedMetadataError

# WebAssembly target every crate is compiled for
TARGET_TRIPLE = "wasm32-unknown-unknown"

# Fixed file names
CARGO_MANIFEST = "Cargo.toml"
CRATE_MANIFEST = "crate.json"
CRATE_EXTENSION = ".gbcrate"
WASM_EXTENSION = ".wasm"


class BuildProfile(str, Enum):
    """Cargo build profile.

    The value doubles as the output subdirectory name under
    ``target/<triple>/``.
    """

    DEBUG = "debug"
    RELEASE = "release"

    @classmethod
    def from_release(cls, release: bool) -> BuildProfile:
        """Map a ``--release`` flag to a profile."""
        return cls.RELEASE if release else cls.DEBUG


def canonical_or_none(path: Path) -> Path | None:
    """Return the canonical form of an existing path, or None."""
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return None


def same_manifest(candidate: Path | str, manifest: Path) -> bool:
    """Check whether two manifest paths name the same file.

    Both sides are canonicalized. If either cannot be canonicalized (the
    file is missing, a symlink loops) the raw strings are compared instead.

    Args:
        candidate: Manifest path as reported by cargo.
        manifest: Manifest path computed from a project directory.

    Returns:
        True if the paths refer to the same manifest.
    """
    candidate_abs = canonical_or_none(Path(candidate))
    manifest_abs = canonical_or_none(manifest)
    if candidate_abs is not None and manifest_abs is not None:
        return candidate_abs == manifest_abs
    return str(candidate) == str(manifest)


class PackageRecord(BaseModel):
    """A single package entry of cargo metadata.

    Attributes:
        name: Package name, unique within the workspace.
        manifest_path: Absolute path to the package's Cargo.toml.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Package name")
    manifest_path: Path = Field(..., description="Absolute path to Cargo.toml")

    @property
    def directory(self) -> Path:
        """Directory holding the package manifest."""
        return self.manifest_path.parent


class WorkspaceMetadata(BaseModel):
    """The subset of ``cargo metadata --format-version 1`` used by gooseboy.

    Attributes:
        target_directory: Absolute path of the shared build output directory.
        packages: Workspace member packages, in cargo's order.

    Example:
        >>> meta = WorkspaceMetadata.from_json(stdout)
        >>> meta.find_by_name("game").manifest_path
        PosixPath('/work/game/Cargo.toml')
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    target_directory: Path = Field(..., description="Build output root")
    packages: tuple[PackageRecord, ...] = Field(..., description="Workspace packages")

    @classmethod
    def from_json(cls, text: str | bytes) -> WorkspaceMetadata:
        """Parse cargo metadata output.

        Args:
            text: JSON document printed by cargo on stdout, raw or decoded.

        Returns:
            Validated WorkspaceMetadata.

        Raises:
            MalformedMetadataError: If the text is not UTF-8 JSON or lacks
                required fields.
        """
        try:
            return cls.model_validate_json(text)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(x) for x in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            )
            raise MalformedMetadataError(
                "cargo metadata returned an unexpected document",
                internal_details=problems,
            ) from e

    def package_names(self) -> list[str]:
        """Names of all packages, in workspace order."""
        return [p.name for p in self.packages]

    def find_by_name(self, name: str) -> PackageRecord | None:
        """Find a package by exact name."""
        return next((p for p in self.packages if p.name == name), None)

    def find_by_manifest(self, manifest: Path) -> PackageRecord | None:
        """Find the package whose manifest is ``manifest``.

        See same_manifest() for how paths are compared.
        """
        return next((p for p in self.packages if same_manifest(p.manifest_path, manifest)), None)


class ResolvedProject(BaseModel):
    """Outcome of mapping a user argument to a project.

    Attributes:
        project_directory: Directory containing the project's Cargo.toml.
        package_name: Selected package, set only when one was named.
        metadata: Workspace metadata the resolution was computed from.
            Later pipeline steps reuse it instead of querying cargo again.
    """

    model_config = ConfigDict(frozen=True)

    project_directory: Path
    package_name: str | None = None
    metadata: WorkspaceMetadata


class ArtifactPath(BaseModel):
    """Expected location of a compiled wasm binary.

    Attributes:
        filename: ``{package}.wasm``
        path: ``{target_directory}/{triple}/{profile}/{filename}``
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    path: Path

    @property
    def directory(self) -> Path:
        """Directory the binary is written to by cargo."""
        return self.path.parent


class PackResult(BaseModel):
    """Outcome of a pack command.

    Attributes:
        archive_path: The ``.gbcrate`` written next to the build output.
        installed_path: Copy placed in the install directory, if any.
    """

    model_config = ConfigDict(frozen=True)

    archive_path: Path
    installed_path: Path | None = None
