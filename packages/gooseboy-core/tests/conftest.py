"""Shared pytest fixtures for gooseboy-core tests.

Provides fake toolchain collaborators and helpers that lay out cargo
projects and workspaces on disk under tmp_path.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from gooseboy_core.models import (
    CARGO_MANIFEST,
    CRATE_MANIFEST,
    TARGET_TRIPLE,
    PackageRecord,
    WorkspaceMetadata,
)

CRATE_JSON = b'{"name": "demo", "version": "0.1.0"}\n'
WASM_BYTES = b"\x00asm\x01\x00\x00\x00fake-module"


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


class FakeMetadataProvider:
    """MetadataProvider returning a fixed document and recording calls."""

    def __init__(self, metadata: WorkspaceMetadata) -> None:
        self.metadata = metadata
        self.calls: list[Path] = []

    def fetch(self, project_directory: Path) -> WorkspaceMetadata:
        self.calls.append(project_directory)
        return self.metadata


class FakeBuilder:
    """Builder that writes a wasm file where cargo would."""

    def __init__(self, metadata: WorkspaceMetadata, data: bytes = WASM_BYTES) -> None:
        self.metadata = metadata
        self.data = data
        self.calls: list[tuple[Path, bool]] = []

    def build(self, project_directory: Path, release: bool) -> None:
        self.calls.append((project_directory, release))
        record = self.metadata.find_by_manifest(project_directory / CARGO_MANIFEST)
        assert record is not None
        profile = "release" if release else "debug"
        out = self.metadata.target_directory / TARGET_TRIPLE / profile / f"{record.name}.wasm"
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(self.data)


def make_package(root: Path, name: str, crate_json: bytes | None = CRATE_JSON) -> PackageRecord:
    """Create a package directory with Cargo.toml (and crate.json)."""
    root.mkdir(parents=True, exist_ok=True)
    manifest = root / CARGO_MANIFEST
    manifest.write_text(f'[package]\nname = "{name}"\nversion = "0.1.0"\n')
    if crate_json is not None:
        (root / CRATE_MANIFEST).write_bytes(crate_json)
    return PackageRecord(name=name, manifest_path=manifest.resolve())


def write_artifact(metadata: WorkspaceMetadata, name: str, profile: str = "debug") -> Path:
    """Place a fake compiled binary in the build output tree."""
    out = metadata.target_directory / TARGET_TRIPLE / profile / f"{name}.wasm"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(WASM_BYTES)
    return out


@pytest.fixture
def single_crate(tmp_path: Path) -> tuple[Path, WorkspaceMetadata]:
    """A standalone crate named ``foo``.

    Returns:
        Tuple of (project directory, metadata).
    """
    project = tmp_path / "foo"
    record = make_package(project, "foo")
    metadata = WorkspaceMetadata(
        target_directory=project.resolve() / "target",
        packages=(record,),
    )
    return project.resolve(), metadata


@pytest.fixture
def workspace(tmp_path: Path) -> tuple[Path, WorkspaceMetadata]:
    """A virtual workspace with member packages ``a`` and ``b``.

    Returns:
        Tuple of (workspace root, metadata).
    """
    root = tmp_path / "ws"
    root.mkdir()
    (root / CARGO_MANIFEST).write_text('[workspace]\nmembers = ["a", "b"]\n')
    records = (make_package(root / "a", "a"), make_package(root / "b", "b"))
    metadata = WorkspaceMetadata(target_directory=root.resolve() / "target", packages=records)
    return root.resolve(), metadata


@pytest.fixture
def fake_provider() -> Callable[[WorkspaceMetadata], FakeMetadataProvider]:
    """Factory fixture for FakeMetadataProvider."""
    return FakeMetadataProvider


@pytest.fixture
def fake_builder() -> Callable[[WorkspaceMetadata], FakeBuilder]:
    """Factory fixture for FakeBuilder."""
    return FakeBuilder


@pytest.fixture
def artifact_writer() -> Callable[..., Path]:
    """Factory fixture placing fake compiled binaries (see write_artifact)."""
    return write_artifact


@pytest.fixture
def package_maker() -> Callable[..., PackageRecord]:
    """Factory fixture creating package directories (see make_package)."""
    return make_package
