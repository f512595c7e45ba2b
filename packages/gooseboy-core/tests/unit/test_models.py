"""Unit tests for gooseboy_core.models."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from gooseboy_core.errors import MalformedMetadataError
from gooseboy_core.models import BuildProfile, WorkspaceMetadata, same_manifest

CARGO_METADATA = {
    "packages": [
        {
            "name": "engine",
            "version": "0.1.0",
            "id": "path+file:///work/engine#0.1.0",
            "manifest_path": "/work/engine/Cargo.toml",
            "targets": [],
        },
        {
            "name": "game",
            "version": "0.2.0",
            "manifest_path": "/work/game/Cargo.toml",
        },
    ],
    "workspace_members": [],
    "target_directory": "/work/target",
    "version": 1,
    "workspace_root": "/work",
}


class TestBuildProfile:
    """Tests for BuildProfile."""

    def test_from_release(self) -> None:
        """Test release flag maps to profiles."""
        assert BuildProfile.from_release(True) is BuildProfile.RELEASE
        assert BuildProfile.from_release(False) is BuildProfile.DEBUG

    def test_value_is_directory_name(self) -> None:
        """Test profile values match cargo output directories."""
        assert BuildProfile.DEBUG.value == "debug"
        assert BuildProfile.RELEASE.value == "release"


class TestWorkspaceMetadataParsing:
    """Tests for WorkspaceMetadata.from_json."""

    def test_parses_cargo_output(self) -> None:
        """Test parsing keeps order and ignores unknown fields."""
        meta = WorkspaceMetadata.from_json(json.dumps(CARGO_METADATA))
        assert meta.target_directory == Path("/work/target")
        assert meta.package_names() == ["engine", "game"]
        assert meta.packages[1].manifest_path == Path("/work/game/Cargo.toml")

    def test_invalid_json(self) -> None:
        """Test non-JSON output is rejected."""
        with pytest.raises(MalformedMetadataError):
            WorkspaceMetadata.from_json("warning: something\n{")

    def test_parses_raw_bytes(self) -> None:
        """Test undecoded stdout is accepted."""
        meta = WorkspaceMetadata.from_json(json.dumps(CARGO_METADATA).encode())
        assert meta.package_names() == ["engine", "game"]

    def test_invalid_utf8(self) -> None:
        """Test bytes that are not UTF-8 are rejected."""
        with pytest.raises(MalformedMetadataError):
            WorkspaceMetadata.from_json(b'{"target_directory": "/t\xff", "packages": []}')

    def test_missing_target_directory(self) -> None:
        """Test missing target_directory is rejected."""
        doc = {k: v for k, v in CARGO_METADATA.items() if k != "target_directory"}
        with pytest.raises(MalformedMetadataError) as exc_info:
            WorkspaceMetadata.from_json(json.dumps(doc))
        assert "target_directory" in (exc_info.value.internal_details or "")

    def test_mistyped_packages(self) -> None:
        """Test packages must be a list of records."""
        doc = {**CARGO_METADATA, "packages": "engine"}
        with pytest.raises(MalformedMetadataError):
            WorkspaceMetadata.from_json(json.dumps(doc))

    def test_package_without_manifest_path(self) -> None:
        """Test each package needs a manifest_path."""
        doc = {**CARGO_METADATA, "packages": [{"name": "engine"}]}
        with pytest.raises(MalformedMetadataError):
            WorkspaceMetadata.from_json(json.dumps(doc))

    def test_metadata_is_frozen(self) -> None:
        """Test metadata cannot be mutated once parsed."""
        meta = WorkspaceMetadata.from_json(json.dumps(CARGO_METADATA))
        with pytest.raises(PydanticValidationError):
            meta.target_directory = Path("/elsewhere")  # type: ignore[misc]


class TestManifestMatching:
    """Tests for same_manifest and find_by_manifest."""

    def test_raw_string_fallback(self) -> None:
        """Test paths that do not exist compare as strings."""
        meta = WorkspaceMetadata.from_json(json.dumps(CARGO_METADATA))
        record = meta.find_by_manifest(Path("/work/game/Cargo.toml"))
        assert record is not None
        assert record.name == "game"
        assert meta.find_by_manifest(Path("/work/other/Cargo.toml")) is None

    def test_canonical_match_through_symlink(self, tmp_path: Path) -> None:
        """Test a symlinked project directory matches the real manifest."""
        real = tmp_path / "real"
        real.mkdir()
        (real / "Cargo.toml").write_text("[package]\n")
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)

        assert same_manifest(real / "Cargo.toml", link / "Cargo.toml")

    def test_canonical_match_with_dot_segments(self, tmp_path: Path) -> None:
        """Test non-normalized paths to an existing manifest match."""
        (tmp_path / "crate").mkdir()
        manifest = tmp_path / "crate" / "Cargo.toml"
        manifest.write_text("[package]\n")

        assert same_manifest(str(manifest), tmp_path / "crate" / ".." / "crate" / "Cargo.toml")

    def test_find_by_name(self) -> None:
        """Test lookup by exact name."""
        meta = WorkspaceMetadata.from_json(json.dumps(CARGO_METADATA))
        assert meta.find_by_name("engine") is not None
        assert meta.find_by_name("Engine") is None
