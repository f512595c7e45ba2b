"""Unit tests for gooseboy_core.errors."""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

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


class TestGooseboyError:
    """Tests for the base exception."""

    def test_user_message(self) -> None:
        """Test the user message is the string form."""
        err = GooseboyError("Something failed")
        assert str(err) == "Something failed"
        assert err.user_message == "Something failed"
        assert err.internal_details is None

    def test_internal_details_logged_not_shown(self) -> None:
        """Test internal details go to the log, not the message."""
        with capture_logs() as logs:
            err = GooseboyError("Query failed", internal_details="stderr: boom")

        assert "boom" not in str(err)
        assert logs[0]["event"] == "gooseboy_error"
        assert logs[0]["internal_details"] == "stderr: boom"
        assert logs[0]["error_type"] == "GooseboyError"

    @pytest.mark.parametrize(
        "err",
        [
            ToolchainInvocationError("x"),
            MalformedMetadataError("x"),
            PackageNotFoundError("p", []),
            AmbiguousPackageError(Path("/ws"), ["a", "b"]),
            BuildFailedError(1),
            ProcessSpawnError("cargo"),
            ArtifactNotFoundError(Path("/a.wasm")),
            ManifestNotFoundError(Path("/crate.json")),
            ArchiveWriteError(Path("/a.gbcrate")),
            ArchiveNotFoundError(Path("/a.gbcrate")),
            InputReadError(Path("/crate.json")),
            InstallError(Path("/a.gbcrate")),
            HomeDirectoryUnavailableError(),
        ],
    )
    def test_hierarchy(self, err: GooseboyError) -> None:
        """Test every error is a GooseboyError with a message."""
        assert isinstance(err, GooseboyError)
        assert str(err)


class TestMessages:
    """Tests for user-facing messages."""

    def test_package_not_found_without_packages(self) -> None:
        """Test an empty workspace reports 'none'."""
        assert str(PackageNotFoundError("foo", [])) == "Package 'foo' not found. Available: none"

    def test_artifact_not_found_suggests_build(self) -> None:
        """Test the missing-artifact message points at the build command."""
        assert "gooseboy build" in str(ArtifactNotFoundError(Path("/t/foo.wasm")))

    def test_home_directory_mentions_override(self) -> None:
        """Test the home error names the override variable."""
        assert "GOOSEBOY_CRATES_DIR" in str(HomeDirectoryUnavailableError())

    def test_install_error_with_reason(self) -> None:
        """Test the reason is appended to the install message."""
        err = InstallError(Path("/t/foo.gbcrate"), "destination is the packed archive itself")
        assert str(err) == (
            "Failed to install crate to /t/foo.gbcrate: destination is the packed archive itself"
        )

    def test_install_error_without_reason(self) -> None:
        """Test the bare install message keeps I/O details internal."""
        err = InstallError(Path("/t"), internal_details="[Errno 28] No space left on device")
        assert str(err) == "Failed to install crate to /t"

    def test_input_read_error(self) -> None:
        """Test unreadable inputs name the file."""
        assert str(InputReadError(Path("/w/crate.json"))) == "Cannot read /w/crate.json"
