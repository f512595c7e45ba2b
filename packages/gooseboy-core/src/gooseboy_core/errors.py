"""Custom exception hierarchy for gooseboy-core.

This module defines the exception classes raised by the build and
packaging pipeline:
- GooseboyError: Base exception for all gooseboy-related errors
- Toolchain errors: cargo could not be run or returned garbage
- Resolution errors: the requested package does not exist
- Packaging errors: inputs missing or unreadable, archive not written
- Install errors: the archive could not be copied into place

User-facing messages are safe to display. Technical details (stderr,
parser messages) are logged internally via structlog.
"""

from __future__ import annotations

from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class GooseboyError(Exception):
    """Base exception for gooseboy.

    All gooseboy exceptions inherit from this class. User-facing messages
    are safe to display; technical details are logged internally.

    Args:
        user_message: Message to display to the user.
        internal_details: Optional technical details for logging, such as
            captured stderr of a toolchain process.

    Example:
        >>> raise GooseboyError(
        ...     "cargo metadata failed",
        ...     internal_details="error: could not find `Cargo.toml`",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize GooseboyError with user message and optional internal details.

        Args:
            user_message: Message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details

        if internal_details:
            logger.error(
                "gooseboy_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ToolchainInvocationError(GooseboyError):
    """Raised when a toolchain query cannot be started or exits non-zero.

    Example:
        >>> raise ToolchainInvocationError(
        ...     "cargo metadata exited with code 101",
        ...     internal_details="error: could not find `Cargo.toml` in `/tmp`",
        ... )
    """

    pass


class MalformedMetadataError(GooseboyError):
    """Raised when cargo metadata output is not the expected document.

    Use this exception when:
    - stdout is not valid JSON
    - `target_directory` or `packages` is missing or mistyped
    - a package record lacks `name` or `manifest_path`
    """

    pass


class PackageNotFoundError(GooseboyError):
    """Raised when no package in the workspace matches a name or manifest.

    Always includes the list of available packages for actionable feedback.

    Attributes:
        package_name: The requested package name, or the manifest path that
            failed to match.
        available_packages: Package names present in the workspace.

    Example:
        >>> raise PackageNotFoundError("game", ["engine", "editor"])
        # User sees: "Package 'game' not found. Available: engine, editor"
    """

    def __init__(
        self,
        package_name: str,
        available_packages: list[str],
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize PackageNotFoundError with available packages.

        Args:
            package_name: Name (or manifest path) that was looked up.
            available_packages: Names of packages in the workspace.
            internal_details: Technical details for internal logging only.
        """
        available_str = ", ".join(available_packages) if available_packages else "none"
        super().__init__(
            f"Package '{package_name}' not found. Available: {available_str}",
            internal_details=internal_details,
        )
        self.package_name = package_name
        self.available_packages = available_packages


class AmbiguousPackageError(PackageNotFoundError):
    """Raised when a multi-package workspace is used without picking a package.

    Example:
        >>> raise AmbiguousPackageError(Path("/ws"), ["a", "b"])
        # User sees: "/ws is a workspace with several packages; pass one of: a, b"
    """

    def __init__(self, search_root: Path, available_packages: list[str]) -> None:
        """Initialize AmbiguousPackageError.

        Args:
            search_root: Directory the resolution started from.
            available_packages: Names of packages in the workspace.
        """
        GooseboyError.__init__(
            self,
            f"{search_root} is a workspace with several packages; "
            f"pass one of: {', '.join(available_packages)}",
        )
        self.package_name = str(search_root)
        self.available_packages = available_packages
        self.search_root = search_root


class BuildFailedError(GooseboyError):
    """Raised when `cargo build` exits with a non-zero status.

    Attributes:
        exit_code: Exit code reported by cargo (None if killed by a signal).
    """

    def __init__(self, exit_code: int | None) -> None:
        """Initialize BuildFailedError.

        Args:
            exit_code: Exit code of the build process.
        """
        super().__init__(f"Build failed: cargo exited with code {exit_code}")
        self.exit_code = exit_code


class ProcessSpawnError(GooseboyError):
    """Raised when the toolchain executable cannot be launched.

    Attributes:
        executable: The program that could not be started.
    """

    def __init__(self, executable: str, *, internal_details: str | None = None) -> None:
        """Initialize ProcessSpawnError.

        Args:
            executable: Program name or path that failed to start.
            internal_details: OS error text for internal logging.
        """
        super().__init__(
            f"Could not run '{executable}'. Is the Rust toolchain installed and on PATH?",
            internal_details=internal_details,
        )
        self.executable = executable


class ArtifactNotFoundError(GooseboyError):
    """Raised when the compiled wasm binary is missing at pack time.

    Attributes:
        path: Expected location of the binary.
    """

    def __init__(self, path: Path) -> None:
        """Initialize ArtifactNotFoundError.

        Args:
            path: Expected location of the compiled binary.
        """
        super().__init__(f"Compiled artifact not found: {path}. Run 'gooseboy build' first.")
        self.path = path


class ManifestNotFoundError(GooseboyError):
    """Raised when the project has no crate.json next to its Cargo.toml.

    Attributes:
        path: Expected location of crate.json.
    """

    def __init__(self, path: Path) -> None:
        """Initialize ManifestNotFoundError.

        Args:
            path: Expected location of crate.json.
        """
        super().__init__(f"Crate manifest not found: {path}")
        self.path = path


class InputReadError(GooseboyError):
    """Raised when a packaging input exists but cannot be read.

    Covers permission failures and other I/O errors on the compiled
    binary or crate.json, as opposed to the file simply being absent.

    Attributes:
        path: The unreadable input file.
    """

    def __init__(self, path: Path, *, internal_details: str | None = None) -> None:
        """Initialize InputReadError.

        Args:
            path: The unreadable input file.
            internal_details: Underlying I/O error for internal logging.
        """
        super().__init__(f"Cannot read {path}", internal_details=internal_details)
        self.path = path


class ArchiveWriteError(GooseboyError):
    """Raised on any I/O failure while writing a crate archive.

    Attributes:
        path: Archive path that was being written.
    """

    def __init__(self, path: Path, *, internal_details: str | None = None) -> None:
        """Initialize ArchiveWriteError.

        Args:
            path: Archive path that was being written.
            internal_details: Underlying I/O error for internal logging.
        """
        super().__init__(
            f"Failed to write crate archive: {path}",
            internal_details=internal_details,
        )
        self.path = path


class ArchiveNotFoundError(GooseboyError):
    """Raised when installing an archive that does not exist.

    Attributes:
        path: The missing archive path.
    """

    def __init__(self, path: Path) -> None:
        """Initialize ArchiveNotFoundError.

        Args:
            path: The missing archive path.
        """
        super().__init__(f"Crate archive not found: {path}")
        self.path = path


class InstallError(GooseboyError):
    """Raised when a crate archive cannot be copied into place.

    Also raised when the install directory itself cannot be created, and
    when the destination would overwrite the archive being installed.

    Attributes:
        path: Install target (file or directory) that could not be written.

    Example:
        >>> raise InstallError(
        ...     Path("/home/me/.gooseboy/foo.gbcrate"),
        ...     internal_details="[Errno 28] No space left on device",
        ... )
    """

    def __init__(
        self,
        path: Path,
        reason: str | None = None,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize InstallError.

        Args:
            path: Install target that could not be written.
            reason: Short user-facing explanation appended to the message.
            internal_details: Underlying I/O error for internal logging.
        """
        message = f"Failed to install crate to {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, internal_details=internal_details)
        self.path = path
        self.reason = reason


class HomeDirectoryUnavailableError(GooseboyError):
    """Raised when neither HOME nor USERPROFILE is set.

    The default install directory lives under the user's home, so it cannot
    be computed. Set GOOSEBOY_CRATES_DIR or pass a destination explicitly.
    """

    def __init__(self) -> None:
        """Initialize HomeDirectoryUnavailableError."""
        super().__init__(
            "Cannot determine home directory (HOME/USERPROFILE unset). "
            "Set GOOSEBOY_CRATES_DIR or pass a destination path."
        )
