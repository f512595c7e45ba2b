"""Copy packed crates into an install directory."""

from __future__ import annotations

import shutil
from pathlib import Path

import structlog

from gooseboy_core.errors import ArchiveNotFoundError, InstallError

logger = structlog.get_logger(__name__)


class CrateInstaller:
    """Installs ``.gbcrate`` archives.

    The default destination is injected rather than read from the
    environment here; see config.default_crates_directory().

    Attributes:
        default_destination: Directory used when install() gets none.
    """

    def __init__(self, default_destination: Path) -> None:
        """Initialize the installer.

        Args:
            default_destination: Fallback install directory.
        """
        self.default_destination = default_destination
        self._log = logger.bind(component="installer")

    def install(self, archive_path: Path, destination_directory: Path | None = None) -> Path:
        """Copy ``archive_path`` into ``destination_directory``.

        Missing directories are created. An existing file with the same name
        is overwritten.

        Args:
            archive_path: The archive to install.
            destination_directory: Target directory. Defaults to
                ``default_destination``.

        Returns:
            Path of the installed copy.

        Raises:
            ArchiveNotFoundError: If ``archive_path`` does not exist. Nothing
                is written in that case.
            InstallError: If the target is the archive itself, or the
                directory or copy cannot be written.
        """
        if not archive_path.is_file():
            raise ArchiveNotFoundError(archive_path)

        target = (destination_directory or self.default_destination) / archive_path.name
        if target.exists() and target.samefile(archive_path):
            raise InstallError(target, "destination is the packed archive itself")

        self._log.debug("copying_crate", source=str(archive_path), target=str(target))

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(archive_path, target)
        except OSError as e:
            raise InstallError(target, internal_details=str(e)) from e

        self._log.info("crate_installed", path=str(target))
        return target
