"""Runtime configuration for gooseboy.

Settings are read from environment variables with the GOOSEBOY_ prefix.
The default install directory is derived from HOME (or USERPROFILE on
Windows) unless GOOSEBOY_CRATES_DIR overrides it.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gooseboy_core.errors import HomeDirectoryUnavailableError, InstallError

logger = structlog.get_logger(__name__)

# Directory under the user's home where crates are installed
CRATES_DIRNAME = ".gooseboy"

# Checked in order to locate the user's home directory
HOME_ENV_VARS = ("HOME", "USERPROFILE")


class GooseboySettings(BaseSettings):
    """Configuration for the build and pack pipeline.

    Example:
        >>> # From environment
        >>> settings = GooseboySettings()
        >>>
        >>> # Explicit
        >>> settings = GooseboySettings(cargo="/opt/rust/bin/cargo")
    """

    model_config = SettingsConfigDict(
        env_prefix="GOOSEBOY_",
        extra="ignore",
    )

    cargo: str = Field(
        default="cargo",
        description="Cargo executable used for metadata and build",
    )
    crates_dir: Path | None = Field(
        default=None,
        description="Default install directory (overrides ~/.gooseboy)",
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum log level",
    )
    log_json: bool = Field(
        default=False,
        description="Render log records as JSON lines",
    )


def home_directory(environ: Mapping[str, str] | None = None) -> Path:
    """Return the user's home directory from the environment.

    Args:
        environ: Environment mapping. Defaults to os.environ.

    Raises:
        HomeDirectoryUnavailableError: If no home variable is set.
    """
    env = os.environ if environ is None else environ
    for var in HOME_ENV_VARS:
        value = env.get(var)
        if value:
            return Path(value)
    raise HomeDirectoryUnavailableError()


def default_crates_directory(
    settings: GooseboySettings,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the default install directory, creating it if missing.

    Args:
        settings: Active settings; ``crates_dir`` wins when set.
        environ: Environment mapping used to find the home directory.

    Returns:
        Existing directory path.

    Raises:
        HomeDirectoryUnavailableError: If crates_dir is unset and the home
            directory cannot be determined.
        InstallError: If the directory cannot be created, for example
            because a regular file sits on the path.
    """
    folder = settings.crates_dir or home_directory(environ) / CRATES_DIRNAME
    if not folder.is_dir():
        logger.debug("creating_crates_directory", path=str(folder))
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InstallError(
                folder, "cannot create install directory", internal_details=str(e)
            ) from e
    return folder
