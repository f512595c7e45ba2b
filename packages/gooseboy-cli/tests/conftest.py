"""Shared test fixtures for gooseboy-cli tests.

Provides CliRunner fixtures and a stand-in for the core pipeline so
commands can be exercised without cargo.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from gooseboy_core.models import PackResult, ResolvedProject, WorkspaceMetadata

PIPELINE_PATCH = "gooseboy_core.pipeline.CratePipeline"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def logging_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Replace logging setup so CLI runs do not reconfigure structlog globally.

    Returns:
        Keyword arguments of each configure_logging() call.
    """
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(
        "gooseboy_core.observability.configure_logging",
        lambda **kwargs: calls.append(kwargs),
    )
    return calls


@pytest.fixture
def resolved_project(tmp_path: Path) -> ResolvedProject:
    """A resolved single-crate project named ``foo``."""
    project = tmp_path / "foo"
    return ResolvedProject(
        project_directory=project,
        metadata=WorkspaceMetadata(target_directory=project / "target", packages=()),
    )


@pytest.fixture
def mock_pipeline(
    resolved_project: ResolvedProject, tmp_path: Path
) -> Generator[MagicMock, None, None]:
    """Patch CratePipeline with a mock returning canned results.

    Yields:
        The mock pipeline instance (``CratePipeline(...)`` return value).
    """
    archive = resolved_project.metadata.target_directory / "foo.gbcrate"
    with patch(PIPELINE_PATCH) as pipeline_cls:
        instance = pipeline_cls.return_value
        instance.build.return_value = resolved_project
        instance.pack.return_value = PackResult(
            archive_path=archive,
            installed_path=tmp_path / ".gooseboy" / "foo.gbcrate",
        )
        yield instance
