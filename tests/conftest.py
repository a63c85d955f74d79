"""Test configuration and fixtures."""

from pathlib import Path

import pytest

from git_destination.core.config import DestinationConfig, DestinationSpec, GitOptions
from git_destination.git.commit_message import DefaultCommitGenerator


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep stray `.env` files and GIT_DESTINATION_* variables out of tests."""
    for name in (
        "GIT_DESTINATION_FIRST_COMMIT",
        "GIT_DESTINATION_COMMITTER_NAME",
        "GIT_DESTINATION_COMMITTER_EMAIL",
        "GIT_DESTINATION_REPO_STORAGE",
        "GIT_DESTINATION_VERBOSE",
        "GIT_DESTINATION_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def destination_spec() -> DestinationSpec:
    """Provide a complete destination description."""
    return DestinationSpec(
        url="u",
        pull_from_ref="master",
        push_to_ref="master",
        author="Copy Bot <copybot@example.com>",
    )


@pytest.fixture
def destination_config(destination_spec: DestinationSpec) -> DestinationConfig:
    """Provide a validated incremental (non first-commit) configuration."""
    return destination_spec.with_options(
        GitOptions(committer_name="Committer", committer_email="committer@example.com")
    )


@pytest.fixture
def first_commit_config(destination_config: DestinationConfig) -> DestinationConfig:
    """Provide a validated first-commit configuration."""
    return destination_config.model_copy(update={"first_commit": True})


@pytest.fixture
def default_generator() -> DefaultCommitGenerator:
    return DefaultCommitGenerator()
