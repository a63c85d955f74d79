"""Configuration for git destinations.

Options that vary per run (first-commit override, committer identity, scratch
location, verbosity) are loaded from the environment and a local `.env` file.
The destination itself is described by a YAML document that is bound to
`DestinationSpec` and validated into an immutable `DestinationConfig`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from git_destination.git.commit_message import CommitGenerator
from git_destination.git.factory import CommitGeneratorFactory

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigValidationError(ValueError):
    """Raised when a destination description is missing a required field."""


class GitOptions(BaseSettings):
    """Git specific options."""

    first_commit: bool = Field(
        default=False,
        description="Push even if the pull ref does not exist yet; fails if it does",
    )
    committer_name: str | None = Field(
        default=None,
        description="Committer name for commits created in the scratch clone",
    )
    committer_email: str | None = Field(
        default=None,
        description="Committer email for commits created in the scratch clone",
    )
    repo_storage: Path | None = Field(
        default=None,
        description="Parent directory for scratch clones (system temp dir if unset)",
    )

    model_config = SettingsConfigDict(
        env_prefix="GIT_DESTINATION_",
        env_file=".env",
        extra="ignore",
    )


class GeneralOptions(BaseSettings):
    """Options shared by every command."""

    verbose: bool = Field(
        default=False,
        description="Log git commands and their output at INFO",
    )
    log_level: LogLevel = Field(
        default="INFO",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="GIT_DESTINATION_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class DestinationConfig(BaseModel):
    """Fully validated, immutable configuration of a git destination."""

    url: str
    pull_from_ref: str
    push_to_ref: str
    author: str
    committer_name: str | None = None
    committer_email: str | None = None
    first_commit: bool = False
    verbose: bool = False
    repo_storage: Path | None = None
    commit_generator: CommitGenerator

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("url", "pull_from_ref", "push_to_ref", "author")
    @classmethod
    def _require_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class DestinationSpec(BaseModel):
    """Unvalidated destination description, as written in YAML."""

    url: str | None = None
    pull_from_ref: str | None = Field(default=None, alias="pullFromRef")
    push_to_ref: str | None = Field(default=None, alias="pushToRef")
    author: str | None = None
    commit_generator: Literal["default", "gerrit"] = Field(
        default="default", alias="commitGenerator"
    )

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def with_options(
        self,
        git_options: GitOptions | None = None,
        general_options: GeneralOptions | None = None,
    ) -> DestinationConfig:
        """Validate required fields and build the immutable configuration.

        Raises:
            ConfigValidationError: If url, pullFromRef, pushToRef or author is missing.
        """
        git_options = git_options or GitOptions()
        general_options = general_options or GeneralOptions()

        return DestinationConfig(
            url=_check_not_missing(self.url, "url"),
            pull_from_ref=_check_not_missing(self.pull_from_ref, "pullFromRef"),
            push_to_ref=_check_not_missing(self.push_to_ref, "pushToRef"),
            author=_check_not_missing(self.author, "author"),
            committer_name=git_options.committer_name,
            committer_email=git_options.committer_email,
            first_commit=git_options.first_commit,
            verbose=general_options.verbose,
            repo_storage=git_options.repo_storage,
            commit_generator=CommitGeneratorFactory.create(self.commit_generator),
        )


def load_destination_spec(path: Path | str) -> DestinationSpec:
    """Read a destination description from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigValidationError: If the document is not a mapping or has unknown keys.
    """
    spec_path = Path(path)
    with open(spec_path, encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ConfigValidationError(f"{spec_path} is not a YAML mapping")

    try:
        return DestinationSpec.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid destination in {spec_path}: {exc}") from exc


def _check_not_missing(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ConfigValidationError(f"'{field}' is required")
    return value
