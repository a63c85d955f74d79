"""Git package initialization."""

from git_destination.git.commit_message import (
    ORIGIN_REFERENCE_FIELD,
    CommitGenerator,
    DefaultCommitGenerator,
    GerritCommitGenerator,
)
from git_destination.git.factory import CommitGeneratorFactory
from git_destination.git.repository import GitRepository, RepoErrorKind, RepoException

__all__ = [
    "ORIGIN_REFERENCE_FIELD",
    "CommitGenerator",
    "CommitGeneratorFactory",
    "DefaultCommitGenerator",
    "GerritCommitGenerator",
    "GitRepository",
    "RepoErrorKind",
    "RepoException",
]
