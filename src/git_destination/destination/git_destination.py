"""A git repository destination.

Each call works in its own scratch repository: the pull ref is fetched as the
baseline, the external working tree is committed on top of it and the result
is pushed to the push ref. The scratch repository is removed when the call
returns.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from git_destination.core.config import DestinationConfig
from git_destination.destination.base import Destination
from git_destination.git.commit_message import ORIGIN_REFERENCE_FIELD
from git_destination.git.repository import GitRepository, RepoErrorKind, RepoException

logger = logging.getLogger(__name__)

# `git log` indents message lines by four spaces.
ORIGIN_REFERENCE_LOG_PREFIX = f"    {ORIGIN_REFERENCE_FIELD}: "


class GitDestination(Destination):
    """Creates a commit in a git repository using the transformed worktree."""

    def __init__(self, config: DestinationConfig) -> None:
        self.config = config

    def process(
        self,
        workdir: Path,
        origin_ref: str,
        timestamp: int,
        changes_summary: str,
    ) -> None:
        logger.info(f"Exporting {workdir} to: {self!r}")

        with self._baseline() as scratch_clone:
            if not self.config.first_commit:
                scratch_clone.checkout_fetched_head()
            scratch_clone.set_identity(self.config.committer_name, self.config.committer_email)

            alternate = scratch_clone.with_work_tree(Path(workdir))
            alternate.stage_all()
            message = self.config.commit_generator.message(changes_summary, alternate, origin_ref)
            alternate.commit(self.config.author, timestamp, message)
            alternate.push(self.config.url, "HEAD", self.config.push_to_ref)

        logger.info(
            "Pushed change",
            extra={"origin_ref": origin_ref, "push_to_ref": self.config.push_to_ref},
        )

    def get_previous_ref(self) -> str | None:
        if self.config.first_commit:
            return None

        with self._baseline() as scratch_clone:
            commit = scratch_clone.rev_parse("FETCH_HEAD")
            log = scratch_clone.log(commit, 1)

        for line in log.split("\n"):
            if line.startswith(ORIGIN_REFERENCE_LOG_PREFIX):
                return line[len(ORIGIN_REFERENCE_LOG_PREFIX) :]

        logger.info(
            "No origin reference found in last commit",
            extra={"commit": commit, "pull_from_ref": self.config.pull_from_ref},
        )
        return None

    @contextmanager
    def _baseline(self) -> Iterator[GitRepository]:
        """Yield a scratch repository with the pull ref fetched (if it must exist)."""

        scratch_clone = GitRepository.init_scratch_repo(
            self.config.repo_storage, self.config.verbose
        )
        with scratch_clone:
            self._fetch_baseline(scratch_clone)
            yield scratch_clone

    def _fetch_baseline(self, scratch_clone: GitRepository) -> None:
        url = self.config.url
        ref = self.config.pull_from_ref
        try:
            scratch_clone.fetch(url, ref)
        except RepoException as exc:
            if exc.kind is not RepoErrorKind.REFERENCE_NOT_FOUND:
                raise
            if not self.config.first_commit:
                raise RepoException(
                    f"'{ref}' doesn't exist in '{url}'. "
                    "Use --first-commit flag if you want to push anyway",
                    kind=RepoErrorKind.REFERENCE_NOT_FOUND,
                ) from exc
            return

        if self.config.first_commit:
            raise RepoException(
                f"'{ref}' already exists in '{url}'.",
                kind=RepoErrorKind.POLICY_VIOLATION,
            )

    def __repr__(self) -> str:
        return (
            f"GitDestination(repoUrl={self.config.url}, "
            f"pullFromRef={self.config.pull_from_ref}, "
            f"pushToRef={self.config.push_to_ref}, "
            f"firstCommit={self.config.first_commit}, "
            f"committerName={self.config.committer_name}, "
            f"committerEmail={self.config.committer_email}, "
            f"verbose={self.config.verbose}, "
            f"commitGenerator={self.config.commit_generator!r})"
        )
