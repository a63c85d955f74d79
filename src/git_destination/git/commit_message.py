"""Commit message generators.

Every generator must end the message with the origin reference trailer
(``OriginRef: <ref>``); `GitDestination.get_previous_ref` finds the previously
published origin reference by scanning the log for that line.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from git_destination.git.repository import GitRepository

ORIGIN_REFERENCE_FIELD = "OriginRef"


def origin_trailer(origin_ref: str) -> str:
    return f"{ORIGIN_REFERENCE_FIELD}: {origin_ref}"


class CommitGenerator(ABC):
    """Abstract base class for commit message generators."""

    @abstractmethod
    def message(self, summary: str, repo: GitRepository, origin_ref: str) -> str:
        """Generate the message for the commit about to be created.

        Args:
            summary: Human readable summary of the migrated changes.
            repo: Repository whose index holds the staged, uncommitted tree.
            origin_ref: Reference of the migrated state in the origin.

        Returns:
            Full commit message ending with the origin reference trailer.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DefaultCommitGenerator(CommitGenerator):
    """Appends the origin reference trailer to the summary."""

    def message(self, summary: str, repo: GitRepository, origin_ref: str) -> str:
        return f"{summary}\n{origin_trailer(origin_ref)}\n"


class GerritCommitGenerator(CommitGenerator):
    """Adds a Gerrit ``Change-Id`` so pushes to ``refs/for/...`` create reviews.

    The Change-Id is derived from the staged tree, the origin reference and the
    summary, so re-exporting the same change reuses the same review.
    """

    def message(self, summary: str, repo: GitRepository, origin_ref: str) -> str:
        tree = repo.write_tree()
        digest = hashlib.sha1(
            f"{tree}\n{origin_ref}\n{summary}".encode("utf-8"), usedforsecurity=False
        ).hexdigest()
        return f"{summary}\n\nChange-Id: I{digest}\n{origin_trailer(origin_ref)}\n"
