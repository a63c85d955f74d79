"""Factory for creating commit message generators."""

import logging

from git_destination.git.commit_message import (
    CommitGenerator,
    DefaultCommitGenerator,
    GerritCommitGenerator,
)

logger = logging.getLogger(__name__)


class CommitGeneratorFactory:
    """Factory for creating commit generator instances."""

    @staticmethod
    def create(name: str) -> CommitGenerator:
        """Create a commit generator by name.

        Args:
            name: ``"default"`` or ``"gerrit"``.

        Returns:
            Commit generator instance.

        Raises:
            ValueError: If the generator name is not supported.
        """
        logger.debug(f"Creating commit generator: {name}")

        if name == "default":
            return DefaultCommitGenerator()
        elif name == "gerrit":
            return GerritCommitGenerator()
        else:
            raise ValueError(f"Unsupported commit generator: {name}")
