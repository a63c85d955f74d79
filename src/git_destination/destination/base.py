"""Abstract base class for migration destinations."""

from abc import ABC, abstractmethod
from pathlib import Path


class Destination(ABC):
    """A place where a migrated working tree is published.

    The migration pipeline asks the destination for the origin reference it
    last published, computes the changes since then, and hands the resulting
    working tree back to `process`.
    """

    @abstractmethod
    def process(
        self,
        workdir: Path,
        origin_ref: str,
        timestamp: int,
        changes_summary: str,
    ) -> None:
        """Publish the contents of ``workdir`` as a single change.

        Args:
            workdir: Directory holding the transformed tree.
            origin_ref: Reference of the migrated state in the origin.
            timestamp: Author date, in seconds since the epoch (UTC).
            changes_summary: Summary used to build the commit message.
        """
        pass

    @abstractmethod
    def get_previous_ref(self) -> str | None:
        """Return the origin reference of the last published change, if any."""
        pass
