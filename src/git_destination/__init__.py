"""Git destination for source migrations.

Publishes a transformed working tree as a commit on a remote git repository
and recovers the origin reference of the last published commit.
"""

__version__ = "0.1.0"

from git_destination.core.config import DestinationConfig, DestinationSpec
from git_destination.destination.git_destination import GitDestination

__all__ = ["__version__", "DestinationConfig", "DestinationSpec", "GitDestination"]
