"""Destination package initialization."""

from git_destination.destination.base import Destination
from git_destination.destination.git_destination import GitDestination

__all__ = [
    "Destination",
    "GitDestination",
]
