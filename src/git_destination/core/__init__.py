"""Core package initialization."""

from git_destination.core.config import (
    ConfigValidationError,
    DestinationConfig,
    DestinationSpec,
    GeneralOptions,
    GitOptions,
    load_destination_spec,
)

__all__ = [
    "ConfigValidationError",
    "DestinationConfig",
    "DestinationSpec",
    "GeneralOptions",
    "GitOptions",
    "load_destination_spec",
]
