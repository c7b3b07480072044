"""Utility functions for seedconn."""

from seedconn.utils.logging import setup_logging, timer, log_section
from seedconn.utils.exceptions import (
    SeedConnError,
    ConfigurationError,
    SelectionError,
    DataError,
    UnrecognizedOptionWarning,
)

__all__ = [
    # Logging
    "setup_logging",
    "timer",
    "log_section",
    # Exceptions
    "SeedConnError",
    "ConfigurationError",
    "SelectionError",
    "DataError",
    "UnrecognizedOptionWarning",
]
