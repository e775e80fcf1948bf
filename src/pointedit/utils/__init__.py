"""Utility functions for pointedit.

This module provides utility functions including:

- Logging setup and configuration
- Editing session statistics
"""

from pointedit.utils.logging import (
    EditLogger,
    EditStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "EditLogger",
    "EditStats",
    "configure_logging",
    "get_logger",
]
