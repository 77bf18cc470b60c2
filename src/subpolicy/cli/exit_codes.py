"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (request, config)
    20-29: Target/selection errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for subpolicy CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    REQUEST_VALIDATION_ERROR = 10
    CONFIG_ERROR = 11

    # Target/selection errors (20-29)
    TARGET_NOT_FOUND = 20
    NO_STREAM_SELECTED = 22
