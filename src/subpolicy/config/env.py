"""Environment variable reader with dependency injection support.

This module provides the EnvReader class for reading and parsing environment
variables with type conversion. It supports dependency injection for testing
by accepting an optional env mapping.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        # Production usage (reads from os.environ)
        reader = EnvReader()
        level = reader.get_str("SUBPOLICY_LOG_LEVEL", "info")

        # Testing usage (inject custom env)
        reader = EnvReader(env={"SUBPOLICY_LOG_LEVEL": "debug"})
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
                 If None, reads from os.environ. Useful for testing.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string from environment variable.

        Args:
            var: Environment variable name.
            default: Default value if not set. Defaults to None.

        Returns:
            The environment variable value, or default if not set.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Get a path (with tilde expansion) from environment variable."""
        value = self._env.get(var)
        if value is None:
            return default
        return Path(value).expanduser()
