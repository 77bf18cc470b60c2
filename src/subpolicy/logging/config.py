"""Logging configuration for subpolicy.

configure_logging() installs the root handlers described by a LoggingConfig.
Every handler carries a SelectionContextFilter, so lines logged during a
selection pass are tagged with the media item in both output formats.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from subpolicy.logging.context import SelectionContextFilter
from subpolicy.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from subpolicy.config.models import LoggingConfig

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# item_tag is "[movie.mkv] " inside a selection context, empty otherwise
TEXT_FORMAT = "%(asctime)s - %(item_tag)s%(name)s - %(levelname)s - %(message)s"


def _make_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None if it cannot be opened."""
    if not config.file:
        return None
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to config.

    Logs go to the configured file, to stderr, or both. Stderr is used as a
    fallback when no file is configured or it cannot be opened.

    Args:
        config: Logging configuration.
    """
    level = _LEVELS.get(config.level.casefold(), logging.INFO)
    formatter = _make_formatter(config)

    handlers: list[logging.Handler] = []
    file_handler = _open_log_file(config)
    if file_handler is not None:
        handlers.append(file_handler)
    if config.include_stderr or file_handler is None:
        handlers.append(logging.StreamHandler(sys.stderr))

    context_filter = SelectionContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers[:] = handlers
