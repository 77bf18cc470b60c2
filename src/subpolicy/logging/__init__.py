"""Structured logging module for subpolicy.

Provides configurable logging with JSON format support and file rotation.
Includes selection context support for tagging logs with the media item.
"""

from subpolicy.logging.config import configure_logging
from subpolicy.logging.context import (
    SelectionContextFilter,
    clear_selection_context,
    get_selection_context,
    selection_context,
    set_selection_context,
)
from subpolicy.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "SelectionContextFilter",
    "clear_selection_context",
    "configure_logging",
    "get_selection_context",
    "selection_context",
    "set_selection_context",
]
