"""Selection context for structured logging.

Provides context propagation using contextvars, enabling automatic
injection of the media item being evaluated into log records.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_item_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "item_id", default=None
)


def set_selection_context(item_id: str | None) -> None:
    """Set the media item for the current selection pass."""
    _item_id.set(item_id)


def clear_selection_context() -> None:
    """Clear the current selection context."""
    _item_id.set(None)


def get_selection_context() -> str | None:
    """Return the current media item identifier, or None."""
    return _item_id.get()


@contextmanager
def selection_context(item_id: str) -> Generator[None, None, None]:
    """Context manager for one selection pass.

    Sets the item on entry and restores the previous value on exit.

    Example:
        with selection_context("movie.mkv"):
            policy.select(candidates)  # Debug logs carry [movie.mkv]
    """
    token = _item_id.set(item_id)
    try:
        yield
    finally:
        _item_id.reset(token)


class SelectionContextFilter(logging.Filter):
    """Logging filter that injects the selection context into log records.

    Adds `item_id` for JSON output and a compact `item_tag` such as
    "[movie.mkv] " for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject selection context into log record.

        Returns:
            Always True (does not filter, only enriches).
        """
        item_id = get_selection_context()
        record.item_id = item_id
        record.item_tag = f"[{item_id}] " if item_id else ""
        return True
