"""Custom logging handlers for subpolicy.

Provides JSONFormatter for structured log output. Records emitted while a
selection context is active carry the media item, and the per-stream
decision lines logged by the policy carry a `decision` object.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has, plus the ones added by formatting and by
# SelectionContextFilter
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "item_id", "item_tag"}

# Extras passed by SubtitlePolicy.evaluate for each stream
DECISION_FIELDS: tuple[str, ...] = ("stream_index", "relevant", "reason", "rank")


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys:
    - timestamp: ISO-8601 UTC
    - level, message, logger (omitted for the root logger)
    - item: media item of the current selection context, if any
    - decision: stream_index/relevant/reason/rank of a policy decision line
    - context: any other extras
    - exception: formatted traceback, if any
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name

        item_id = getattr(record, "item_id", None)
        if item_id:
            entry["item"] = item_id

        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        decision = {
            key: extras.pop(key) for key in DECISION_FIELDS if key in extras
        }
        if decision:
            entry["decision"] = decision
        if extras:
            entry["context"] = extras

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
