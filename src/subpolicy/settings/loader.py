"""Loading preference snapshots and selection requests.

Converts validated settings into the immutable domain models consumed by
the subtitle policy.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from subpolicy.domain import (
    PlaybackContext,
    PreferenceSnapshot,
    StreamCandidate,
    SubtitlePreference,
)
from subpolicy.settings.models import (
    PreferenceSettingsModel,
    SelectionRequestModel,
)

logger = logging.getLogger(__name__)


class SettingsValidationError(Exception):
    """Error during settings or selection request validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


@dataclass(frozen=True)
class SelectionRequest:
    """Inputs of one selection pass loaded from a request document."""

    snapshot: PreferenceSnapshot
    context: PlaybackContext
    candidates: tuple[StreamCandidate, ...]


def _format_validation_error(error: ValidationError, what: str) -> tuple[str, str]:
    """Format a Pydantic validation error into a user-friendly message.

    Returns:
        Tuple of (message, field location).
    """
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"{what} validation failed: {loc}: {msg}", loc
        return f"{what} validation failed: {msg}", ""
    return f"{what} validation failed: {error}", ""


def _to_snapshot(model: PreferenceSettingsModel) -> PreferenceSnapshot:
    return PreferenceSnapshot(
        preferred_audio_language=model.audio_language,
        subtitle_preference=SubtitlePreference.parse(model.subtitle_language),
        hearing_impaired=model.hearing_impaired,
    )


def snapshot_from_settings(settings: Mapping[str, Any]) -> PreferenceSnapshot:
    """Build a preference snapshot from a settings mapping.

    Args:
        settings: Mapping keyed by field names ("audio_language",
            "subtitle_language", "hearing_impaired") or host settings keys
            ("locale.audiolanguage", "locale.subtitlelanguage",
            "accessibility.subhearing").

    Returns:
        Immutable preference snapshot.

    Raises:
        SettingsValidationError: If the settings are invalid.
    """
    try:
        model = PreferenceSettingsModel.model_validate(dict(settings))
    except ValidationError as e:
        message, loc = _format_validation_error(e, "Settings")
        raise SettingsValidationError(message, loc) from e

    return _to_snapshot(model)


def request_from_dict(data: dict[str, Any]) -> SelectionRequest:
    """Build a selection request from a parsed document.

    Args:
        data: Dictionary with "preferences", "playback" and "streams" keys.

    Returns:
        Validated selection request.

    Raises:
        SettingsValidationError: If the document is invalid.
    """
    try:
        model = SelectionRequestModel.model_validate(data)
    except ValidationError as e:
        message, loc = _format_validation_error(e, "Request")
        raise SettingsValidationError(message, loc) from e

    candidates = tuple(
        StreamCandidate(
            stream_index=s.index,
            language=s.language or "",
            flags=frozenset(s.flags),
            source=s.source,
            name=s.name,
        )
        for s in model.streams
    )
    return SelectionRequest(
        snapshot=_to_snapshot(model.preferences),
        context=PlaybackContext(
            played_audio_language=model.playback.audio_language,
            active_stream_index=model.playback.active_stream,
        ),
        candidates=candidates,
    )


def load_selection_request(path: Path) -> SelectionRequest:
    """Load and validate a selection request from a YAML file.

    Args:
        path: Path to the YAML request document.

    Returns:
        Validated selection request.

    Raises:
        SettingsValidationError: If the document is invalid.
        FileNotFoundError: If the path does not exist or is not a file.
    """
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {path}")
    if not path.is_file():
        raise FileNotFoundError(f"Request path is not a file: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsValidationError(f"Invalid YAML syntax: {e}") from e
    except UnicodeDecodeError as e:
        raise SettingsValidationError(f"Request file is not valid UTF-8: {e}") from e
    except OSError as e:
        raise SettingsValidationError(f"Cannot read request file: {e}") from e

    if data is None:
        raise SettingsValidationError("Request file is empty")

    if not isinstance(data, dict):
        raise SettingsValidationError("Request file must be a YAML mapping")

    request = request_from_dict(data)
    logger.debug(
        "Loaded selection request %s with %d streams",
        path,
        len(request.candidates),
    )
    return request
