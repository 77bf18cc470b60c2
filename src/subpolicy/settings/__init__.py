"""Preference settings: validation, loading and the shared store."""

from subpolicy.settings.loader import (
    SelectionRequest,
    SettingsValidationError,
    load_selection_request,
    request_from_dict,
    snapshot_from_settings,
)
from subpolicy.settings.store import PreferenceStore

__all__ = [
    "PreferenceStore",
    "SelectionRequest",
    "SettingsValidationError",
    "load_selection_request",
    "request_from_dict",
    "snapshot_from_settings",
]
