"""Thread-safe in-process preference store.

The store holds the mutable subtitle settings shared by the application and
hands out consistent snapshots: all three fields of a snapshot are read
under one lock, so a selection pass never sees a setting change part way
through.
"""

from __future__ import annotations

import threading

from subpolicy.domain import PreferenceSnapshot, SubtitlePreference
from subpolicy.language import UNKNOWN_LANGUAGE


class PreferenceStore:
    """Mutable holder for subtitle preferences.

    Example:
        store = PreferenceStore()
        store.update(subtitle_preference=SubtitlePreference.original())
        policy = SubtitlePolicy(store.snapshot(), context)
    """

    def __init__(
        self,
        audio_language: str = UNKNOWN_LANGUAGE,
        subtitle_preference: SubtitlePreference | None = None,
        hearing_impaired: bool = False,
    ) -> None:
        self._lock = threading.Lock()
        self._audio_language = audio_language
        self._subtitle_preference = (
            subtitle_preference
            if subtitle_preference is not None
            else SubtitlePreference.original()
        )
        self._hearing_impaired = hearing_impaired

    def set_audio_language(self, language: str) -> None:
        with self._lock:
            self._audio_language = language

    def set_subtitle_preference(self, preference: SubtitlePreference) -> None:
        with self._lock:
            self._subtitle_preference = preference

    def set_hearing_impaired(self, enabled: bool) -> None:
        with self._lock:
            self._hearing_impaired = enabled

    def update(
        self,
        *,
        audio_language: str | None = None,
        subtitle_preference: SubtitlePreference | None = None,
        hearing_impaired: bool | None = None,
    ) -> None:
        """Change several settings atomically. None leaves a field as is."""
        with self._lock:
            if audio_language is not None:
                self._audio_language = audio_language
            if subtitle_preference is not None:
                self._subtitle_preference = subtitle_preference
            if hearing_impaired is not None:
                self._hearing_impaired = hearing_impaired

    def snapshot(self) -> PreferenceSnapshot:
        """Return an immutable snapshot of all settings."""
        with self._lock:
            return PreferenceSnapshot(
                preferred_audio_language=self._audio_language,
                subtitle_preference=self._subtitle_preference,
                hearing_impaired=self._hearing_impaired,
            )
