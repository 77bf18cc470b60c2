"""Tests for the shared preference store."""

import threading

from subpolicy.domain import SubtitlePreference
from subpolicy.language import UNKNOWN_LANGUAGE
from subpolicy.settings import PreferenceStore


class TestPreferenceStore:
    """Tests for PreferenceStore."""

    def test_defaults(self):
        """A new store prefers original-language subtitles."""
        snapshot = PreferenceStore().snapshot()
        assert snapshot.preferred_audio_language == UNKNOWN_LANGUAGE
        assert snapshot.subtitle_preference == SubtitlePreference.original()
        assert snapshot.hearing_impaired is False

    def test_setters(self):
        """Individual setters change one field each."""
        store = PreferenceStore()
        store.set_audio_language("swe")
        store.set_subtitle_preference(SubtitlePreference.none())
        store.set_hearing_impaired(True)

        snapshot = store.snapshot()
        assert snapshot.preferred_audio_language == "swe"
        assert snapshot.subtitle_preference == SubtitlePreference.none()
        assert snapshot.hearing_impaired is True

    def test_update_leaves_none_fields(self):
        """update() only changes the fields given."""
        store = PreferenceStore(audio_language="eng", hearing_impaired=True)
        store.update(subtitle_preference=SubtitlePreference.explicit("jpn"))

        snapshot = store.snapshot()
        assert snapshot.preferred_audio_language == "eng"
        assert snapshot.subtitle_preference.language == "jpn"
        assert snapshot.hearing_impaired is True

    def test_snapshot_is_detached(self):
        """Later changes do not affect an existing snapshot."""
        store = PreferenceStore()
        snapshot = store.snapshot()
        store.set_hearing_impaired(True)

        assert snapshot.hearing_impaired is False

    def test_snapshots_consistent_under_concurrent_updates(self):
        """Snapshots never mix fields from different updates."""
        store = PreferenceStore(
            audio_language="eng",
            subtitle_preference=SubtitlePreference.explicit("eng"),
        )
        stop = threading.Event()

        def writer():
            toggle = False
            while not stop.is_set():
                lang = "swe" if toggle else "eng"
                store.update(
                    audio_language=lang,
                    subtitle_preference=SubtitlePreference.explicit(lang),
                    hearing_impaired=toggle,
                )
                toggle = not toggle

        thread = threading.Thread(target=writer)
        thread.start()
        try:
            for _ in range(2000):
                snapshot = store.snapshot()
                assert (
                    snapshot.preferred_audio_language
                    == snapshot.subtitle_preference.language
                )
                assert snapshot.hearing_impaired == (
                    snapshot.preferred_audio_language == "swe"
                )
        finally:
            stop.set()
            thread.join()
