"""Shared test fixtures for subpolicy."""

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from subpolicy.config import clear_config_cache
from subpolicy.domain import (
    NO_ACTIVE_STREAM,
    PlaybackContext,
    PreferenceSnapshot,
    StreamCandidate,
    StreamFlag,
    StreamSource,
    SubtitlePreference,
)
from subpolicy.feature_flags import known_flags
from subpolicy.policy import RelevanceOptions, SubtitlePolicy


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config at an empty temp location and clear feature flags.

    Keeps a developer's ~/.subpolicy/config.toml and SUBPOLICY_* variables
    from leaking into tests.
    """
    monkeypatch.setenv("SUBPOLICY_CONFIG_PATH", str(tmp_path / "config.toml"))
    for var in ("SUBPOLICY_LOG_LEVEL", "SUBPOLICY_LOG_FILE", "SUBPOLICY_LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    for name in known_flags():
        monkeypatch.delenv(f"SUBPOLICY_FEATURE_{name}", raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


def make_stream(
    index: int = 0,
    language: str = "eng",
    flags: Iterable[StreamFlag] = (),
    source: StreamSource = StreamSource.OTHER,
    name: str = "",
) -> StreamCandidate:
    """Build a subtitle stream candidate with test-friendly defaults."""
    return StreamCandidate(
        stream_index=index,
        language=language,
        flags=frozenset(flags),
        source=source,
        name=name,
    )


def make_policy(
    subtitle: SubtitlePreference | str = "original",
    hearing_impaired: bool = False,
    audio_language: str = "eng",
    played_audio_language: str = "",
    active_stream: int = NO_ACTIVE_STREAM,
    options: RelevanceOptions | None = None,
) -> SubtitlePolicy:
    """Build a policy; string preferences are parsed like settings values."""
    if isinstance(subtitle, str):
        subtitle = SubtitlePreference.parse(subtitle)
    snapshot = PreferenceSnapshot(
        preferred_audio_language=audio_language,
        subtitle_preference=subtitle,
        hearing_impaired=hearing_impaired,
    )
    return SubtitlePolicy(
        snapshot, PlaybackContext(played_audio_language, active_stream), options
    )


@pytest.fixture
def stream_factory() -> Callable[..., StreamCandidate]:
    """Return the make_stream factory."""
    return make_stream


@pytest.fixture
def policy_factory() -> Callable[..., SubtitlePolicy]:
    """Return the make_policy factory."""
    return make_policy


@pytest.fixture
def request_dir(tmp_path: Path) -> Path:
    """Directory for selection request documents."""
    path = tmp_path / "requests"
    path.mkdir()
    return path
