"""Domain models for subtitle selection.

All models are immutable value objects: the selection pipeline creates them
fresh for each pass and the policy never mutates them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from subpolicy.domain.enums import StreamFlag, StreamSource, SubtitleMode
from subpolicy.language import UNKNOWN_LANGUAGE, normalize_language

# Active stream index meaning "no subtitle stream is currently selected"
NO_ACTIVE_STREAM = -1

# Setting keywords that select a non-explicit subtitle mode
_KEYWORD_MODES: dict[str, SubtitleMode] = {
    "none": SubtitleMode.NONE,
    "original": SubtitleMode.ORIGINAL,
    "forced_only": SubtitleMode.FORCED_ONLY,
}


@dataclass(frozen=True)
class SubtitlePreference:
    """Tagged subtitle preference: an explicit language or a keyword mode.

    Use the named constructors rather than building instances directly so
    that `language` is set exactly when the mode is EXPLICIT.
    """

    mode: SubtitleMode
    language: str | None = None

    def __post_init__(self) -> None:
        """Validate that only EXPLICIT carries a language."""
        if self.mode is SubtitleMode.EXPLICIT:
            if self.language is None:
                raise ValueError("explicit subtitle preference requires a language")
            object.__setattr__(self, "language", normalize_language(self.language))
        elif self.language is not None:
            raise ValueError(f"{self.mode.value} preference does not take a language")

    @classmethod
    def explicit(cls, language: str) -> SubtitlePreference:
        """Prefer subtitles in the given language."""
        return cls(SubtitleMode.EXPLICIT, language)

    @classmethod
    def none(cls) -> SubtitlePreference:
        """Never auto-select subtitles."""
        return cls(SubtitleMode.NONE)

    @classmethod
    def original(cls) -> SubtitlePreference:
        """Prefer subtitles in the original production language."""
        return cls(SubtitleMode.ORIGINAL)

    @classmethod
    def forced_only(cls) -> SubtitlePreference:
        """Only auto-select forced subtitles."""
        return cls(SubtitleMode.FORCED_ONLY)

    @classmethod
    def parse(cls, value: str) -> SubtitlePreference:
        """Parse a subtitle-language setting value.

        Args:
            value: "none", "original" or "forced_only" (case-insensitive)
                select a keyword mode; any other token is a language tag.

        Returns:
            The parsed preference.

        Raises:
            ValueError: If the value is empty.
        """
        token = value.strip()
        if not token:
            raise ValueError("subtitle language setting must not be empty")
        mode = _KEYWORD_MODES.get(token.casefold())
        if mode is not None:
            return cls(mode)
        return cls.explicit(token)

    def to_setting(self) -> str:
        """Return the setting string this preference was parsed from."""
        if self.mode is SubtitleMode.EXPLICIT:
            return self.language or UNKNOWN_LANGUAGE
        return self.mode.value


@dataclass(frozen=True)
class PreferenceSnapshot:
    """User subtitle preferences captured once for a selection pass."""

    preferred_audio_language: str
    subtitle_preference: SubtitlePreference
    hearing_impaired: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "preferred_audio_language",
            normalize_language(self.preferred_audio_language),
        )


@dataclass(frozen=True)
class PlaybackContext:
    """Playback state the policy evaluates against."""

    played_audio_language: str = UNKNOWN_LANGUAGE
    active_stream_index: int = NO_ACTIVE_STREAM

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "played_audio_language",
            normalize_language(self.played_audio_language),
        )


@dataclass(frozen=True)
class StreamCandidate:
    """Descriptor of one subtitle stream offered by the source.

    `language` is normalized on construction (empty and "und" become
    UNKNOWN_LANGUAGE) and `flags` accepts any iterable of StreamFlag.
    """

    stream_index: int
    language: str = UNKNOWN_LANGUAGE
    flags: frozenset[StreamFlag] = field(default_factory=frozenset)
    source: StreamSource = StreamSource.OTHER
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "language", normalize_language(self.language))
        if not isinstance(self.flags, frozenset):
            object.__setattr__(self, "flags", frozenset(self.flags))

    def has_flag(self, flag: StreamFlag) -> bool:
        """Return True if the stream carries the flag."""
        return flag in self.flags

    @property
    def has_unknown_language(self) -> bool:
        """Return True if the stream declares no usable language."""
        return self.language == UNKNOWN_LANGUAGE


def make_flags(flags: Iterable[StreamFlag | str]) -> frozenset[StreamFlag]:
    """Build a flag set from enum members or their string values.

    Raises:
        ValueError: If a string does not name a StreamFlag.
    """
    return frozenset(f if isinstance(f, StreamFlag) else StreamFlag(f) for f in flags)
