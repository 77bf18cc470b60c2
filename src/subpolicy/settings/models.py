"""Pydantic models for settings snapshots and selection requests.

These models validate untrusted input (settings mappings and YAML request
documents) before it is converted to the frozen domain models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from subpolicy.domain import NO_ACTIVE_STREAM, StreamFlag, StreamSource


class PreferenceSettingsModel(BaseModel):
    """User preference settings.

    Accepts either the short field names or the host settings keys
    ("locale.audiolanguage", "locale.subtitlelanguage",
    "accessibility.subhearing").
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    audio_language: str = Field(default="", alias="locale.audiolanguage")
    subtitle_language: str = Field(
        default="original", alias="locale.subtitlelanguage"
    )
    hearing_impaired: bool = Field(default=False, alias="accessibility.subhearing")

    @field_validator("subtitle_language")
    @classmethod
    def validate_subtitle_language(cls, v: str) -> str:
        """Reject empty subtitle language settings."""
        if not v.strip():
            raise ValueError(
                "subtitle_language must be 'none', 'original', 'forced_only' "
                "or a language tag"
            )
        return v


class PlaybackModel(BaseModel):
    """Playback state section of a selection request."""

    model_config = ConfigDict(extra="forbid")

    audio_language: str = ""
    active_stream: int = NO_ACTIVE_STREAM


class StreamModel(BaseModel):
    """One subtitle stream of a selection request."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(ge=0)
    language: str | None = None
    flags: list[StreamFlag] = Field(default_factory=list)
    source: StreamSource = StreamSource.OTHER
    name: str = ""

    @field_validator("flags", mode="before")
    @classmethod
    def normalize_flags(cls, v: object) -> object:
        """Accept flag names in any case."""
        if isinstance(v, list):
            return [f.strip().casefold() if isinstance(f, str) else f for f in v]
        return v

    @field_validator("source", mode="before")
    @classmethod
    def normalize_source(cls, v: object) -> object:
        """Accept source names in any case."""
        if isinstance(v, str):
            return v.strip().casefold()
        return v


class SelectionRequestModel(BaseModel):
    """A complete selection request: preferences, playback and streams."""

    model_config = ConfigDict(extra="forbid")

    preferences: PreferenceSettingsModel = Field(
        default_factory=PreferenceSettingsModel
    )
    playback: PlaybackModel = Field(default_factory=PlaybackModel)
    streams: list[StreamModel] = Field(default_factory=list)

    @field_validator("streams")
    @classmethod
    def validate_unique_indices(cls, v: list[StreamModel]) -> list[StreamModel]:
        """Stream indices identify streams and must be unique."""
        seen: set[int] = set()
        for stream in v:
            if stream.index in seen:
                raise ValueError(f"duplicate stream index {stream.index}")
            seen.add(stream.index)
        return v
