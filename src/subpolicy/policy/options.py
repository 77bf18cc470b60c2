"""Relevance options for the subtitle policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from subpolicy import feature_flags

if TYPE_CHECKING:
    from subpolicy.config.models import RelevanceConfig


@dataclass(frozen=True)
class RelevanceOptions:
    """Opt-in relaxations of the default relevance rules.

    Both options default to off, which reproduces the established outcomes:
    an explicit language match alone is not relevant, and a bare forced
    stream is not relevant under "forced_only".
    """

    language_match_relevant: bool = False
    """Treat a stream in the explicitly preferred language as relevant."""

    forced_audio_match_relevant: bool = False
    """Under "forced_only", treat a forced stream in the playing audio
    language as relevant."""

    @classmethod
    def from_feature_flags(cls) -> RelevanceOptions:
        """Build options from the SUBPOLICY_FEATURE_* environment flags."""
        return cls(
            language_match_relevant=feature_flags.is_enabled(
                feature_flags.LANGUAGE_MATCH_RELEVANT
            ),
            forced_audio_match_relevant=feature_flags.is_enabled(
                feature_flags.FORCED_AUDIO_MATCH_RELEVANT
            ),
        )

    @classmethod
    def from_config(cls, config: RelevanceConfig) -> RelevanceOptions:
        """Build options from config, letting enabled feature flags turn
        options on."""
        flags = cls.from_feature_flags()
        return cls(
            language_match_relevant=(
                config.language_match_relevant or flags.language_match_relevant
            ),
            forced_audio_match_relevant=(
                config.forced_audio_match_relevant
                or flags.forced_audio_match_relevant
            ),
        )
