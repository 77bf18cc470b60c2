"""subpolicy - subtitle stream relevance and priority policy.

Usage:
    from subpolicy import SubtitlePolicy, PlaybackContext, PreferenceSnapshot

    snapshot = PreferenceSnapshot("eng", SubtitlePreference.original())
    policy = SubtitlePolicy(snapshot, PlaybackContext("eng"))
    best = policy.select(candidates)
"""

from subpolicy.domain import (
    NO_ACTIVE_STREAM,
    PlaybackContext,
    PreferenceSnapshot,
    StreamCandidate,
    StreamFlag,
    StreamSource,
    SubtitleMode,
    SubtitlePreference,
)
from subpolicy.language import UNKNOWN_LANGUAGE
from subpolicy.policy import RelevanceOptions, SubtitleDecision, SubtitlePolicy

__version__ = "0.1.0"

__all__ = [
    "NO_ACTIVE_STREAM",
    "UNKNOWN_LANGUAGE",
    "PlaybackContext",
    "PreferenceSnapshot",
    "RelevanceOptions",
    "StreamCandidate",
    "StreamFlag",
    "StreamSource",
    "SubtitleDecision",
    "SubtitleMode",
    "SubtitlePolicy",
    "SubtitlePreference",
    "__version__",
]
