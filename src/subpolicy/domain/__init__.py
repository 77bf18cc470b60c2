"""Domain models and enums for subtitle selection.

This package contains the value types consumed by the subtitle policy:

- Domain models: PreferenceSnapshot, PlaybackContext, StreamCandidate,
  SubtitlePreference
- Domain enums: StreamFlag, StreamSource, SubtitleMode
- Constants: NO_ACTIVE_STREAM

Usage:
    from subpolicy.domain import StreamCandidate, StreamFlag, StreamSource
    from subpolicy.domain import PreferenceSnapshot, SubtitlePreference
"""

from .enums import (
    StreamFlag,
    StreamSource,
    SubtitleMode,
)
from .models import (
    NO_ACTIVE_STREAM,
    PlaybackContext,
    PreferenceSnapshot,
    StreamCandidate,
    SubtitlePreference,
    make_flags,
)

__all__ = [
    # Models
    "PreferenceSnapshot",
    "PlaybackContext",
    "StreamCandidate",
    "SubtitlePreference",
    "make_flags",
    # Constants
    "NO_ACTIVE_STREAM",
    # Enums
    "StreamFlag",
    "StreamSource",
    "SubtitleMode",
]
