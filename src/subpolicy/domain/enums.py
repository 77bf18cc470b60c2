"""Domain enums for subtitle selection.

This module contains the closed value sets used by stream descriptors and
preference snapshots.
"""

from enum import Enum


class StreamFlag(Enum):
    """Per-stream disposition marker.

    A stream carries any combination of flags; they are tested by set
    membership and have no ordering significance.
    """

    FORCED = "forced"  # Shown only for foreign-language dialogue
    ORIGINAL = "original"  # Matches the original production language
    HEARING_IMPAIRED = "hearing_impaired"  # Closed-caption style track


class StreamSource(Enum):
    """Provenance of a subtitle stream.

    TEXT and DEMUX_SUB are external subtitle files added next to the media
    (text subtitles and demuxed vobsub/idx style subtitles). VIDEOMUX covers
    closed captions embedded in the video elementary stream.
    """

    TEXT = "text"
    DEMUX_SUB = "demux_sub"
    VIDEOMUX = "videomux"
    OTHER = "other"

    @property
    def is_external(self) -> bool:
        """Return True for subtitles supplied next to the media file."""
        return self in (StreamSource.TEXT, StreamSource.DEMUX_SUB)


class SubtitleMode(Enum):
    """Subtitle selection mode chosen by the user.

    EXPLICIT carries a language tag; the keyword modes do not.
    """

    EXPLICIT = "explicit"
    NONE = "none"
    ORIGINAL = "original"
    FORCED_ONLY = "forced_only"
