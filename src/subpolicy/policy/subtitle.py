"""Subtitle stream relevance and priority.

This module decides which subtitle streams may be auto-selected for the
current preferences and playback state, and ranks the ones that may.

Relevance rules, first match decides:
1. The active stream is always relevant
2. "none" preference: nothing else is relevant
3. External stream without a language: relevant
4. Embedded closed captions without a language: relevant when the
   hearing-impaired accessibility setting is on and the stream is flagged
   hearing impaired
5. "original" preference: relevant iff flagged original
6. Hearing-impaired setting on and stream flagged both hearing impaired and
   original: relevant
7. "forced_only" preference: not relevant (unless relaxed by options)
8. Explicit language preference: not relevant (unless relaxed by options)

Priority, highest first: active stream, preference match, hearing-impaired
fit, external source, lowest stream index.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from subpolicy.domain import (
    PlaybackContext,
    PreferenceSnapshot,
    StreamCandidate,
    StreamFlag,
    StreamSource,
    SubtitleMode,
)
from subpolicy.language import languages_match
from subpolicy.policy.options import RelevanceOptions

logger = logging.getLogger(__name__)

SortKey = tuple[int, int, int, int, int]


@dataclass(frozen=True)
class SubtitleDecision:
    """Outcome of evaluating one candidate."""

    candidate: StreamCandidate
    relevant: bool
    reason: str
    rank: int | None = None  # Position among relevant candidates, 0 is best

    @property
    def selected(self) -> bool:
        """Return True if this candidate is the auto-selected stream."""
        return self.rank == 0


class SubtitlePolicy:
    """Relevance predicate and priority order over subtitle candidates.

    The policy captures its inputs at construction and holds no other state,
    so `is_relevant` and `sort_key` may be called from several threads as
    long as the captured snapshot and context are not mutated.
    """

    def __init__(
        self,
        snapshot: PreferenceSnapshot,
        context: PlaybackContext,
        options: RelevanceOptions | None = None,
    ) -> None:
        """Initialize the policy.

        Args:
            snapshot: User preferences for this selection pass.
            context: Playing audio language and the active subtitle stream.
            options: Relevance relaxations. Defaults to none enabled.
        """
        self._snapshot = snapshot
        self._context = context
        self._options = options if options is not None else RelevanceOptions()

    @classmethod
    def from_settings(
        cls,
        played_audio_language: str,
        active_stream_index: int,
        settings: Mapping[str, Any],
        options: RelevanceOptions | None = None,
    ) -> SubtitlePolicy:
        """Build a policy from the playback state and a settings mapping.

        The settings are read once, so relevance and priority agree on the
        same values for every candidate.

        Raises:
            SettingsValidationError: If the settings are invalid.
        """
        from subpolicy.settings import snapshot_from_settings

        return cls(
            snapshot_from_settings(settings),
            PlaybackContext(played_audio_language, active_stream_index),
            options,
        )

    @property
    def snapshot(self) -> PreferenceSnapshot:
        return self._snapshot

    @property
    def context(self) -> PlaybackContext:
        return self._context

    @property
    def options(self) -> RelevanceOptions:
        return self._options

    def _is_active(self, candidate: StreamCandidate) -> bool:
        return candidate.stream_index == self._context.active_stream_index

    def explain_relevance(self, candidate: StreamCandidate) -> tuple[bool, str]:
        """Decide relevance and name the rule that decided it.

        Args:
            candidate: Subtitle stream to evaluate.

        Returns:
            Tuple of (relevant, reason).
        """
        if self._is_active(candidate):
            return (True, "active stream")

        preference = self._snapshot.subtitle_preference
        if preference.mode is SubtitleMode.NONE:
            return (False, "subtitles disabled")

        hearing_impaired = self._snapshot.hearing_impaired
        flags = candidate.flags

        if candidate.has_unknown_language:
            if candidate.source.is_external:
                return (True, "external stream without language")
            if (
                candidate.source is StreamSource.VIDEOMUX
                and StreamFlag.HEARING_IMPAIRED in flags
                and hearing_impaired
            ):
                return (True, "closed captions for hearing impaired")

        if preference.mode is SubtitleMode.ORIGINAL:
            if StreamFlag.ORIGINAL in flags:
                return (True, "original language")
            return (False, "not original language")

        if (
            hearing_impaired
            and StreamFlag.HEARING_IMPAIRED in flags
            and StreamFlag.ORIGINAL in flags
        ):
            return (True, "hearing impaired original language")

        if preference.mode is SubtitleMode.FORCED_ONLY:
            if (
                self._options.forced_audio_match_relevant
                and StreamFlag.FORCED in flags
                and languages_match(
                    candidate.language, self._context.played_audio_language
                )
            ):
                return (True, "forced for playing audio")
            return (False, "not forced for playing audio")

        if self._options.language_match_relevant and languages_match(
            candidate.language, preference.language
        ):
            return (True, "preferred language")
        return (False, "no preference match")

    def is_relevant(self, candidate: StreamCandidate) -> bool:
        """Return True if the candidate may be offered or auto-selected."""
        relevant, _ = self.explain_relevance(candidate)
        return relevant

    def _matches_preference(self, candidate: StreamCandidate) -> bool:
        preference = self._snapshot.subtitle_preference
        flags = candidate.flags
        if preference.mode is SubtitleMode.EXPLICIT:
            return languages_match(candidate.language, preference.language)
        if preference.mode is SubtitleMode.ORIGINAL:
            return StreamFlag.ORIGINAL in flags
        if preference.mode is SubtitleMode.FORCED_ONLY:
            return StreamFlag.FORCED in flags and StreamFlag.ORIGINAL in flags
        return False

    def sort_key(self, candidate: StreamCandidate) -> SortKey:
        """Generate the priority sort key for a candidate.

        Returns tuple of:
        1. Active stream first
        2. Preference match (language, original flag, or forced + original)
        3. Hearing-impaired streams first when the setting is on, last
           otherwise
        4. External sources before embedded ones
        5. Stream index (stable, deterministic tie-break)
        """
        active = 0 if self._is_active(candidate) else 1
        preference = 0 if self._matches_preference(candidate) else 1

        is_hi = StreamFlag.HEARING_IMPAIRED in candidate.flags
        if self._snapshot.hearing_impaired:
            hearing = 0 if is_hi else 1
        else:
            hearing = 1 if is_hi else 0

        source = 0 if candidate.source.is_external else 1
        return (active, preference, hearing, source, candidate.stream_index)

    def compare_priority(self, a: StreamCandidate, b: StreamCandidate) -> int:
        """Compare two candidates by priority.

        Returns:
            Negative if `a` ranks before `b`, positive if after, 0 if they
            are equivalent (same stream index and attributes).
        """
        key_a = self.sort_key(a)
        key_b = self.sort_key(b)
        if key_a < key_b:
            return -1
        if key_a > key_b:
            return 1
        return 0

    def relevant_candidates(
        self, candidates: Iterable[StreamCandidate]
    ) -> list[StreamCandidate]:
        """Return the relevant candidates in their original order."""
        return [c for c in candidates if self.is_relevant(c)]

    def rank(self, candidates: Iterable[StreamCandidate]) -> list[StreamCandidate]:
        """Return the relevant candidates, best first."""
        return sorted(self.relevant_candidates(candidates), key=self.sort_key)

    def select(self, candidates: Iterable[StreamCandidate]) -> StreamCandidate | None:
        """Return the stream to auto-select, or None if none is relevant."""
        ranked = self.rank(candidates)
        if not ranked:
            logger.debug("No relevant subtitle stream")
            return None
        best = ranked[0]
        logger.debug(
            "Selected subtitle stream %d (language=%s)",
            best.stream_index,
            best.language,
        )
        return best

    def evaluate(self, candidates: Iterable[StreamCandidate]) -> list[SubtitleDecision]:
        """Evaluate every candidate, keeping the input order.

        Args:
            candidates: Subtitle streams of one media item.

        Returns:
            One decision per candidate, with its rank among the relevant
            candidates (None for irrelevant ones).
        """
        items = list(candidates)
        verdicts = [self.explain_relevance(c) for c in items]

        relevant_positions = [i for i, (ok, _) in enumerate(verdicts) if ok]
        relevant_positions.sort(key=lambda i: self.sort_key(items[i]))
        ranks = {pos: rank for rank, pos in enumerate(relevant_positions)}

        decisions = []
        for i, (candidate, (relevant, reason)) in enumerate(zip(items, verdicts)):
            logger.debug(
                "Subtitle stream %d: relevant=%s (%s)",
                candidate.stream_index,
                relevant,
                reason,
                extra={
                    "stream_index": candidate.stream_index,
                    "relevant": relevant,
                    "reason": reason,
                    "rank": ranks.get(i),
                },
            )
            decisions.append(
                SubtitleDecision(
                    candidate=candidate,
                    relevant=relevant,
                    reason=reason,
                    rank=ranks.get(i),
                )
            )
        return decisions
