"""Subtitle relevance and priority policy.

Usage:
    from subpolicy.policy import SubtitlePolicy

    policy = SubtitlePolicy(snapshot, context)
    best = policy.select(candidates)
"""

from subpolicy.policy.options import RelevanceOptions
from subpolicy.policy.subtitle import SortKey, SubtitleDecision, SubtitlePolicy

__all__ = [
    "RelevanceOptions",
    "SortKey",
    "SubtitleDecision",
    "SubtitlePolicy",
]
