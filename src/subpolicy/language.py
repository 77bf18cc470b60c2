"""Language tag normalization and comparison utilities.

Language tags are treated as opaque tokens: they are compared after
case-folding and whitespace stripping, but never validated against an ISO
639 table. The only special value is the unknown sentinel, which absorbs
empty tags and the "undetermined" code.
"""

# Sentinel used for streams and settings without a usable language tag
UNKNOWN_LANGUAGE = "und"

# Tags that collapse to UNKNOWN_LANGUAGE after case-folding
_UNKNOWN_TAGS: frozenset[str] = frozenset({"", "und", "undetermined"})


def normalize_language(tag: str | None) -> str:
    """Normalize a language tag for comparison.

    Args:
        tag: Language tag as reported by the source or the settings store.
            None, empty, whitespace-only, "und" and "undetermined" map to
            UNKNOWN_LANGUAGE.

    Returns:
        Case-folded, stripped tag, or UNKNOWN_LANGUAGE.

    Examples:
        >>> normalize_language("ENG")
        'eng'
        >>> normalize_language("")
        'und'
        >>> normalize_language(None)
        'und'
    """
    if tag is None:
        return UNKNOWN_LANGUAGE

    code = tag.strip().casefold()
    if code in _UNKNOWN_TAGS:
        return UNKNOWN_LANGUAGE
    return code


def is_unknown_language(tag: str | None) -> bool:
    """Return True if the tag normalizes to UNKNOWN_LANGUAGE."""
    return normalize_language(tag) == UNKNOWN_LANGUAGE


def languages_match(tag1: str | None, tag2: str | None) -> bool:
    """Check if two language tags name the same known language.

    Unknown tags never match anything, including another unknown tag:
    two streams without a declared language are not known to share one.

    Args:
        tag1: First language tag.
        tag2: Second language tag.

    Returns:
        True if both tags are known and equal after normalization.

    Examples:
        >>> languages_match("eng", "ENG")
        True
        >>> languages_match("und", "")
        False
    """
    norm1 = normalize_language(tag1)
    norm2 = normalize_language(tag2)
    if norm1 == UNKNOWN_LANGUAGE or norm2 == UNKNOWN_LANGUAGE:
        return False
    return norm1 == norm2
