"""Feature flags for trialling changes to subtitle relevance.

Feature flags are controlled via environment variables of the form
SUBPOLICY_FEATURE_{FLAG_NAME}. Setting the variable to "1" enables the flag.

The relevance flags relax two outcomes of the default policy that are
kept for compatibility but are under product review:

- LANGUAGE_MATCH_RELEVANT: a stream whose language equals the explicit
  subtitle preference is relevant on its own.
- FORCED_AUDIO_MATCH_RELEVANT: under "forced_only", a forced stream in the
  language of the playing audio is relevant on its own.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

LANGUAGE_MATCH_RELEVANT = "LANGUAGE_MATCH_RELEVANT"
FORCED_AUDIO_MATCH_RELEVANT = "FORCED_AUDIO_MATCH_RELEVANT"

# Registry of known flags (for documentation and log_enabled_flags).
_KNOWN_FLAGS: dict[str, str] = {
    LANGUAGE_MATCH_RELEVANT: "Explicit language match alone makes a stream relevant",
    FORCED_AUDIO_MATCH_RELEVANT: (
        "Forced stream matching the playing audio is relevant under forced_only"
    ),
}


def is_enabled(flag: str) -> bool:
    """Check whether a feature flag is enabled.

    A flag is enabled when the environment variable SUBPOLICY_FEATURE_{FLAG}
    is set to "1". All other values (including unset) are treated as
    disabled.

    Args:
        flag: Flag name (e.g., "LANGUAGE_MATCH_RELEVANT"). Case-insensitive.

    Returns:
        True if the flag is enabled.
    """
    var = f"SUBPOLICY_FEATURE_{flag.upper()}"
    return os.environ.get(var) == "1"


def known_flags() -> dict[str, str]:
    """Return the registered flags and their descriptions."""
    return dict(_KNOWN_FLAGS)


def log_enabled_flags() -> None:
    """Log all currently enabled feature flags at INFO level.

    If no known flags are enabled, logs nothing.
    """
    enabled = [name for name in sorted(_KNOWN_FLAGS) if is_enabled(name)]
    if enabled:
        logger.info("Enabled feature flags: %s", ", ".join(enabled))
