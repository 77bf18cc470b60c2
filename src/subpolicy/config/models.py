"""Configuration data models.

This module defines dataclasses for subpolicy configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must not be negative")


@dataclass
class RelevanceConfig:
    """Opt-in relaxations of the subtitle relevance rules.

    Both default to off. The matching SUBPOLICY_FEATURE_* flags can also
    turn them on.
    """

    language_match_relevant: bool = False
    """Explicit language match alone makes a stream relevant."""

    forced_audio_match_relevant: bool = False
    """Under "forced_only", a forced stream in the playing audio language is
    relevant."""


@dataclass
class SubpolicyConfig:
    """Top-level configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    relevance: RelevanceConfig = field(default_factory=RelevanceConfig)
