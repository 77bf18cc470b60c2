"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (SUBPOLICY_*)
3. Config file (~/.subpolicy/config.toml)
4. Default values

Environment variables:
- SUBPOLICY_CONFIG_PATH: Path to config file (overrides default location)
- SUBPOLICY_LOG_LEVEL: Log level (debug, info, warning, error)
- SUBPOLICY_LOG_FILE: Log file path
- SUBPOLICY_LOG_FORMAT: Log format (text, json)
- SUBPOLICY_FEATURE_*: Feature flags, see subpolicy.feature_flags
"""

from __future__ import annotations

import logging
import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from subpolicy.config.env import EnvReader
from subpolicy.config.models import LoggingConfig, RelevanceConfig, SubpolicyConfig

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".subpolicy"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# Cache for loaded config files (path -> (parsed dict, mtime))
_config_cache: dict[Path, tuple[dict[str, Any], float]] = {}
_config_cache_lock = threading.Lock()


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or is invalid."""


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by SUBPOLICY_CONFIG_PATH environment variable.

    Returns:
        Path to config file.
    """
    env_path = os.environ.get("SUBPOLICY_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def _read_toml(path: Path, strict: bool) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Cannot load config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def load_config_file(
    path: Path | None = None, *, strict: bool = False
) -> dict[str, Any]:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation. Thread-safe: uses a
    lock to protect concurrent access to the cache.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError on read or parse failures.
                If False (default), return empty dict on errors.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigError: When strict=True and the file cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        result = _read_toml(path, strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def _section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _bool_option(section: dict[str, Any], name: str, key: str) -> bool:
    # TOML booleans only; a quoted "false" would otherwise read as true
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"[{name}] {key} must be true or false, got {value!r}")
    return value


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    log_level: str | None = None,
    log_file: Path | None = None,
    log_format: str | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> SubpolicyConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides SUBPOLICY_CONFIG_PATH).
        log_level: CLI override for the log level.
        log_file: CLI override for the log file.
        log_format: CLI override for the log format ("text" or "json").
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on config file parse failures.

    Returns:
        SubpolicyConfig with merged configuration.

    Raises:
        ConfigError: If a value is invalid, or when strict=True and the
            config file cannot be parsed.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    file_logging = _section(file_config, "logging")
    file_relevance = _section(file_config, "relevance")

    level = (
        log_level
        or reader.get_str("SUBPOLICY_LOG_LEVEL")
        or file_logging.get("level", "info")
    )
    fmt = (
        log_format
        or reader.get_str("SUBPOLICY_LOG_FORMAT")
        or file_logging.get("format", "text")
    )
    file = log_file or reader.get_path("SUBPOLICY_LOG_FILE")
    if file is None:
        file_value = file_logging.get("file")
        if file_value is not None and not isinstance(file_value, str):
            raise ConfigError("[logging] file must be a string")
        if file_value:
            file = Path(file_value).expanduser()

    try:
        logging_config = LoggingConfig(
            level=str(level),
            file=file,
            format=str(fmt),
            include_stderr=_bool_option(file_logging, "logging", "include_stderr"),
            max_bytes=int(file_logging.get("max_bytes", 10_485_760)),
            backup_count=int(file_logging.get("backup_count", 5)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid logging configuration: {e}") from e

    relevance_config = RelevanceConfig(
        language_match_relevant=_bool_option(
            file_relevance, "relevance", "language_match_relevant"
        ),
        forced_audio_match_relevant=_bool_option(
            file_relevance, "relevance", "forced_audio_match_relevant"
        ),
    )

    return SubpolicyConfig(logging=logging_config, relevance=relevance_config)
