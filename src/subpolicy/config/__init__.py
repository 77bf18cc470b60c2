"""Configuration management for subpolicy.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (SUBPOLICY_*)
3. Config file (~/.subpolicy/config.toml)
4. Default values (lowest priority)
"""

from subpolicy.config.env import EnvReader
from subpolicy.config.loader import (
    ConfigError,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from subpolicy.config.models import (
    LoggingConfig,
    RelevanceConfig,
    SubpolicyConfig,
)

__all__ = [
    # Models
    "LoggingConfig",
    "RelevanceConfig",
    "SubpolicyConfig",
    # Loader
    "ConfigError",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "EnvReader",
]
