"""
Configuration for Skillver.

Usage:
    from skillver.config import load_config

    config = load_config()
    config.hook.archive_dir  # "releases"
"""

from skillver.config.loader import apply_env_overrides, load_config, load_yaml_file
from skillver.config.merger import deep_merge, set_nested_value
from skillver.config.schema import Config, HookConfig, LogConfig, MigrationConfig
from skillver.exceptions import ConfigurationError

__all__ = [
    "Config",
    "ConfigurationError",
    "HookConfig",
    "LogConfig",
    "MigrationConfig",
    "apply_env_overrides",
    "deep_merge",
    "load_config",
    "load_yaml_file",
    "set_nested_value",
]
