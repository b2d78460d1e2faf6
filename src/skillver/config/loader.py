"""
Configuration loader for Skillver.

Loads and merges configuration from multiple sources:
1. Default values
2. Global config (~/.skillver/config.yaml)
3. Project config (<project>/.skillver/config.yaml)
4. Environment variables (SKILLVER_*)
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from skillver.config.merger import deep_merge, set_nested_value
from skillver.config.schema import Config
from skillver.exceptions import ConfigurationError
from skillver.storage.paths import (
    expand_path,
    get_global_config_path,
    get_project_config_path,
    get_project_dir,
)

ENV_PREFIX = "SKILLVER_"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration dictionary.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", path) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config: {e}", path) from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError("Config file must be a YAML mapping", path)
    return content


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern:
    SKILLVER_<FIELD>=<value> for top-level fields
    SKILLVER_<SECTION>_<KEY>=<value> for section fields

    SKILLVER_HOOK_ARCHIVE_DIR maps to hook.archive_dir.

    Args:
        config: Configuration dictionary to modify.

    Returns:
        Configuration with environment overrides applied.
    """
    top_level = set(Config.model_fields)

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        # Skip SKILLVER_HOME as it's handled separately
        if key == "SKILLVER_HOME":
            continue

        name = key[len(ENV_PREFIX) :].lower()
        if name in top_level:
            config_key = name
        elif "_" in name:
            section, field = name.split("_", 1)
            config_key = f"{section}.{field}"
        else:
            continue

        config = set_nested_value(config, config_key, _parse_env_value(value))

    return config


def _parse_env_value(value: str) -> Any:
    """
    Parse an environment variable value to the appropriate type.

    Args:
        value: String value from environment.

    Returns:
        Parsed value (bool, int, list, or string).
    """
    # Boolean
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    # Integer
    if re.match(r"^-?\d+$", value):
        return int(value)

    # List (comma-separated)
    if "," in value:
        return [item.strip() for item in value.split(",")]

    return value


def load_config(
    project_dir: Path | None = None,
    skip_global: bool = False,
    skip_env: bool = False,
) -> Config:
    """
    Load and merge configuration from all sources.

    Loading order (later overrides earlier):
    1. Default values from Config model
    2. Global config (~/.skillver/config.yaml)
    3. Project config (<project>/.skillver/config.yaml)
    4. Environment variables (SKILLVER_*)

    Args:
        project_dir: Project root. Defaults to CLAUDE_PROJECT_DIR, then cwd.
        skip_global: Skip loading the global configuration.
        skip_env: Skip environment variable overrides.

    Returns:
        Merged and validated Config object.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    # 1. Start with defaults
    config_dict = Config().model_dump()

    # 2. Load global config
    if not skip_global:
        config_dict = deep_merge(config_dict, load_yaml_file(get_global_config_path()))

    # 3. Load project config
    root = project_dir or get_project_dir()
    config_dict = deep_merge(config_dict, load_yaml_file(get_project_config_path(root)))

    # 4. Apply environment variables
    if not skip_env:
        config_dict = apply_env_overrides(config_dict)

    # An explicit root wins over whatever the files say
    if project_dir is not None:
        config_dict["project_dir"] = str(expand_path(project_dir))

    # 5. Validate and return
    try:
        return Config.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e
