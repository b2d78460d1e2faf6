"""Storage utilities for Skillver."""

from skillver.storage.paths import (
    PROJECT_DIR_ENV,
    expand_path,
    get_default_skills_dir,
    get_global_config_path,
    get_hook_log_path,
    get_log_dir,
    get_project_config_path,
    get_project_dir,
    get_skillver_home,
)

__all__ = [
    "PROJECT_DIR_ENV",
    "expand_path",
    "get_default_skills_dir",
    "get_global_config_path",
    "get_hook_log_path",
    "get_log_dir",
    "get_project_config_path",
    "get_project_dir",
    "get_skillver_home",
]
