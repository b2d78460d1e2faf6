"""
Path utilities for Skillver.

Provides consistent path resolution for configuration and hook log files.
"""

import os
from pathlib import Path

# Environment variable set by the host runtime to the project root
PROJECT_DIR_ENV = "CLAUDE_PROJECT_DIR"


def get_skillver_home() -> Path:
    """
    Get the Skillver home directory.

    Resolution order:
    1. SKILLVER_HOME environment variable
    2. Default: ~/.skillver

    Returns:
        Path to the Skillver home directory.
    """
    env_home = os.environ.get("SKILLVER_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".skillver"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.skillver/config.yaml
    """
    return get_skillver_home() / "config.yaml"


def get_project_dir() -> Path:
    """
    Get the project root directory.

    Resolution order:
    1. CLAUDE_PROJECT_DIR environment variable
    2. Default: current working directory

    Returns:
        Path to the project root.
    """
    env_dir = os.environ.get(PROJECT_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.cwd()


def get_project_config_path(project_dir: Path) -> Path:
    """
    Get the path to a project's configuration file.

    Returns:
        Path to <project>/.skillver/config.yaml
    """
    return project_dir / ".skillver" / "config.yaml"


def get_log_dir(project_dir: Path) -> Path:
    """
    Get the hook log directory for a project.

    Returns:
        Path to <project>/.claude/hooks/logs/
    """
    return project_dir / ".claude" / "hooks" / "logs"


def get_hook_log_path(project_dir: Path) -> Path:
    """
    Get the default hook log path for a project.

    Returns:
        Path to <project>/.claude/hooks/logs/skill-version-hook.jsonl
    """
    return get_log_dir(project_dir) / "skill-version-hook.jsonl"


def get_default_skills_dir(project_dir: Path) -> Path:
    """
    Get the managed skills directory of a project.

    Returns:
        Path to <project>/.claude/skills/
    """
    return project_dir / ".claude" / "skills"


def expand_path(path: str | Path) -> Path:
    """
    Expand a path string, handling ~ and environment variables.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded and resolved Path.
    """
    if isinstance(path, str):
        # Expand environment variables
        path = os.path.expandvars(path)
        # Expand user home
        path = os.path.expanduser(path)
    return Path(path).resolve()
