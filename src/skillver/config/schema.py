"""
Pydantic configuration schema for Skillver.

This module defines all configuration models with validation.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from skillver.storage.paths import expand_path, get_hook_log_path, get_project_dir

# =============================================================================
# Hook Configuration
# =============================================================================


class HookConfig(BaseModel):
    """Which edit events the hook reacts to and where it writes."""

    tool_names: list[str] = Field(
        default_factory=lambda: ["Write", "Edit"],
        description="Editing tools whose events trigger versioning",
    )
    document_filename: str = Field(
        default="SKILL.md",
        description="Filename of tracked documents",
    )
    managed_roots: list[str] = Field(
        default_factory=lambda: [".claude/skills"],
        description="Path segment sequences that mark a managed skills root",
    )
    collection_dir: str = Field(
        default="skills",
        description="Directory name that directly holds skill directories",
    )
    archive_dir: str = Field(
        default="releases",
        description="Archive directory created beside each document",
    )
    changelog_filename: str = Field(
        default="CHANGELOG.md",
        description="Changelog file kept beside each document",
    )


# =============================================================================
# Hook Log Configuration
# =============================================================================


class LogConfig(BaseModel):
    """Side-channel hook log configuration."""

    enable: bool = True
    path: str | None = None
    rotation: Literal["daily", "weekly", "size"] = "size"
    max_size_mb: int = Field(default=10, ge=1)
    retention_days: int = Field(default=30, ge=1, le=365)
    compress_old: bool = True


# =============================================================================
# Migration Configuration
# =============================================================================


class MigrationConfig(BaseModel):
    """Settings for bootstrapping versioning on existing skills."""

    excluded_dirs: list[str] = Field(
        default_factory=lambda: ["releases", ".deprecated", "deprecated"],
    )
    initial_version: str = "1.0.0"
    git_history_limit: int = Field(default=20, ge=0)
    history_rows: int = Field(default=15, ge=0)


# =============================================================================
# Root Configuration Model
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for Skillver.

    Configuration can be loaded from YAML files and environment variables,
    merged in order of priority.
    """

    model_config = ConfigDict(extra="allow")

    project_dir: str | None = Field(
        default=None,
        description="Project root (defaults to CLAUDE_PROJECT_DIR, then cwd)",
    )
    hook: HookConfig = Field(default_factory=HookConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    migration: MigrationConfig = Field(default_factory=MigrationConfig)

    def resolve_project_dir(self) -> Path:
        """Get the project root this configuration applies to."""
        if self.project_dir:
            return expand_path(self.project_dir)
        return get_project_dir()

    def resolve_log_path(self) -> Path:
        """Get the hook log path, defaulting to the project log directory."""
        if self.log.path:
            return expand_path(self.log.path)
        return get_hook_log_path(self.resolve_project_dir())
