"""
Exceptions for Skillver.
"""

from pathlib import Path


class SkillverError(Exception):
    """Base exception for Skillver errors."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (at {path})" if path else ""))


class ConfigurationError(SkillverError):
    """Raised when configuration loading or validation fails."""

    pass


class MigrationError(SkillverError):
    """Raised when a migration cannot start."""

    pass
