"""
Version extraction for SKILL.md documents.

Supports semantic versions with pre-release and build metadata:
- **Version**: 3.1.0
- **Version**: 1.0.0-alpha
- Version: 2.0.0-beta.1
- # Skill Name v3.1.0
- version 1.2.3+build.7
"""

import re
from dataclasses import dataclass

# MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]
SEMVER_PATTERN = (
    r"(\d+\.\d+\.\d+"
    r"(?:-[a-zA-Z0-9]+(?:\.[a-zA-Z0-9]+)*)?"
    r"(?:\+[a-zA-Z0-9]+(?:\.[a-zA-Z0-9]+)*)?)"
)


@dataclass(frozen=True)
class VersionMatcher:
    """A named pattern whose first group is the version token."""

    name: str
    pattern: re.Pattern[str]

    def match(self, content: str) -> str | None:
        found = self.pattern.search(content)
        return found.group(1) if found else None


# Ordered by priority; the first matcher that hits anywhere wins.
VERSION_MATCHERS: tuple[VersionMatcher, ...] = (
    VersionMatcher(
        "bold_label", re.compile(rf"\*\*Version\*\*:\s*{SEMVER_PATTERN}", re.IGNORECASE)
    ),
    VersionMatcher("label", re.compile(rf"Version:\s*{SEMVER_PATTERN}", re.IGNORECASE)),
    VersionMatcher(
        "heading", re.compile(rf"^#.*v{SEMVER_PATTERN}", re.IGNORECASE | re.MULTILINE)
    ),
    VersionMatcher("keyword", re.compile(rf"version[:\s]+{SEMVER_PATTERN}", re.IGNORECASE)),
)


def extract_version(content: str) -> str | None:
    """Extract the document version from SKILL.md content.

    Matchers are tried in priority order. A later matcher is never
    consulted once an earlier one matches, even if the later one would
    match closer to the top of the document.

    Args:
        content: Raw document text.

    Returns:
        The version string, or None if no matcher applies.
    """
    for matcher in VERSION_MATCHERS:
        version = matcher.match(content)
        if version:
            return version
    return None


def sanitize_version(version: str) -> str:
    """Make a version safe for use in a filename.

    Every character outside ``[A-Za-z0-9.-]`` becomes ``-``.
    """
    return re.sub(r"[^a-zA-Z0-9.-]", "-", version)


def is_initial_development(version: str) -> bool:
    """Whether a version is in the 0.y.z initial development range."""
    return version.startswith("0.")
