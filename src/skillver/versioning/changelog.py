"""
Changelog maintenance for versioned skills.

Each skill keeps a CHANGELOG.md in Keep a Changelog format. New entries
are inserted right below the header, so the file is ordered by insertion
rather than by version number.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from skillver.versioning.models import StepResult

logger = logging.getLogger(__name__)

SEPARATOR = "---\n"

CHANGELOG_HEADER = """# Changelog - {name}

All notable changes to this skill will be documented in this file.

The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.0.0/),
and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).

---

"""

SNAPSHOT_ENTRY = """## [{version}] - {date}

### Changed
- Version {version} snapshot created

---

"""

INITIAL_ENTRY = """## [{version}] - {date}

### Added
- Initial versioning setup
- {archive_dir}/ folder for version snapshots
- {changelog} for change tracking

"""


@dataclass(frozen=True)
class GitCommit:
    """A commit touching a document."""

    hash: str
    date: str
    message: str


def version_marker(version: str) -> str:
    """Get the heading prefix that marks an entry for a version."""
    return f"## [{version}]"


def render_snapshot_entry(version: str, date: str) -> str:
    """Render the entry added when a snapshot is archived."""
    return SNAPSHOT_ENTRY.format(version=version, date=date)


def render_initial_changelog(
    name: str,
    version: str,
    date: str,
    history: list[GitCommit] | None = None,
    history_rows: int = 15,
    archive_dir: str = "releases",
    changelog: str = "CHANGELOG.md",
) -> str:
    """Render a changelog for a skill that is put under versioning.

    When git history is given, a reference table of the most recent
    commits is appended after the initial entry.
    """
    content = CHANGELOG_HEADER.format(name=name) + INITIAL_ENTRY.format(
        version=version, date=date, archive_dir=archive_dir, changelog=changelog
    )

    if history and history_rows > 0:
        content += (
            "---\n\n"
            "## Git History Reference\n\n"
            "| Date | Commit | Message |\n"
            "|------|--------|---------|\n"
        )
        for commit in history[:history_rows]:
            safe_message = commit.message.replace("|", "\\|")[:60]
            content += f"| {commit.date} | {commit.hash} | {safe_message} |\n"

    return content


def insert_entry(content: str, entry: str) -> str:
    """Insert an entry after the first separator line.

    Falls back to appending when the changelog has no separator.
    """
    insert_index = content.find(SEPARATOR)
    if insert_index == -1:
        return content + "\n" + entry

    split_at = insert_index + len(SEPARATOR)
    return content[:split_at] + "\n" + entry + content[split_at:]


def update_changelog(changelog_path: Path, name: str, version: str, date: str) -> StepResult:
    """Record a version in a skill's changelog.

    Creates the changelog when missing. An existing entry for the same
    version leaves the file untouched. Errors are returned, never raised.

    Args:
        changelog_path: Path to CHANGELOG.md.
        name: Logical document identifier used in the title.
        version: Version to record.
        date: Entry date in YYYY-MM-DD form.

    Returns:
        SUCCESS when the file was created or updated, SKIPPED when the
        version is already recorded, FAILED on I/O errors.
    """
    changelog_path = Path(changelog_path)
    entry = render_snapshot_entry(version, date)
    filename = changelog_path.name

    try:
        if not changelog_path.exists():
            changelog_path.write_text(CHANGELOG_HEADER.format(name=name) + entry, encoding="utf-8")
            return StepResult.success(f"Created {filename} for {name}", path=changelog_path)

        content = changelog_path.read_text(encoding="utf-8")
        if version_marker(version) in content:
            return StepResult.skipped(
                f"{filename} entry for v{version} already exists", path=changelog_path
            )

        changelog_path.write_text(insert_entry(content, entry), encoding="utf-8")
        return StepResult.success(f"Updated {filename} with v{version}", path=changelog_path)

    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to update changelog {changelog_path}: {e}")
        return StepResult.failed(f"Failed to update {filename}: {e}", path=changelog_path)
