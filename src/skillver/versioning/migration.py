"""
Versioning migration for existing skills.

Puts every SKILL.md under a skills directory under version control:
1. Creates the releases/ folder
2. Moves legacy backup files into releases/
3. Adds a version header when missing
4. Creates CHANGELOG.md (seeded from git history)
5. Archives a snapshot of the current version
"""

import logging
import os
import subprocess
from collections.abc import Callable
from pathlib import Path

from skillver.config.schema import Config
from skillver.exceptions import MigrationError
from skillver.versioning.archive import archive_document, find_legacy_backups, migrate_legacy_backup
from skillver.versioning.changelog import GitCommit, render_initial_changelog
from skillver.versioning.dates import Clock, format_date, utc_today
from skillver.versioning.extractor import extract_version
from skillver.versioning.metadata import add_version_header
from skillver.versioning.models import MigrationReport, StepStatus

logger = logging.getLogger(__name__)

# Called with (skill name, message) as each document is handled
ProgressCallback = Callable[[str, str], None]


def find_skill_documents(
    skills_dir: Path,
    document_filename: str = "SKILL.md",
    excluded_dirs: list[str] | None = None,
) -> list[Path]:
    """Find all tracked documents below a skills directory.

    Directories named in ``excluded_dirs`` are not descended into and
    unreadable directories are skipped.
    """
    if excluded_dirs is None:
        excluded_dirs = ["releases", ".deprecated", "deprecated"]
    excluded = set(excluded_dirs)
    results: list[Path] = []

    def on_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable path: {error}")

    for root, dirs, files in os.walk(skills_dir, onerror=on_error):
        dirs[:] = sorted(d for d in dirs if d not in excluded)
        if document_filename in files:
            results.append(Path(root) / document_filename)

    return sorted(results)


def get_git_history(file_path: Path, limit: int = 20) -> list[GitCommit]:
    """Get the most recent commits touching a file.

    Returns:
        Commits newest first, or an empty list when git is unavailable.
    """
    if limit <= 0:
        return []

    try:
        result = subprocess.run(
            [
                "git",
                "log",
                "--format=%H|%ad|%s",
                "--date=short",
                "-n",
                str(limit),
                "--",
                file_path.name,
            ],
            cwd=file_path.parent,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"git log failed for {file_path}: {e}")
        return []

    if result.returncode != 0:
        return []

    commits = []
    for line in result.stdout.strip().split("\n"):
        if not line:
            continue
        commit_hash, _, rest = line.partition("|")
        date, _, message = rest.partition("|")
        commits.append(GitCommit(hash=commit_hash[:8], date=date, message=message))
    return commits


class SkillMigrator:
    """Applies the versioning layout to every skill in a directory."""

    def __init__(
        self,
        config: Config | None = None,
        clock: Clock = utc_today,
        history_provider: Callable[[Path, int], list[GitCommit]] = get_git_history,
    ) -> None:
        self.config = config or Config()
        self.clock = clock
        self.history_provider = history_provider

    def migrate(
        self, skills_dir: Path, progress: ProgressCallback | None = None
    ) -> MigrationReport:
        """Migrate every skill below ``skills_dir``.

        A failure in one skill is recorded in the report and does not stop
        the others.

        Raises:
            MigrationError: If the skills directory does not exist.
        """
        skills_dir = Path(skills_dir)
        if not skills_dir.is_dir():
            raise MigrationError("Skills directory not found", skills_dir)

        hook = self.config.hook
        documents = find_skill_documents(
            skills_dir, hook.document_filename, self.config.migration.excluded_dirs
        )
        report = MigrationReport(total=len(documents))

        for document in documents:
            name = document.parent.name
            try:
                for message in self.migrate_document(document, report):
                    if progress:
                        progress(name, message)
                report.processed += 1
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Migration failed for {name}: {e}")
                report.errors[name] = str(e)
                if progress:
                    progress(name, f"Error: {e}")

        return report

    def migrate_document(self, document: Path, report: MigrationReport) -> list[str]:
        """Migrate a single document, updating ``report`` in place.

        Returns:
            Human readable descriptions of what was changed.
        """
        hook = self.config.hook
        settings = self.config.migration
        skill_dir = document.parent
        name = skill_dir.name
        today = format_date(self.clock())
        messages: list[str] = []

        content = document.read_text(encoding="utf-8")
        current_version = extract_version(content)
        version = current_version or settings.initial_version
        has_changelog = (skill_dir / hook.changelog_filename).exists()

        # 1. releases/ folder
        releases_dir = skill_dir / hook.archive_dir
        if not releases_dir.exists():
            releases_dir.mkdir(parents=True)
            report.releases_created += 1
            messages.append(f"Created {hook.archive_dir}/")

        # 2. Legacy backups always migrate under the initial version
        for backup in find_legacy_backups(skill_dir, hook.document_filename):
            migrated = migrate_legacy_backup(
                backup, releases_dir, settings.initial_version, today, hook.document_filename
            )
            if migrated:
                report.backups_migrated += 1
                messages.append(f"Migrated: {backup.name} -> {migrated.name}")

        # 3. Version header
        if current_version is None:
            updated = add_version_header(content, version, today)
            if updated != content:
                document.write_text(updated, encoding="utf-8")
                content = updated
                report.headers_added += 1
                messages.append(f"Added version header (v{version})")
        else:
            messages.append(f"Version exists: v{current_version}")

        # 4. CHANGELOG.md
        if not has_changelog:
            changelog = render_initial_changelog(
                name,
                version,
                today,
                history=self.history_provider(document, settings.git_history_limit),
                history_rows=settings.history_rows,
                archive_dir=hook.archive_dir,
                changelog=hook.changelog_filename,
            )
            (skill_dir / hook.changelog_filename).write_text(changelog, encoding="utf-8")
            report.changelogs_created += 1
            messages.append(f"Created {hook.changelog_filename}")

        # 5. Snapshot of the current version
        archived = archive_document(document, content, version, today, hook.archive_dir)
        if archived.status == StepStatus.FAILED:
            raise OSError(archived.message)
        if archived.ok:
            report.backups_created += 1
            messages.append(f"Created backup: {archived.path.name}")

        return messages
