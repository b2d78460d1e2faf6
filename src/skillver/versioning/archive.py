"""
Archive writing for SKILL.md snapshots.

Snapshots live in a releases directory beside the document and are named
``v{version}_{YYYY-MM-DD}_SKILL.md``. At most one snapshot exists per
version and date.
"""

import logging
import re
from pathlib import Path

from skillver.versioning.extractor import sanitize_version
from skillver.versioning.models import StepResult

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_DIR = "releases"
DEFAULT_DOCUMENT_FILENAME = "SKILL.md"


def archive_filename(
    version: str, date: str, document_filename: str = DEFAULT_DOCUMENT_FILENAME
) -> str:
    """Get the archive filename for a version and date."""
    return f"v{sanitize_version(version)}_{date}_{document_filename}"


def archive_document(
    document_path: Path,
    content: str,
    version: str,
    date: str,
    archive_dir: str = DEFAULT_ARCHIVE_DIR,
) -> StepResult:
    """Write a snapshot of a document into its archive directory.

    Writing the same version twice on the same date is a no-op.

    Args:
        document_path: Path to the live document.
        content: Content to snapshot verbatim.
        version: Version extracted from the content.
        date: Snapshot date in YYYY-MM-DD form.
        archive_dir: Name of the archive directory beside the document.

    Returns:
        SUCCESS with the snapshot path, SKIPPED if it already exists,
        or FAILED with the error message.
    """
    releases_dir = Path(document_path).parent / archive_dir
    filename = archive_filename(version, date, Path(document_path).name)
    backup_path = releases_dir / filename

    if backup_path.exists():
        logger.debug(f"Backup already exists: {backup_path}")
        return StepResult.skipped(f"Backup already exists: {filename}", path=backup_path)

    try:
        releases_dir.mkdir(parents=True, exist_ok=True)
        backup_path.write_text(content, encoding="utf-8")
    except OSError as e:
        return StepResult.failed(str(e), path=backup_path)

    return StepResult.success(f"Created backup: {filename}", path=backup_path)


def list_archives(document_path: Path, archive_dir: str = DEFAULT_ARCHIVE_DIR) -> list[Path]:
    """List existing snapshots of a document, oldest name first."""
    document_path = Path(document_path)
    releases_dir = document_path.parent / archive_dir
    if not releases_dir.is_dir():
        return []
    return sorted(releases_dir.glob(f"v*_*_{document_path.name}"))


# =============================================================================
# Legacy Backups
# =============================================================================


def find_legacy_backups(
    skill_dir: Path, document_filename: str = DEFAULT_DOCUMENT_FILENAME
) -> list[Path]:
    """Find ad-hoc backup files left next to a document.

    Matches names containing ``.backup`` and ``{document}.new`` in the
    skill directory, plus ``.backup`` files in its ``deprecated/`` folder.
    """
    backups: list[Path] = []

    if not skill_dir.is_dir():
        return backups

    for item in sorted(skill_dir.iterdir()):
        if item.is_file() and (".backup" in item.name or item.name == f"{document_filename}.new"):
            backups.append(item)

    deprecated_dir = skill_dir / "deprecated"
    if deprecated_dir.is_dir():
        for item in sorted(deprecated_dir.iterdir()):
            if item.is_file() and ".backup" in item.name:
                backups.append(item)

    return backups


def migrate_legacy_backup(
    backup_path: Path,
    releases_dir: Path,
    version: str,
    today: str,
    document_filename: str = DEFAULT_DOCUMENT_FILENAME,
) -> Path | None:
    """Move a legacy backup into the releases directory.

    The snapshot date comes from a ``YYYYMMDD`` run in the backup's name,
    falling back to ``today``. When the canonical name is taken, a
    ``-backup`` variant is tried; if both exist the file is left alone.

    Returns:
        The new path, or None if the backup was not moved.
    """
    date = today
    date_match = re.search(r"(\d{8})", backup_path.name)
    if date_match:
        raw = date_match.group(1)
        date = f"{raw[:4]}-{raw[4:6]}-{raw[6:8]}"

    stem = Path(document_filename).stem
    suffix = Path(document_filename).suffix
    candidates = [
        releases_dir / archive_filename(version, date, document_filename),
        releases_dir / archive_filename(version, date, f"{stem}-backup{suffix}"),
    ]

    for candidate in candidates:
        if not candidate.exists():
            releases_dir.mkdir(parents=True, exist_ok=True)
            backup_path.rename(candidate)
            return candidate

    logger.warning(f"Could not migrate {backup_path}: archive names already taken")
    return None
