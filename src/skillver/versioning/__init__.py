"""
Skillver versioning pipeline.

Every time an editing tool writes a tracked SKILL.md, the pipeline:
- extracts the document's semantic version
- refreshes its "Last Updated" date
- archives a dated snapshot under releases/
- records the version in CHANGELOG.md

Usage:
    from skillver.versioning import EventDispatcher

    dispatcher = EventDispatcher(config)
    result = dispatcher.handle_raw(payload_json)
"""

# Models
from skillver.versioning.models import (
    DocumentTarget,
    EditEvent,
    HookInput,
    HookResult,
    MigrationReport,
    StepResult,
    StepStatus,
)

# Extraction and patching
from skillver.versioning.extractor import (
    VERSION_MATCHERS,
    VersionMatcher,
    extract_version,
    is_initial_development,
    sanitize_version,
)
from skillver.versioning.classifier import classify_path, normalize_path
from skillver.versioning.metadata import add_version_header, update_last_updated

# Archive and changelog
from skillver.versioning.archive import (
    archive_document,
    archive_filename,
    find_legacy_backups,
    list_archives,
    migrate_legacy_backup,
)
from skillver.versioning.changelog import (
    GitCommit,
    insert_entry,
    render_initial_changelog,
    render_snapshot_entry,
    update_changelog,
)

# Orchestration
from skillver.versioning.dispatcher import HOOK_NAME, EventDispatcher, snapshot_file
from skillver.versioning.migration import (
    SkillMigrator,
    find_skill_documents,
    get_git_history,
)

__all__ = [
    # Models
    "DocumentTarget",
    "EditEvent",
    "HookInput",
    "HookResult",
    "MigrationReport",
    "StepResult",
    "StepStatus",
    # Extraction and patching
    "VERSION_MATCHERS",
    "VersionMatcher",
    "add_version_header",
    "classify_path",
    "extract_version",
    "is_initial_development",
    "normalize_path",
    "sanitize_version",
    "update_last_updated",
    # Archive and changelog
    "GitCommit",
    "archive_document",
    "archive_filename",
    "find_legacy_backups",
    "insert_entry",
    "list_archives",
    "migrate_legacy_backup",
    "render_initial_changelog",
    "render_snapshot_entry",
    "update_changelog",
    # Orchestration
    "HOOK_NAME",
    "EventDispatcher",
    "SkillMigrator",
    "find_skill_documents",
    "get_git_history",
    "snapshot_file",
]
