"""
Edit event dispatcher for the skill versioning hook.

Receives PostToolUse events from the host runtime and, for edits to a
tracked SKILL.md, patches its "Last Updated" date, archives a snapshot and
records the version in the skill's changelog.

The dispatcher never fails the host: every path returns a HookResult with
``continue`` set, carrying an advisory message when something happened.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from skillver.audit.logger import HookEventType, HookLogger
from skillver.config.schema import Config
from skillver.versioning.archive import archive_document
from skillver.versioning.changelog import update_changelog
from skillver.versioning.classifier import classify_path
from skillver.versioning.dates import Clock, format_date, utc_today
from skillver.versioning.extractor import extract_version, is_initial_development
from skillver.versioning.metadata import update_last_updated
from skillver.versioning.models import (
    DocumentTarget,
    EditEvent,
    HookInput,
    HookResult,
    StepStatus,
)

logger = logging.getLogger(__name__)

HOOK_NAME = "skill-version-hook"


def _advise(message: str, archive_status: StepStatus | None = None) -> HookResult:
    return HookResult(message=f"[{HOOK_NAME}] {message}", archive_status=archive_status)


class EventDispatcher:
    """Runs the versioning pipeline for one edit event at a time.

    Example:
        dispatcher = EventDispatcher(load_config())
        result = dispatcher.handle_raw(sys.stdin.read())
        print(json.dumps(result.to_output()))
    """

    def __init__(
        self,
        config: Config | None = None,
        hook_logger: HookLogger | None = None,
        clock: Clock = utc_today,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config: Configuration (project root, log location, hook settings).
            hook_logger: Side-channel logger. Built from config if omitted.
            clock: Source of the current date.
        """
        self.config = config or Config()
        self.hook_logger = hook_logger or HookLogger.from_config(self.config)
        self.clock = clock

    # =========================================================================
    # Entry Points
    # =========================================================================

    def handle_raw(self, raw: str | bytes) -> HookResult:
        """Handle a hook payload given as JSON text or UTF-8 bytes."""
        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError) as e:
            return self._error(e)
        return self.handle_payload(payload)

    def handle_payload(self, payload: Any) -> HookResult:
        """Handle a decoded hook payload."""
        try:
            hook_input = HookInput.model_validate(payload)
        except ValidationError as e:
            return self._error(e)
        return self.handle(EditEvent.from_hook_input(hook_input))

    def handle(self, event: EditEvent) -> HookResult:
        """Handle one edit event."""
        try:
            return self._process(event)
        except Exception as e:
            logger.exception("Unexpected error while handling edit event")
            return self._error(e)

    # =========================================================================
    # Pipeline
    # =========================================================================

    def _process(self, event: EditEvent) -> HookResult:
        hook = self.config.hook

        # 1-3. Only successful edits of tracked documents are versioned
        if event.tool_name not in hook.tool_names:
            return HookResult()
        if not event.succeeded:
            return HookResult()
        target = classify_path(event.file_path or "", hook)
        if target is None:
            return HookResult()

        self.hook_logger.log(
            HookEventType.HOOK_INVOKED,
            f"{event.tool_name} modified {target.name}/{target.path.name}",
            skill=target.name,
            path=str(target.path),
        )

        # 4. Read the document once
        try:
            content = target.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.hook_logger.log(
                HookEventType.DOCUMENT_READ_FAILED,
                f"Failed to read {target.path}: {e}",
                skill=target.name,
            )
            return HookResult()

        # 5. Unversioned documents are never archived
        version = extract_version(content)
        if not version:
            self.hook_logger.log(
                HookEventType.VERSION_MISSING,
                f"No version found in {target.path}, skipping backup",
                skill=target.name,
            )
            return _advise(f"No version header found in {target.name}/{target.path.name}")

        today = format_date(self.clock())

        # 6. Patch "Last Updated" before snapshotting
        content = self._patch_metadata(target, content, today)

        # 7. Archive, then record the version in the changelog
        archived = archive_document(target.path, content, version, today, hook.archive_dir)

        if archived.status == StepStatus.SKIPPED:
            self.hook_logger.log(
                HookEventType.ARCHIVE_EXISTS, archived.message, skill=target.name, version=version
            )
            return _advise(
                f"Backup already exists for {target.name} v{version}", archived.status
            )

        if archived.status == StepStatus.FAILED:
            self.hook_logger.log(
                HookEventType.ARCHIVE_FAILED,
                f"Failed to create backup: {archived.message}",
                skill=target.name,
                version=version,
            )
            return _advise(f"Failed to backup: {archived.message}", archived.status)

        self.hook_logger.log(
            HookEventType.ARCHIVE_CREATED,
            archived.message,
            skill=target.name,
            version=version,
            path=str(archived.path),
        )
        self._record_changelog(target, version, today)

        note = " (Initial Development)" if is_initial_development(version) else ""
        return _advise(
            f"Backed up {target.name}/{target.path.name} to "
            f"{hook.archive_dir}/{archived.path.name}{note}",
            archived.status,
        )

    def _patch_metadata(self, target: DocumentTarget, content: str, today: str) -> str:
        """Update "Last Updated" in the live document, returning the content to archive."""
        patched = update_last_updated(content, today)
        if patched == content:
            return content

        try:
            target.path.write_text(patched, encoding="utf-8")
        except OSError as e:
            self.hook_logger.log(
                HookEventType.METADATA_PATCH_FAILED,
                f"Failed to update Last Updated: {e}",
                skill=target.name,
            )
            return content

        self.hook_logger.log(
            HookEventType.METADATA_PATCHED, f"Updated Last Updated to {today}", skill=target.name
        )
        return patched

    def _record_changelog(self, target: DocumentTarget, version: str, today: str) -> None:
        """Best-effort changelog update; its outcome never changes the hook result."""
        changelog_path = target.directory / self.config.hook.changelog_filename
        existed = changelog_path.exists()
        result = update_changelog(changelog_path, target.name, version, today)

        if result.status == StepStatus.SKIPPED:
            event_type = HookEventType.CHANGELOG_EXISTS
        elif result.status == StepStatus.FAILED:
            event_type = HookEventType.CHANGELOG_FAILED
        elif existed:
            event_type = HookEventType.CHANGELOG_UPDATED
        else:
            event_type = HookEventType.CHANGELOG_CREATED

        self.hook_logger.log(event_type, result.message, skill=target.name, version=version)

    def _error(self, error: Exception) -> HookResult:
        self.hook_logger.log(HookEventType.HOOK_ERROR, f"Error: {error}")
        return _advise(f"Error: {error}")


def snapshot_file(
    path: Path, config: Config | None = None, tool_name: str | None = None
) -> HookResult:
    """Run the pipeline for a file as if an editing tool had just written it."""
    dispatcher = EventDispatcher(config)
    tool = tool_name or next(iter(dispatcher.config.hook.tool_names), "Write")
    return dispatcher.handle(EditEvent(tool_name=tool, file_path=str(path), succeeded=True))
