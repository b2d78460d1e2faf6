"""
Hook logging for Skillver.

This module provides JSON Lines based logging of what the versioning hook
did for each edit event. Writes are best-effort: the hook must never fail
because its log could not be written.
"""

import gzip
import json
import logging
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class HookEventType(str, Enum):
    """Types of hook log events."""

    HOOK_INVOKED = "hook_invoked"
    HOOK_ERROR = "hook_error"

    # Document handling
    DOCUMENT_READ_FAILED = "document_read_failed"
    VERSION_MISSING = "version_missing"
    METADATA_PATCHED = "metadata_patched"
    METADATA_PATCH_FAILED = "metadata_patch_failed"

    # Archive operations
    ARCHIVE_CREATED = "archive_created"
    ARCHIVE_EXISTS = "archive_exists"
    ARCHIVE_FAILED = "archive_failed"

    # Changelog operations
    CHANGELOG_CREATED = "changelog_created"
    CHANGELOG_UPDATED = "changelog_updated"
    CHANGELOG_EXISTS = "changelog_exists"
    CHANGELOG_FAILED = "changelog_failed"


class HookLogger:
    """
    JSON Lines based hook logger.

    Appends one event per line with rotation and compression support.
    """

    def __init__(
        self,
        log_path: str | Path,
        enable: bool = True,
        rotation: str = "size",
        max_size_mb: int = 10,
        retention_days: int = 30,
        compress_old: bool = True,
    ) -> None:
        """
        Initialize hook logger.

        Args:
            log_path: Path to the log file
            enable: Whether logging is enabled
            rotation: Rotation strategy (daily, weekly, size)
            max_size_mb: Maximum log file size in MB before rotation
            retention_days: Days to keep rotated logs
            compress_old: Whether to compress rotated logs
        """
        self.log_path = Path(log_path).expanduser()
        self.enable = enable
        self.rotation = rotation
        self.max_size_mb = max_size_mb
        self.retention_days = retention_days
        self.compress_old = compress_old

    @classmethod
    def from_config(cls, config: Any) -> "HookLogger":
        """
        Create hook logger from configuration.

        Args:
            config: Root Config instance

        Returns:
            Configured HookLogger
        """
        return cls(
            log_path=config.resolve_log_path(),
            enable=config.log.enable,
            rotation=config.log.rotation,
            max_size_mb=config.log.max_size_mb,
            retention_days=config.log.retention_days,
            compress_old=config.log.compress_old,
        )

    def _create_event(
        self, event_type: HookEventType, message: str, data: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Create a log event.

        Args:
            event_type: Type of event
            message: Human readable description
            data: Event-specific data

        Returns:
            Complete event dictionary
        """
        return {
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type.value,
            "message": message,
            **data,
        }

    def log(self, event_type: HookEventType, message: str, **data: Any) -> None:
        """Record an event, ignoring any failure to write it."""
        if not self.enable:
            return

        event = self._create_event(event_type, message, data)
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._rotate_if_needed()
            with self.log_path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(event, default=str) + "\n")
        except OSError as e:
            logger.debug(f"Hook log write failed: {e}")

    def read_events(self, limit: int | None = None) -> list[dict[str, Any]]:
        """
        Read events from the current log file.

        Lines that are not valid JSON are skipped.

        Args:
            limit: Only return the most recent events

        Returns:
            Events in file order
        """
        if not self.log_path.exists():
            return []

        events = []
        with self.log_path.open(encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(json.loads(line))
                except json.JSONDecodeError:
                    continue

        if limit is not None:
            return events[-limit:] if limit > 0 else []
        return events

    def _rotate_if_needed(self) -> None:
        """Rotate log file if needed based on configuration."""
        if not self.log_path.exists():
            return

        should_rotate = False

        # Check size-based rotation
        if self.rotation == "size":
            size_mb = self.log_path.stat().st_size / (1024 * 1024)
            if size_mb >= self.max_size_mb:
                should_rotate = True

        # Check time-based rotation
        elif self.rotation == "daily":
            mtime = datetime.fromtimestamp(self.log_path.stat().st_mtime)
            if mtime.date() < datetime.now().date():
                should_rotate = True

        elif self.rotation == "weekly":
            mtime = datetime.fromtimestamp(self.log_path.stat().st_mtime)
            if (datetime.now() - mtime).days >= 7:
                should_rotate = True

        if should_rotate:
            self._rotate_log()

    def _rotate_log(self) -> None:
        """Rotate the current log file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        rotated_name = f"{self.log_path.stem}_{timestamp}{self.log_path.suffix}"
        rotated_path = self.log_path.parent / rotated_name

        self.log_path.rename(rotated_path)

        if self.compress_old:
            self._compress_log(rotated_path)

        self._clean_old_logs()

    def _compress_log(self, log_path: Path) -> None:
        """Compress a log file with gzip."""
        compressed_path = log_path.with_suffix(log_path.suffix + ".gz")

        with log_path.open("rb") as f_in, gzip.open(compressed_path, "wb") as f_out:
            f_out.write(f_in.read())

        log_path.unlink()

    def _clean_old_logs(self) -> None:
        """Remove rotated logs older than the retention period."""
        cutoff = datetime.now() - timedelta(days=self.retention_days)

        pattern = f"{self.log_path.stem}_*{self.log_path.suffix}*"
        for old_log in self.log_path.parent.glob(pattern):
            mtime = datetime.fromtimestamp(old_log.stat().st_mtime)
            if mtime < cutoff:
                old_log.unlink()
