"""
Unit tests for the edit event dispatcher.
"""

import json
from pathlib import Path

import pytest

from skillver.audit import HookEventType, HookLogger
from skillver.config.schema import Config
from skillver.versioning import (
    EditEvent,
    EventDispatcher,
    HookResult,
    StepStatus,
    snapshot_file,
)
from skillver.versioning.dates import format_date, utc_today

# Matches the fixed_clock fixture
TODAY = "2026-03-14"


@pytest.fixture
def log_path(temp_dir: Path) -> Path:
    return temp_dir / "logs" / "hook.jsonl"


@pytest.fixture
def dispatcher(config: Config, log_path: Path, fixed_clock) -> EventDispatcher:
    return EventDispatcher(config, hook_logger=HookLogger(log_path), clock=fixed_clock)


def _payload(file_path: Path | str, tool_name: str = "Write", success: bool | None = True) -> dict:
    payload = {
        "session_id": "abc",
        "tool_name": tool_name,
        "tool_input": {"file_path": str(file_path), "content": "..."},
    }
    if success is not None:
        payload["tool_output"] = {"success": success}
    return payload


def _logged_types(log_path: Path) -> list[str]:
    return [json.loads(line)["event_type"] for line in log_path.read_text().splitlines()]


class TestEndToEnd:
    """Full pipeline scenarios."""

    def test_first_edit(self, temp_dir: Path, config: Config):
        """Test patch, archive, changelog and message for a fresh skill."""
        skill_dir = temp_dir / "repo" / "skills" / "demo"
        skill_dir.mkdir(parents=True)
        document = skill_dir / "SKILL.md"
        document.write_text("**Version**: 1.0.0\n**Last Updated**: 2020-01-01", encoding="utf-8")
        today = format_date(utc_today())

        result = EventDispatcher(config).handle_payload(_payload(document))

        assert result.to_output() == {
            "continue": True,
            "message": f"[skill-version-hook] Backed up demo/SKILL.md to releases/v1.0.0_{today}_SKILL.md",
        }
        expected_content = f"**Version**: 1.0.0\n**Last Updated**: {today}"
        assert document.read_text(encoding="utf-8") == expected_content
        archive = skill_dir / "releases" / f"v1.0.0_{today}_SKILL.md"
        assert archive.read_text(encoding="utf-8") == expected_content
        changelog = (skill_dir / "CHANGELOG.md").read_text(encoding="utf-8")
        assert f"## [1.0.0] - {today}" in changelog

    def test_replay_same_event(self, dispatcher: EventDispatcher, skill_file: Path):
        """Test replaying the event writes nothing new."""
        dispatcher.handle_payload(_payload(skill_file))
        changelog = skill_file.parent / "CHANGELOG.md"
        before = changelog.read_bytes()

        result = dispatcher.handle_payload(_payload(skill_file))

        assert result.continue_ is True
        assert "already exists" in result.message
        assert result.archive_status == StepStatus.SKIPPED
        assert changelog.read_bytes() == before
        assert len(list((skill_file.parent / "releases").iterdir())) == 1

    def test_failed_edit_has_no_side_effects(self, dispatcher: EventDispatcher, skill_file: Path, log_path: Path):
        """Test a failed tool outcome is ignored entirely."""
        before = skill_file.read_text(encoding="utf-8")

        result = dispatcher.handle_payload(_payload(skill_file, success=False))

        assert result.to_output() == {"continue": True}
        assert skill_file.read_text(encoding="utf-8") == before
        assert not (skill_file.parent / "releases").exists()
        assert not (skill_file.parent / "CHANGELOG.md").exists()
        assert not log_path.exists()

    def test_missing_success_flag_counts_as_success(self, dispatcher: EventDispatcher, skill_file: Path):
        """Test payloads without tool_output are processed."""
        result = dispatcher.handle_payload(_payload(skill_file, success=None))
        assert "Backed up demo/SKILL.md" in result.message


class TestFiltering:
    """Events that must be ignored."""

    def test_unknown_tool(self, dispatcher: EventDispatcher, skill_file: Path):
        """Test tools other than Write and Edit are ignored."""
        result = dispatcher.handle_payload(_payload(skill_file, tool_name="Read"))
        assert result.to_output() == {"continue": True}
        assert not (skill_file.parent / "releases").exists()

    def test_edit_tool_accepted(self, dispatcher: EventDispatcher, skill_file: Path):
        """Test the Edit tool triggers versioning."""
        result = dispatcher.handle_payload(_payload(skill_file, tool_name="Edit"))
        assert "Backed up" in result.message

    def test_untracked_path(self, dispatcher: EventDispatcher, project_dir: Path):
        """Test non-SKILL.md files are ignored."""
        other = project_dir / "README.md"
        other.write_text("**Version**: 1.0.0")
        assert dispatcher.handle_payload(_payload(other)).to_output() == {"continue": True}

    def test_missing_file_path(self, dispatcher: EventDispatcher):
        """Test payloads without a file path are ignored."""
        result = dispatcher.handle_payload({"tool_name": "Write", "tool_input": {}})
        assert result.to_output() == {"continue": True}

    def test_null_tool_input(self, dispatcher: EventDispatcher):
        """Test a null tool_input is ignored rather than reported."""
        result = dispatcher.handle_raw('{"tool_name": "Write", "tool_input": null}')
        assert result.to_output() == {"continue": True}

    def test_nested_document_ignored(self, dispatcher: EventDispatcher, skill_file: Path):
        """Test a SKILL.md inside a skill's subfolder is left alone."""
        nested = skill_file.parent / "references" / "SKILL.md"
        nested.parent.mkdir()
        nested.write_text("**Version**: 1.0.0\n", encoding="utf-8")

        result = dispatcher.handle_payload(_payload(nested))

        assert result.to_output() == {"continue": True}
        assert not (nested.parent / "releases").exists()
        assert not (nested.parent / "CHANGELOG.md").exists()


class TestDocumentHandling:
    """Pipeline behaviour for individual documents."""

    def test_patched_date_in_snapshot(self, dispatcher: EventDispatcher, skill_file: Path):
        """Test the live document and its snapshot carry the new date."""
        dispatcher.handle_payload(_payload(skill_file))

        assert f"**Last Updated**: {TODAY}" in skill_file.read_text(encoding="utf-8")
        archive = skill_file.parent / "releases" / f"v1.2.0_{TODAY}_SKILL.md"
        assert archive.read_text(encoding="utf-8") == skill_file.read_text(encoding="utf-8")

    def test_no_version(self, dispatcher: EventDispatcher, skill_file: Path, log_path: Path):
        """Test unversioned documents get an advisory and no archive."""
        skill_file.write_text("# Demo\n\n**Last Updated**: 2020-01-01\n", encoding="utf-8")

        result = dispatcher.handle_payload(_payload(skill_file))

        assert result.message == "[skill-version-hook] No version header found in demo/SKILL.md"
        assert not (skill_file.parent / "releases").exists()
        assert "2020-01-01" in skill_file.read_text(encoding="utf-8")
        assert HookEventType.VERSION_MISSING.value in _logged_types(log_path)

    def test_unreadable_document(self, dispatcher: EventDispatcher, project_dir: Path, log_path: Path):
        """Test a read failure is logged and produces no message."""
        missing = project_dir / ".claude" / "skills" / "ghost" / "SKILL.md"

        result = dispatcher.handle_payload(_payload(missing))

        assert result.to_output() == {"continue": True}
        assert HookEventType.DOCUMENT_READ_FAILED.value in _logged_types(log_path)

    def test_initial_development_note(self, dispatcher: EventDispatcher, skill_file: Path):
        """Test 0.x versions are flagged as initial development."""
        skill_file.write_text("**Version**: 0.3.0\n", encoding="utf-8")
        result = dispatcher.handle_payload(_payload(skill_file))
        assert result.message.endswith("(Initial Development)")

    def test_prerelease_filename(self, dispatcher: EventDispatcher, skill_file: Path):
        """Test build metadata is sanitized in the snapshot name."""
        skill_file.write_text("**Version**: 2.0.0-beta.1+exp.sha\n", encoding="utf-8")
        dispatcher.handle_payload(_payload(skill_file))
        assert (skill_file.parent / "releases" / f"v2.0.0-beta.1-exp.sha_{TODAY}_SKILL.md").exists()

    def test_new_version_updates_changelog(self, dispatcher: EventDispatcher, skill_file: Path, log_path: Path):
        """Test a version bump adds a changelog entry above the old one."""
        dispatcher.handle_payload(_payload(skill_file))
        skill_file.write_text(skill_file.read_text().replace("1.2.0", "1.3.0"), encoding="utf-8")

        result = dispatcher.handle_payload(_payload(skill_file))

        assert "v1.3.0_" in result.message
        changelog = (skill_file.parent / "CHANGELOG.md").read_text(encoding="utf-8")
        assert changelog.index("## [1.3.0]") < changelog.index("## [1.2.0]")
        types = _logged_types(log_path)
        assert types.count(HookEventType.ARCHIVE_CREATED.value) == 2
        assert HookEventType.CHANGELOG_CREATED.value in types
        assert HookEventType.CHANGELOG_UPDATED.value in types

    def test_changelog_failure_does_not_change_result(
        self, dispatcher: EventDispatcher, skill_file: Path, log_path: Path
    ):
        """Test a broken changelog is logged but the backup is still reported."""
        (skill_file.parent / "CHANGELOG.md").mkdir()

        result = dispatcher.handle_payload(_payload(skill_file))

        assert "Backed up" in result.message
        assert HookEventType.CHANGELOG_FAILED.value in _logged_types(log_path)


class TestErrorHandling:
    """Top-level failures degrade to advisories."""

    def test_malformed_json(self, dispatcher: EventDispatcher, log_path: Path):
        """Test invalid JSON yields continue with an error message."""
        result = dispatcher.handle_raw("{not json")
        assert result.continue_ is True
        assert result.message.startswith("[skill-version-hook] Error:")
        assert HookEventType.HOOK_ERROR.value in _logged_types(log_path)

    def test_undecodable_bytes(self, dispatcher: EventDispatcher):
        """Test input that is not UTF-8 yields an error advisory."""
        result = dispatcher.handle_raw(b'{"tool_name": "Write\xff"}')
        assert result.continue_ is True
        assert result.message.startswith("[skill-version-hook] Error:")

    def test_deeply_nested_json(self, dispatcher: EventDispatcher):
        """Test JSON too deep to decode yields an error advisory."""
        result = dispatcher.handle_raw("[" * 100000 + "]" * 100000)
        assert result.continue_ is True
        assert result.message.startswith("[skill-version-hook] Error:")

    def test_invalid_payload_shape(self, dispatcher: EventDispatcher):
        """Test payloads missing the tool name yield an error advisory."""
        result = dispatcher.handle_payload({"tool_input": {}})
        assert result.continue_ is True
        assert "Error" in result.message

    def test_non_object_payload(self, dispatcher: EventDispatcher):
        """Test a JSON array payload yields an error advisory."""
        result = dispatcher.handle_raw("[1, 2]")
        assert result.continue_ is True
        assert "Error" in result.message

    def test_unexpected_exception(self, dispatcher: EventDispatcher, skill_file: Path, monkeypatch):
        """Test unexpected exceptions never escape the dispatcher."""

        def boom(*args, **kwargs):
            raise RuntimeError("kaboom")

        monkeypatch.setattr("skillver.versioning.dispatcher.extract_version", boom)

        result = dispatcher.handle(EditEvent(tool_name="Write", file_path=str(skill_file)))

        assert result == HookResult(message="[skill-version-hook] Error: kaboom")

    def test_unwritable_log_is_ignored(self, config: Config, skill_file: Path, temp_dir: Path, fixed_clock):
        """Test the hook still works when its log cannot be written."""
        blocker = temp_dir / "not-a-dir"
        blocker.write_text("file")
        hook_logger = HookLogger(blocker / "hook.jsonl")

        result = EventDispatcher(config, hook_logger, fixed_clock).handle_payload(_payload(skill_file))

        assert "Backed up" in result.message


def test_snapshot_file(config: Config, skill_file: Path):
    """Test on-demand snapshots run the same pipeline."""
    result = snapshot_file(skill_file, config)
    assert "Backed up demo/SKILL.md" in result.message
    assert result.archive_status == StepStatus.SUCCESS
    assert "archive_status" not in result.to_output()


def test_archive_failure_status(config: Config, skill_file: Path):
    """Test a failed archive is reported through its status."""
    (skill_file.parent / "releases").write_text("not a directory")

    result = snapshot_file(skill_file, config)

    assert result.archive_status == StepStatus.FAILED
    assert result.message.startswith("[skill-version-hook] Failed to backup:")
    assert not (skill_file.parent / "CHANGELOG.md").exists()
