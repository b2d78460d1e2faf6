"""
Versioning models for Skillver.

Defines the hook input/output records and the explicit results each
pipeline step reports back to the dispatcher.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolInput(BaseModel):
    """Arguments the editing tool was called with."""

    model_config = ConfigDict(extra="allow")

    file_path: str | None = None


class ToolOutput(BaseModel):
    """Outcome reported by the editing tool."""

    model_config = ConfigDict(extra="allow")

    success: bool | None = None
    error: str | None = None


class HookInput(BaseModel):
    """Raw PostToolUse payload read from standard input."""

    model_config = ConfigDict(extra="allow")

    session_id: str | None = None
    tool_name: str
    tool_input: ToolInput | None = None
    tool_output: ToolOutput | None = None
    transcript_path: str | None = None


class EditEvent(BaseModel):
    """One completed file modification, as seen by the dispatcher."""

    tool_name: str = Field(..., description="Editing operation that ran")
    file_path: str | None = Field(default=None, description="Modified file")
    succeeded: bool = Field(default=True, description="Whether the edit succeeded")

    @classmethod
    def from_hook_input(cls, payload: HookInput) -> "EditEvent":
        """Build an event from a hook payload.

        Only an explicit ``success: false`` marks the edit as failed. A
        missing or null ``tool_input`` yields an event without a path.
        """
        succeeded = not (payload.tool_output is not None and payload.tool_output.success is False)
        return cls(
            tool_name=payload.tool_name,
            file_path=payload.tool_input.file_path if payload.tool_input else None,
            succeeded=succeeded,
        )


class StepStatus(str, Enum):
    """Outcome of a single pipeline step."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class HookResult(BaseModel):
    """Advisory result written back to the host runtime."""

    model_config = ConfigDict(populate_by_name=True)

    continue_: bool = Field(default=True, alias="continue")
    message: str | None = None
    archive_status: StepStatus | None = Field(
        default=None,
        exclude=True,
        description="Outcome of the archive step, when it ran",
    )

    def to_output(self) -> dict[str, Any]:
        """Get the JSON-ready output, omitting an absent message."""
        return self.model_dump(by_alias=True, exclude_none=True)


class StepResult(BaseModel):
    """Result of one pipeline step."""

    status: StepStatus
    message: str = ""
    path: Path | None = None

    @property
    def ok(self) -> bool:
        return self.status == StepStatus.SUCCESS

    @classmethod
    def success(cls, message: str = "", path: Path | None = None) -> "StepResult":
        return cls(status=StepStatus.SUCCESS, message=message, path=path)

    @classmethod
    def skipped(cls, message: str = "", path: Path | None = None) -> "StepResult":
        return cls(status=StepStatus.SKIPPED, message=message, path=path)

    @classmethod
    def failed(cls, message: str, path: Path | None = None) -> "StepResult":
        return cls(status=StepStatus.FAILED, message=message, path=path)


class DocumentTarget(BaseModel):
    """A tracked document identified from an edited path."""

    path: Path = Field(..., description="Path to the document")
    name: str = Field(..., description="Logical document identifier (enclosing directory)")

    @property
    def directory(self) -> Path:
        return self.path.parent


class MigrationReport(BaseModel):
    """Counters collected while migrating a skills directory."""

    total: int = 0
    processed: int = 0
    releases_created: int = 0
    changelogs_created: int = 0
    headers_added: int = 0
    backups_created: int = 0
    backups_migrated: int = 0
    errors: dict[str, str] = Field(
        default_factory=dict,
        description="Map of document name to error message",
    )
