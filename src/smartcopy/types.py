"""Tree copy domain types."""

from __future__ import annotations

import os
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator


class TraversalContext(BaseModel):
    """Configuration for one copy run. Roots are absolute and normalized."""

    model_config = ConfigDict(frozen=True)

    source_root: Path
    target_root: Path
    prompt_on_overwrite: bool = False
    preserve_attributes: bool = True

    @field_validator("source_root", "target_root")
    @classmethod
    def _normalize(cls, value: Path) -> Path:
        return Path(os.path.abspath(value))

    def source_path(self, relative_path: Path) -> Path:
        return self.source_root / relative_path

    def target_path(self, relative_path: Path) -> Path:
        return self.target_root / relative_path


class EntryKind(StrEnum):
    DIRECTORY_ENTER = "directory_enter"
    DIRECTORY_LEAVE = "directory_leave"
    FILE = "file"


class Entry(BaseModel):
    model_config = ConfigDict(frozen=True)

    relative_path: Path  # "." for the root
    kind: EntryKind
    mod_time_ns: int | None = None
    error: str | None = None  # DirectoryLeave only: listing the directory failed


class CopyStatus(StrEnum):
    COPIED = "copied"
    SKIPPED_UP_TO_DATE = "skipped_up_to_date"
    SKIPPED_USER_DECLINED = "skipped_user_declined"
    FAILED = "failed"


class CopyOutcome(BaseModel):
    status: CopyStatus
    source: Path
    target: Path
    reason: str | None = None  # Only set for FAILED


class RunSummary(BaseModel):
    copied: int = 0
    skipped_up_to_date: int = 0
    skipped_user_declined: int = 0
    failed: int = 0
    directories_created: int = 0
    directory_failures: list[str] = []
    cycles: list[str] = []
    walk_errors: list[str] = []
    attribute_failures: list[str] = []

    def record(self, outcome: CopyOutcome) -> None:
        """Count a file outcome under its status."""
        setattr(self, outcome.status.value, getattr(self, outcome.status.value) + 1)
