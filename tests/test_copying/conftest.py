"""Shared fixtures for tree copy tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

# Whole seconds, so filesystems with coarse timestamps still compare equal.
T1 = 1_600_000_000 * 10**9
T2 = 1_650_000_000 * 10**9
T3 = 1_700_000_000 * 10**9


def write_file(path: Path, content: str, mtime_ns: int | None = None) -> Path:
    """Write a file, creating parents, and optionally pin its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if mtime_ns is not None:
        set_mtime(path, mtime_ns)
    return path


def set_mtime(path: Path, mtime_ns: int) -> None:
    os.utime(path, ns=(mtime_ns, mtime_ns))


def mtime(path: Path) -> int:
    return path.stat().st_mtime_ns


@pytest.fixture()
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture()
def target_dir(tmp_path: Path) -> Path:
    """Target root path; not created, so the copy has to make it."""
    return tmp_path / "target"


skip_if_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="permission checks are bypassed for root",
)
