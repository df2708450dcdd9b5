"""Per-file copy policy: freshness check, overwrite gate, copy with timestamps."""

from __future__ import annotations

import contextlib
import errno
import os
import shutil
from typing import TYPE_CHECKING

from smartcopy.infrastructure.config import OVERWRITE_PROMPT
from smartcopy.types import CopyOutcome, CopyStatus

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


def okay_to_overwrite(target: Path, input_fn: Callable[[str], str] | None = None) -> bool:
    """Ask on the console whether ``target`` may be overwritten ("cp -i")."""
    try:
        answer = (input_fn or input)(OVERWRITE_PROMPT.format(target=target))
    except EOFError:
        return False
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def copy_file(
    source: Path,
    target: Path,
    *,
    prompt_on_overwrite: bool = False,
    preserve_attributes: bool = True,
    confirm: Callable[[Path], bool] = okay_to_overwrite,
) -> CopyOutcome:
    """Copy ``source`` to ``target`` unless the target is already up to date.

    The target counts as up to date when its modification time equals the
    source's exactly, at nanosecond resolution. Filesystems that store
    coarser timestamps (FAT, some network mounts) can truncate the time set
    on the target, in which case the file is copied again on every run.

    I/O failures never propagate; they come back as a FAILED outcome.
    """
    try:
        source_time = source.stat().st_mtime_ns
        # A symlink at the target is replaced, even one pointing at a directory.
        if not target.is_symlink() and target.is_dir():
            raise IsADirectoryError(errno.EISDIR, "target is a directory", str(target))

        target_exists = target.exists()
        if target_exists and target.stat().st_mtime_ns == source_time:
            return CopyOutcome(status=CopyStatus.SKIPPED_UP_TO_DATE, source=source, target=target)

        if target_exists and prompt_on_overwrite and not confirm(target):
            return CopyOutcome(status=CopyStatus.SKIPPED_USER_DECLINED, source=source, target=target)

        _replace_file(source, target, source_time, preserve_attributes)
    except OSError as exc:
        return CopyOutcome(status=CopyStatus.FAILED, source=source, target=target, reason=str(exc))

    return CopyOutcome(status=CopyStatus.COPIED, source=source, target=target)


def _replace_file(source: Path, target: Path, source_time: int, preserve_attributes: bool) -> None:
    """Copy into a temp file beside ``target``, then rename it over the target.

    The rename replaces a symlink or read-only file at ``target`` rather than
    writing through or into it.
    """
    tmp_path = target.with_name(f".{target.name}.{os.getpid()}.tmp")
    try:
        if preserve_attributes:
            # copy2 carries permission bits, timestamps and extended attributes
            shutil.copy2(source, tmp_path)
        else:
            shutil.copyfile(source, tmp_path)
        os.utime(tmp_path, ns=(tmp_path.stat().st_atime_ns, source_time))
        tmp_path.replace(target)
    except OSError:
        with contextlib.suppress(FileNotFoundError):
            tmp_path.unlink()
        raise
