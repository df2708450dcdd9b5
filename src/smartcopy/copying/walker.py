"""Mirror a source tree into a target tree, delegating file copies."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from smartcopy.copying.decision import copy_file, okay_to_overwrite
from smartcopy.copying.entries import EntryWalker, FileSystemLoopError
from smartcopy.infrastructure.logger import logger
from smartcopy.types import CopyStatus, EntryKind, RunSummary

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from smartcopy.types import CopyOutcome, Entry, TraversalContext


def prepare_roots(source: Path, target: Path) -> tuple[Path, Path]:
    """Validate the source root and make sure the target root exists.

    Raises NotADirectoryError or OSError; both are fatal for the run.
    """
    if not source.is_dir():
        raise NotADirectoryError(f"source must be a directory: {source}")
    if not target.exists():
        target.mkdir(parents=True)
    if not target.is_dir():
        raise NotADirectoryError(f"destination must be a directory: {target}")
    return source, target


def _create_directory(target: Path) -> bool:
    """Create ``target``; return False if it already existed as a directory."""
    try:
        target.mkdir()
    except FileExistsError:
        if not target.is_dir():
            raise NotADirectoryError(f"exists and is not a directory: {target}") from None
        return False
    return True


def _report_outcome(outcome: CopyOutcome) -> None:
    if outcome.status is CopyStatus.FAILED:
        logger.error("Unable to copy", source=str(outcome.source), reason=outcome.reason)
    elif outcome.status is CopyStatus.SKIPPED_USER_DECLINED:
        logger.info("Overwrite declined", target=str(outcome.target))
    elif outcome.status is CopyStatus.COPIED:
        logger.debug("Copied", source=str(outcome.source), target=str(outcome.target))
    else:
        logger.debug("Up to date", target=str(outcome.target))


class TreeCopier:
    """Drive one copy run over ``context``.

    Every failure below the roots is logged, recorded in the summary, and
    the walk carries on with the next entry.
    """

    def __init__(self, context: TraversalContext, confirm: Callable[[Path], bool] | None = None) -> None:
        self.context = context
        self.confirm = confirm or okay_to_overwrite
        self.summary = RunSummary()

    def run(self) -> RunSummary:
        walker = EntryWalker(self.context.source_root, on_error=self._walk_failed)
        for entry in walker:
            if entry.kind is EntryKind.DIRECTORY_ENTER:
                if not self._pre_visit_directory(entry):
                    walker.skip_subtree()
            elif entry.kind is EntryKind.FILE:
                self._visit_file(entry)
            else:
                self._post_visit_directory(entry)
        return self.summary

    def _pre_visit_directory(self, entry: Entry) -> bool:
        target = self.context.target_path(entry.relative_path)
        try:
            if _create_directory(target):
                self.summary.directories_created += 1
        except OSError as exc:
            logger.error("Unable to create", target=str(target), reason=str(exc))
            self.summary.directory_failures.append(str(target))
            return False
        return True

    def _visit_file(self, entry: Entry) -> None:
        outcome = copy_file(
            self.context.source_path(entry.relative_path),
            self.context.target_path(entry.relative_path),
            prompt_on_overwrite=self.context.prompt_on_overwrite,
            preserve_attributes=self.context.preserve_attributes,
            confirm=self.confirm,
        )
        _report_outcome(outcome)
        self.summary.record(outcome)

    def _post_visit_directory(self, entry: Entry) -> None:
        # Children have been written by now, so the directory's own time is fixed up last.
        if entry.error is not None or not self.context.preserve_attributes or entry.mod_time_ns is None:
            return
        target = self.context.target_path(entry.relative_path)
        try:
            os.utime(target, ns=(target.stat().st_atime_ns, entry.mod_time_ns))
        except OSError as exc:
            logger.error("Unable to copy all attributes", target=str(target), reason=str(exc))
            self.summary.attribute_failures.append(str(target))

    def _walk_failed(self, path: Path, exc: OSError) -> None:
        if isinstance(exc, FileSystemLoopError):
            logger.warning("Cycle detected", path=str(path))
            self.summary.cycles.append(str(path))
        else:
            logger.error("Unable to copy", source=str(path), reason=str(exc))
            self.summary.walk_errors.append(str(path))


def copy_tree(context: TraversalContext, confirm: Callable[[Path], bool] | None = None) -> RunSummary:
    """Copy ``context.source_root`` into ``context.target_root``."""
    logger.info(
        "Copying tree",
        source=str(context.source_root),
        target=str(context.target_root),
        prompt=context.prompt_on_overwrite,
        preserve=context.preserve_attributes,
    )
    summary = TreeCopier(context, confirm).run()
    logger.info(
        "Copy finished",
        copied=summary.copied,
        up_to_date=summary.skipped_up_to_date,
        declined=summary.skipped_user_declined,
        failed=summary.failed,
    )
    return summary
