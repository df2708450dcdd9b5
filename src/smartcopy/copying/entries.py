"""Cycle-aware, depth-first enumeration of a directory tree.

Symbolic links are followed, so a linked directory is visited as if it were
a real one. A directory is identified by (device, inode); descending into a
directory that is already on the current path is a cycle and is reported
through the error callback instead of being entered.

The walk keeps an explicit stack of frames. Each frame is a directory that
has been entered and still waits for its leave event, together with the
children that have not been visited yet.
"""

from __future__ import annotations

import errno
import os
import stat
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from smartcopy.types import Entry, EntryKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

ROOT = Path(".")


class FileSystemLoopError(OSError):
    """A symbolic link leads back to a directory on the current path."""

    def __init__(self, path: Path) -> None:
        super().__init__(errno.ELOOP, "cycle detected", str(path))


class SpecialFileError(OSError):
    """Entry is neither a directory nor a regular file (FIFO, socket, device)."""

    def __init__(self, path: Path) -> None:
        super().__init__(errno.EINVAL, "not a regular file", str(path))


@dataclass
class _Frame:
    relative_path: Path
    key: tuple[int, int]
    mod_time_ns: int
    children: deque[Path] = field(default_factory=deque)
    error: str | None = None


class EntryWalker:
    """Iterate the entries under ``root`` in pre-order with leave events.

    Call :meth:`skip_subtree` right after receiving a DirectoryEnter entry to
    prune that directory: neither its children nor its leave event are
    produced.
    """

    def __init__(self, root: Path, on_error: Callable[[Path, OSError], None]) -> None:
        self._root = root
        self._on_error = on_error
        self._skip = False

    def skip_subtree(self) -> None:
        self._skip = True

    def __iter__(self) -> Iterator[Entry]:
        stack: list[_Frame] = []
        on_path: set[tuple[int, int]] = set()

        # The root must be valid; errors here are fatal and propagate.
        root_stat = self._root.stat()
        yield from self._enter(ROOT, root_stat, stack, on_path)

        while stack:
            frame = stack[-1]
            if not frame.children:
                stack.pop()
                on_path.discard(frame.key)
                yield Entry(
                    relative_path=frame.relative_path,
                    kind=EntryKind.DIRECTORY_LEAVE,
                    mod_time_ns=frame.mod_time_ns,
                    error=frame.error,
                )
                continue

            child = frame.children.popleft()
            relative_path = frame.relative_path / child.name
            try:
                child_stat = child.stat()  # follows symlinks
            except OSError as exc:
                self._on_error(child, exc)
                continue

            if stat.S_ISDIR(child_stat.st_mode):
                yield from self._enter(relative_path, child_stat, stack, on_path)
            elif stat.S_ISREG(child_stat.st_mode):
                yield Entry(
                    relative_path=relative_path,
                    kind=EntryKind.FILE,
                    mod_time_ns=child_stat.st_mtime_ns,
                )
            else:
                self._on_error(child, SpecialFileError(child))

    def _enter(
        self,
        relative_path: Path,
        dir_stat: os.stat_result,
        stack: list[_Frame],
        on_path: set[tuple[int, int]],
    ) -> Iterator[Entry]:
        path = self._root / relative_path
        key = (dir_stat.st_dev, dir_stat.st_ino)
        if key in on_path:
            self._on_error(path, FileSystemLoopError(path))
            return

        self._skip = False
        yield Entry(
            relative_path=relative_path,
            kind=EntryKind.DIRECTORY_ENTER,
            mod_time_ns=dir_stat.st_mtime_ns,
        )
        if self._skip:
            self._skip = False
            return

        frame = _Frame(relative_path=relative_path, key=key, mod_time_ns=dir_stat.st_mtime_ns)
        try:
            # Snapshot the listing; sorted for a stable visiting order.
            frame.children.extend(sorted(path.iterdir()))
        except OSError as exc:
            frame.error = str(exc)
            self._on_error(path, exc)
        stack.append(frame)
        on_path.add(key)
