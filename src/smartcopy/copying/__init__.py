"""Tree copy engine: entry enumeration, per-file policy, and the walker."""

from __future__ import annotations

from .decision import copy_file, okay_to_overwrite
from .entries import EntryWalker, FileSystemLoopError, SpecialFileError
from .report import write_report
from .walker import TreeCopier, copy_tree, prepare_roots

__all__ = [
    # decision
    "copy_file",
    "okay_to_overwrite",
    # entries
    "EntryWalker",
    "FileSystemLoopError",
    "SpecialFileError",
    # report
    "write_report",
    # walker
    "TreeCopier",
    "copy_tree",
    "prepare_roots",
]
