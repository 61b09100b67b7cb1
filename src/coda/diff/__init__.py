"""Diff & patch preview engine.

Computes line-level diffs between files on disk and proposed content,
renders them (unified, side-by-side or simple, optionally coloured), and
applies or discards the staged changes.

Usage:
    from coda.diff import DiffPreviewer, RenderOptions

    previewer = DiffPreviewer()
    previewer.add_file_change("README.md", new_text)
    print(previewer.get_preview(RenderOptions(side_by_side=True)))
    result = previewer.apply_changes()
"""

from coda.diff.applier import ChangeApplier
from coda.diff.changeset import PendingChangeSet
from coda.diff.engine import compute_edit_script, diff_texts, split_lines
from coda.diff.external import ExternalDiffBridge
from coda.diff.hunks import HunkBuilder
from coda.diff.preview import DiffPreviewer
from coda.diff.renderer import (
    NO_PENDING_CHANGES,
    DiffFormat,
    DiffRenderer,
    RenderOptions,
)
from coda.diff.types import (
    ApplyResult,
    ChangeKind,
    DiffHunk,
    DiffStats,
    FailedChange,
    FileDiff,
    LineEntry,
    LineKind,
    PendingChange,
)

__all__ = [
    "ApplyResult",
    "ChangeApplier",
    "ChangeKind",
    "DiffFormat",
    "DiffHunk",
    "DiffPreviewer",
    "DiffRenderer",
    "DiffStats",
    "ExternalDiffBridge",
    "FailedChange",
    "FileDiff",
    "HunkBuilder",
    "LineEntry",
    "LineKind",
    "NO_PENDING_CHANGES",
    "PendingChange",
    "PendingChangeSet",
    "RenderOptions",
    "compute_edit_script",
    "diff_texts",
    "split_lines",
]
