"""Group an edit script into contextual hunks."""

from collections.abc import Sequence

from coda.diff.engine import diff_texts
from coda.diff.types import DiffHunk, FileDiff, LineEntry, LineKind, PendingChange

DEFAULT_CONTEXT_LINES = 3


class HunkBuilder:
    """Collapses a flat edit script into hunks.

    Each hunk keeps up to ``context_lines`` unchanged lines before and after
    its changes. Two groups of changes separated by at most
    ``2 * context_lines`` unchanged lines share a hunk, because their context
    windows would touch or overlap; longer unchanged runs split hunks. A gap of
    exactly ``2 * context_lines`` still merges.

    Usage:
        builder = HunkBuilder(context_lines=3)
        hunks = builder.build(script)
        file_diff = builder.build_file_diff(change)
    """

    def __init__(self, context_lines: int = DEFAULT_CONTEXT_LINES) -> None:
        if context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {context_lines}")
        self.context_lines = context_lines

    def build(self, script: Sequence[LineEntry]) -> tuple[DiffHunk, ...]:
        """Build hunks from an edit script. No changes means no hunks."""
        changed = [k for k, entry in enumerate(script) if entry.kind is not LineKind.CONTEXT]
        if not changed:
            return ()

        # (first, last) indices of changed entries per hunk
        groups: list[list[int]] = [[changed[0], changed[0]]]
        for k in changed[1:]:
            if k - groups[-1][1] - 1 <= 2 * self.context_lines:
                groups[-1][1] = k
            else:
                groups.append([k, k])

        # Lines of each side consumed before index k
        old_before = [0] * (len(script) + 1)
        new_before = [0] * (len(script) + 1)
        for k, entry in enumerate(script):
            old_before[k + 1] = old_before[k] + (entry.kind is not LineKind.ADDED)
            new_before[k + 1] = new_before[k] + (entry.kind is not LineKind.REMOVED)

        hunks = []
        for first, last in groups:
            lo = max(0, first - self.context_lines)
            hi = min(len(script), last + self.context_lines + 1)
            old_count = old_before[hi] - old_before[lo]
            new_count = new_before[hi] - new_before[lo]
            # An empty side points at the line before the hunk (unified convention)
            hunks.append(
                DiffHunk(
                    old_start=old_before[lo] + 1 if old_count else old_before[lo],
                    old_count=old_count,
                    new_start=new_before[lo] + 1 if new_count else new_before[lo],
                    new_count=new_count,
                    entries=tuple(script[lo:hi]),
                )
            )
        return tuple(hunks)

    def build_file_diff(self, change: PendingChange) -> FileDiff:
        """Diff a pending change and count its added and removed lines."""
        script = diff_texts(change.old_content or "", change.new_content or "")
        additions = sum(1 for e in script if e.kind is LineKind.ADDED)
        deletions = sum(1 for e in script if e.kind is LineKind.REMOVED)
        return FileDiff(
            path=change.path,
            kind=change.kind,
            hunks=self.build(script),
            additions=additions,
            deletions=deletions,
        )
