"""Diff preview session: stage, inspect, then apply or discard file changes.

Usage:
    previewer = DiffPreviewer()
    previewer.add_file_change("src/app.py", new_source)
    previewer.add_file_deletion("src/legacy.py")

    print(previewer.get_preview(RenderOptions(colorize=False)))
    result = previewer.apply_changes()

Construct one previewer per session and pass it around; it owns the only
copy of the changeset. An empty changeset is never an error: previews
return ``NO_PENDING_CHANGES`` and apply/discard/open_in_diff_tool report
that there was nothing to do.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from coda.diff.applier import ChangeApplier
from coda.diff.changeset import PendingChangeSet
from coda.diff.external import ExternalDiffBridge
from coda.diff.hunks import HunkBuilder
from coda.diff.renderer import DiffRenderer, RenderOptions
from coda.diff.types import (
    ApplyResult,
    ChangeKind,
    DiffStats,
    FileDiff,
    PendingChange,
)
from coda.foundation.config import get_config
from coda.foundation.types.config import DiffConfig
from coda.foundation.utils import files
from coda.foundation.utils.paths import config_directory, normalize_path

logger = logging.getLogger(__name__)


class DiffPreviewer:
    """One diff preview session.

    Args:
        config: Diff settings (default: ``get_config().diff``)
        snapshot_dir: Where diff-tool snapshots go
            (default: ``diff.snapshot_dir`` or ``<config dir>/diff-snapshots``)
    """

    def __init__(
        self,
        config: DiffConfig | None = None,
        *,
        snapshot_dir: Path | None = None,
    ) -> None:
        self.config = config or get_config().diff
        if snapshot_dir is None:
            snapshot_dir = (
                Path(self.config.snapshot_dir).expanduser()
                if self.config.snapshot_dir
                else config_directory() / "diff-snapshots"
            )
        self.snapshot_dir = snapshot_dir

        self.changes = PendingChangeSet()
        self.hunk_builder = HunkBuilder(self.config.context_lines)
        self.applier = ChangeApplier()
        self.bridge = ExternalDiffBridge(self.snapshot_dir / "temp")
        self._diffs: dict[PendingChange, FileDiff] = {}

    # -- registration --------------------------------------------------------

    def add_file_change(
        self,
        path: str | Path,
        new_content: str,
        kind: ChangeKind | None = None,
    ) -> FileDiff:
        """Stage new content for a file and return its diff."""
        previous = self.changes.get(path) if path else None
        change = self.changes.add_file_change(path, new_content, kind)
        return self._replace_diff(previous, change)

    def add_file_deletion(self, path: str | Path) -> FileDiff:
        """Stage deletion of an existing file and return its diff."""
        previous = self.changes.get(path) if path else None
        change = self.changes.add_file_deletion(path)
        return self._replace_diff(previous, change)

    def get_pending_files(self) -> list[Path]:
        return self.changes.get_pending_files()

    def has_pending_changes(self) -> bool:
        return self.changes.has_pending_changes()

    def get_change(self, path: str | Path) -> PendingChange | None:
        return self.changes.get(path)

    # -- inspection ----------------------------------------------------------

    def get_diff(self, path: str | Path) -> FileDiff | None:
        change = self.changes.get(path)
        return self._diff_for(change) if change else None

    def get_diffs(self) -> list[FileDiff]:
        return [self._diff_for(change) for change in self.changes]

    def set_context_lines(self, context_lines: int) -> None:
        """Change the context window; cached diffs are rebuilt on next use."""
        self.hunk_builder = HunkBuilder(context_lines)
        self._diffs.clear()

    def get_preview(self, options: RenderOptions | None = None) -> str:
        """Render every pending change.

        Returns ``NO_PENDING_CHANGES`` when nothing is staged.
        """
        options = options or RenderOptions.from_config(self.config)
        return DiffRenderer(options).render(self.get_diffs())

    def get_file_preview(self, path: str | Path, options: RenderOptions | None = None) -> str:
        """Render one pending change (empty sentinel if the path is not staged)."""
        diff = self.get_diff(path)
        options = options or RenderOptions.from_config(self.config)
        return DiffRenderer(options).render([diff] if diff else [])

    def save_preview(self, output_path: str | Path, options: RenderOptions | None = None) -> Path:
        """Write the preview as plain text, whatever colour was requested."""
        options = (options or RenderOptions.from_config(self.config)).plain()
        target = normalize_path(output_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        files.write_text(target, self.get_preview(options))
        logger.info("Saved preview of %d file(s) to %s", len(self.changes), target)
        return target

    def get_stats(self) -> DiffStats:
        created = modified = deleted = additions = deletions = 0
        for diff in self.get_diffs():
            additions += diff.additions
            deletions += diff.deletions
            if diff.kind is ChangeKind.CREATE:
                created += 1
            elif diff.kind is ChangeKind.MODIFY:
                modified += 1
            else:
                deleted += 1
        return DiffStats(
            total_files=len(self.changes),
            files_created=created,
            files_modified=modified,
            files_deleted=deleted,
            total_additions=additions,
            total_deletions=deletions,
        )

    # -- resolution ----------------------------------------------------------

    def apply_changes(self) -> ApplyResult:
        """Apply every pending change, then clear the changeset.

        The changeset is cleared even when some files failed; the failures
        are listed in the result.
        """
        if not self.has_pending_changes():
            logger.info("No pending changes to apply")
            return ApplyResult()
        try:
            result = self.applier.apply(self.changes)
        finally:
            self.discard_changes()
        logger.info(
            "Applied %d/%d change(s)", len(result.succeeded), result.total_changes
        )
        return result

    def apply_selected(self, paths: Iterable[str | Path]) -> ApplyResult:
        """Apply only the given pending paths and drop them from the changeset.

        Paths that are not pending are ignored. Other changes stay pending.
        """
        selected = []
        for path in paths:
            change = self.changes.get(path)
            if change is not None and change not in selected:
                selected.append(change)
        result = self.applier.apply(selected)
        for change in selected:
            self.discard_change(change.path)
        return result

    def discard_change(self, path: str | Path) -> bool:
        change = self.changes.get(path)
        if change is None:
            return False
        self._diffs.pop(change, None)
        return self.changes.discard_change(path)

    def discard_changes(self) -> int:
        """Drop every pending change. Returns how many were dropped."""
        self._diffs.clear()
        return self.changes.discard_changes()

    def open_in_diff_tool(self, tool: str | None = None) -> int:
        """Open each pending change in an external diff viewer.

        Returns:
            Number of files shown (0 when nothing is staged).
        """
        return self.bridge.open(self.changes, tool or self.config.tool)

    def _replace_diff(self, previous: PendingChange | None, change: PendingChange) -> FileDiff:
        if previous is not None and previous != change:
            self._diffs.pop(previous, None)
        return self._diff_for(change)

    def _diff_for(self, change: PendingChange) -> FileDiff:
        diff = self._diffs.get(change)
        if diff is None:
            diff = self.hunk_builder.build_file_diff(change)
            self._diffs[change] = diff
        return diff
