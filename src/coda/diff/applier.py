"""Materialize pending changes on disk."""

import logging
from collections.abc import Iterable

from coda.diff.types import ApplyResult, ChangeKind, FailedChange, PendingChange
from coda.foundation.utils import files

logger = logging.getLogger(__name__)


class ChangeApplier:
    """Writes and deletes files, one change at a time.

    A failure on one file is recorded and does not stop the others. There is
    no rollback: files written before a failure stay written.
    """

    def apply(self, changes: Iterable[PendingChange]) -> ApplyResult:
        """Apply changes in the given order.

        Returns:
            ApplyResult listing every change as succeeded or failed.
        """
        result = ApplyResult()
        for change in changes:
            result.total_changes += 1
            try:
                self._apply_one(change)
            except Exception as e:
                logger.warning("Failed to %s %s: %s", change.kind.value, change.path, e)
                result.failed.append(FailedChange(path=change.path, error=str(e)))
            else:
                logger.info("Applied %s to %s", change.kind.value, change.path)
                result.succeeded.append(change.path)
        return result

    def _apply_one(self, change: PendingChange) -> None:
        if change.kind is ChangeKind.DELETE:
            files.remove_file(change.path)
            return
        change.path.parent.mkdir(parents=True, exist_ok=True)
        files.write_text(change.path, change.new_content or "")
