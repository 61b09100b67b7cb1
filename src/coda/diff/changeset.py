"""In-memory set of proposed file mutations."""

import logging
from collections.abc import Iterator
from pathlib import Path

from coda.diff.types import ChangeKind, PendingChange
from coda.foundation.errors import CodaError, ErrorCode, change_error, file_not_found
from coda.foundation.utils import files
from coda.foundation.utils.paths import normalize_path

logger = logging.getLogger(__name__)


class PendingChangeSet:
    """Ordered map of absolute path to pending change.

    One entry per path; registering a path again replaces its change but
    keeps its position. On-disk content is snapshotted at registration.

    Not thread-safe: callers serialize registration, apply and discard.
    """

    def __init__(self) -> None:
        self._changes: dict[Path, PendingChange] = {}

    def __len__(self) -> int:
        return len(self._changes)

    def __iter__(self) -> Iterator[PendingChange]:
        return iter(list(self._changes.values()))

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return normalize_path(path) in self._changes

    def add_file_change(
        self,
        path: str | Path,
        new_content: str,
        kind: ChangeKind | None = None,
    ) -> PendingChange:
        """Stage new content for a file.

        Args:
            path: Target file, relative paths resolve against the cwd
            new_content: Proposed content
            kind: Create or Modify; inferred from whether the file exists

        Returns:
            The registered change.

        Raises:
            CodaError: On a missing path or content, or a Delete kind.
        """
        if path is None or not str(path).strip():
            raise change_error("a file path is required")
        if new_content is None:
            raise change_error(f"no content given for {path}")
        if kind is ChangeKind.DELETE:
            raise CodaError(
                code=ErrorCode.CHANGE_KIND_INVALID,
                context={"kind": kind.value, "path": str(path)},
            )

        absolute = normalize_path(path)
        exists = absolute.is_file()
        if kind is None:
            kind = ChangeKind.MODIFY if exists else ChangeKind.CREATE

        old_content = ""
        if kind is ChangeKind.MODIFY and exists:
            old_content = self._snapshot(absolute)

        change = PendingChange(
            path=absolute,
            kind=kind,
            old_content=old_content,
            new_content=new_content,
        )
        self._changes[absolute] = change
        logger.debug("Staged %s of %s", kind.value, absolute)
        return change

    def add_file_deletion(self, path: str | Path) -> PendingChange:
        """Stage deletion of an existing file.

        Raises:
            CodaError: If the path is empty or the file does not exist.
        """
        if path is None or not str(path).strip():
            raise change_error("a file path is required")

        absolute = normalize_path(path)
        if not absolute.is_file():
            raise file_not_found(path)

        change = PendingChange(
            path=absolute,
            kind=ChangeKind.DELETE,
            old_content=self._snapshot(absolute),
            new_content=None,
        )
        self._changes[absolute] = change
        logger.debug("Staged delete of %s", absolute)
        return change

    def get(self, path: str | Path) -> PendingChange | None:
        return self._changes.get(normalize_path(path))

    def get_pending_files(self) -> list[Path]:
        return list(self._changes)

    def has_pending_changes(self) -> bool:
        return bool(self._changes)

    def discard_change(self, path: str | Path) -> bool:
        """Drop one entry. Returns False if the path was not pending."""
        return self._changes.pop(normalize_path(path), None) is not None

    def discard_changes(self) -> int:
        """Drop every entry. Returns how many were dropped (0 = nothing to do)."""
        count = len(self._changes)
        self._changes.clear()
        return count

    @staticmethod
    def _snapshot(path: Path) -> str:
        try:
            return files.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise CodaError(
                code=ErrorCode.IO_ERROR,
                context={"path": str(path), "detail": str(e)},
                cause=e,
            ) from e
