"""Hand pending changes to an external diff viewer.

Each pending file is exported as a pair of snapshots (``.old``/``.new``)
and the viewer is started with those two paths, inheriting the terminal.
The call blocks until the viewer exits; there is no timeout.
"""

import logging
import shutil
import subprocess
from collections.abc import Iterable
from pathlib import Path

from coda.diff.types import PendingChange
from coda.foundation.errors import CodaError, ErrorCode
from coda.foundation.utils import files
from coda.foundation.utils.paths import ensure_dir, sanitize_filename

logger = logging.getLogger(__name__)

DEFAULT_DIFF_TOOL = "vimdiff"


class ExternalDiffBridge:
    """Runs an external diff tool once per pending file.

    Args:
        scratch_dir: Directory for the snapshot pairs, created on first use.
    """

    def __init__(self, scratch_dir: Path) -> None:
        self.scratch_dir = scratch_dir

    def open(self, changes: Iterable[PendingChange], tool: str = DEFAULT_DIFF_TOOL) -> int:
        """Show each change in ``tool``.

        Returns:
            Number of files shown (0 when there was nothing to show).

        Raises:
            CodaError: If the tool cannot be found or started, or exits with a
                nonzero code.
                Snapshots are removed before the error propagates.
        """
        changes = list(changes)
        if not changes:
            logger.info("No pending changes to open in %s", tool)
            return 0

        executable = self._resolve_tool(tool)

        shown = 0
        for index, change in enumerate(changes):
            old_file, new_file = self._snapshot_paths(index, change)
            try:
                self._export(change, old_file, new_file)
                logger.info("Opening %s in %s", change.path, tool)
                returncode = self._run(tool, executable, old_file, new_file)
            finally:
                for snapshot in (old_file, new_file):
                    snapshot.unlink(missing_ok=True)

            if returncode != 0:
                raise CodaError(
                    code=ErrorCode.DIFF_TOOL_FAILED,
                    context={"tool": tool, "returncode": returncode, "path": str(change.path)},
                )
            shown += 1
        return shown

    def _resolve_tool(self, tool: str) -> str:
        found = shutil.which(tool)
        if found:
            return found
        if Path(tool).is_file():
            return tool
        raise CodaError(code=ErrorCode.DIFF_TOOL_NOT_FOUND, context={"tool": tool})

    def _snapshot_paths(self, index: int, change: PendingChange) -> tuple[Path, Path]:
        stem = f"{index:03d}-{sanitize_filename(change.path.name)}"
        return self.scratch_dir / f"{stem}.old", self.scratch_dir / f"{stem}.new"

    def _export(self, change: PendingChange, old_file: Path, new_file: Path) -> None:
        ensure_dir(self.scratch_dir)
        files.write_text(old_file, change.old_content or "")
        files.write_text(new_file, change.new_content or "")

    def _run(self, tool: str, executable: str, old_file: Path, new_file: Path) -> int:
        # Inherited stdio: the viewer owns the terminal until it exits
        try:
            proc = subprocess.run([executable, str(old_file), str(new_file)], check=False)
        except OSError as e:
            raise CodaError(
                code=ErrorCode.DIFF_TOOL_UNRUNNABLE,
                context={"tool": tool, "detail": e.strerror or str(e)},
                cause=e,
            ) from e
        return proc.returncode
