"""Data model of the diff preview engine."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ChangeKind(Enum):
    """Type of file change."""

    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"


class LineKind(Enum):
    """Role of a line in an edit script."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class LineEntry:
    """One line of an edit script.

    Attributes:
        kind: Context, Added or Removed
        text: Line text without the trailing line feed
        old_lineno: 1-based line number in the old content (None for Added)
        new_lineno: 1-based line number in the new content (None for Removed)
    """

    kind: LineKind
    text: str
    old_lineno: int | None = None
    new_lineno: int | None = None


@dataclass(frozen=True, slots=True)
class DiffHunk:
    """A contiguous block of changed lines plus surrounding context."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    entries: tuple[LineEntry, ...]

    @property
    def header(self) -> str:
        return f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"


@dataclass(frozen=True, slots=True)
class PendingChange:
    """A registered, not-yet-applied file mutation.

    Contents are captured once at registration and never re-read, so what
    was previewed is what gets written.

    Attributes:
        path: Absolute path of the target file
        kind: Create, Modify or Delete
        old_content: On-disk content at registration ("" for create)
        new_content: Proposed content (None for delete)
    """

    path: Path
    kind: ChangeKind
    old_content: str | None = None
    new_content: str | None = None


@dataclass(frozen=True, slots=True)
class FileDiff:
    """Hunks and line counters of one pending change."""

    path: Path
    kind: ChangeKind
    hunks: tuple[DiffHunk, ...]
    additions: int
    deletions: int

    @property
    def has_changes(self) -> bool:
        return bool(self.additions or self.deletions)


@dataclass(frozen=True, slots=True)
class DiffStats:
    """Statistics about the whole changeset."""

    total_files: int = 0
    files_created: int = 0
    files_modified: int = 0
    files_deleted: int = 0
    total_additions: int = 0
    total_deletions: int = 0

    @property
    def net_change(self) -> int:
        return self.total_additions - self.total_deletions

    def format(self) -> str:
        """Format stats as a short string."""
        noun = "file" if self.total_files == 1 else "files"
        return f"{self.total_files} {noun} (+{self.total_additions} -{self.total_deletions})"

    def to_dict(self) -> dict[str, int]:
        return {
            "total_files": self.total_files,
            "files_created": self.files_created,
            "files_modified": self.files_modified,
            "files_deleted": self.files_deleted,
            "total_additions": self.total_additions,
            "total_deletions": self.total_deletions,
            "net_change": self.net_change,
        }


@dataclass(frozen=True, slots=True)
class FailedChange:
    """A change that could not be written or deleted."""

    path: Path
    error: str


@dataclass(slots=True)
class ApplyResult:
    """Full accounting of an apply run.

    ``succeeded`` and ``failed`` are disjoint and together cover every
    processed change.
    """

    succeeded: list[Path] = field(default_factory=list)
    failed: list[FailedChange] = field(default_factory=list)
    total_changes: int = 0

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def nothing_to_do(self) -> bool:
        return self.total_changes == 0
