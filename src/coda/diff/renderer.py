"""Text renderings of file diffs.

Three formats:
- Unified (like git diff): ``---``/``+++`` headers, ``@@`` markers, prefixed lines
- Side-by-side: OLD and NEW columns split by a vertical bar
- Simple: one tag per file plus a ``Changes: +X -Y`` line

Colour is applied with rich styles rendered straight to ANSI SGR sequences,
so the text of each line is emitted untouched (tabs and carriage returns
included) and uncoloured output is plain text.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from rich.color import ColorSystem
from rich.style import Style

from coda.diff.types import ChangeKind, FileDiff, LineKind
from coda.foundation.types.config import DiffConfig
from coda.foundation.utils.paths import relative_to_cwd

NO_PENDING_CHANGES = "No pending changes to preview"

# Shared with the CLI theme so terminal output and rendered text agree
DIFF_STYLES: dict[str, Style] = {
    "diff.header": Style.parse("cyan"),
    "diff.hunk": Style.parse("magenta"),
    "diff.added": Style.parse("green"),
    "diff.removed": Style.parse("red"),
}

_SIMPLE_TAGS = {
    ChangeKind.CREATE: ("[CREATED]", "diff.added"),
    ChangeKind.MODIFY: ("[MODIFIED]", "diff.header"),
    ChangeKind.DELETE: ("[DELETED]", "diff.removed"),
}


class DiffFormat(Enum):
    """Resolved output format."""

    UNIFIED = "unified"
    SIDE_BY_SIDE = "side"
    SIMPLE = "simple"


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """How to render a preview.

    ``side_by_side`` wins over ``unified_format``; with neither set the
    simple format is used. See ``format``.
    """

    colorize: bool = True
    unified_format: bool = True
    side_by_side: bool = False
    column_width: int = 35

    @property
    def format(self) -> DiffFormat:
        if self.side_by_side:
            return DiffFormat.SIDE_BY_SIDE
        if self.unified_format:
            return DiffFormat.UNIFIED
        return DiffFormat.SIMPLE

    def plain(self) -> "RenderOptions":
        """Same options without colour."""
        return replace(self, colorize=False)

    @classmethod
    def for_format(
        cls,
        fmt: DiffFormat | str,
        *,
        colorize: bool = True,
        column_width: int = 35,
    ) -> "RenderOptions":
        """Options selecting a format by name ("unified", "side", "simple")."""
        fmt = DiffFormat(fmt)
        return cls(
            colorize=colorize,
            unified_format=fmt is DiffFormat.UNIFIED,
            side_by_side=fmt is DiffFormat.SIDE_BY_SIDE,
            column_width=column_width,
        )

    @classmethod
    def from_config(cls, config: DiffConfig) -> "RenderOptions":
        return cls.for_format(
            config.format,
            colorize=config.colorize,
            column_width=config.column_width,
        )


def truncate(text: str, max_length: int) -> str:
    """Shorten text to ``max_length`` characters, ending with '...'."""
    if len(text) <= max_length:
        return text
    if max_length <= 3:
        return text[:max_length]
    return text[: max_length - 3] + "..."


class DiffRenderer:
    """Renders file diffs as text.

    Usage:
        renderer = DiffRenderer(RenderOptions(side_by_side=True))
        text = renderer.render(file_diffs)
    """

    def __init__(self, options: RenderOptions | None = None) -> None:
        self.options = options or RenderOptions()

    def render(self, diffs: Sequence[FileDiff]) -> str:
        """Render every diff, separated by blank lines."""
        if not diffs:
            return NO_PENDING_CHANGES
        return "\n\n".join(self.render_file(diff) for diff in diffs)

    def render_file(self, diff: FileDiff) -> str:
        fmt = self.options.format
        if fmt is DiffFormat.SIDE_BY_SIDE:
            lines = self._side_by_side(diff)
        elif fmt is DiffFormat.UNIFIED:
            lines = self._unified(diff)
        else:
            lines = self._simple(diff)
        return "\n".join(lines)

    def _paint(self, text: str, style_name: str) -> str:
        if not self.options.colorize or not text:
            return text
        return DIFF_STYLES[style_name].render(text, color_system=ColorSystem.STANDARD)

    def _summary(self, diff: FileDiff) -> str:
        return " ".join(
            (
                self._paint("Changes:", "diff.header"),
                self._paint(f"+{diff.additions}", "diff.added"),
                self._paint(f"-{diff.deletions}", "diff.removed"),
            )
        )

    def _unified(self, diff: FileDiff) -> list[str]:
        path = _display_path(diff.path)
        old_suffix = " (deleted)" if diff.kind is ChangeKind.DELETE else ""
        new_suffix = " (new file)" if diff.kind is ChangeKind.CREATE else ""
        lines = [
            self._paint(f"--- {path}{old_suffix}", "diff.header"),
            self._paint(f"+++ {path}{new_suffix}", "diff.header"),
        ]

        for hunk in diff.hunks:
            lines.append(self._paint(hunk.header, "diff.hunk"))
            for entry in hunk.entries:
                if entry.kind is LineKind.ADDED:
                    lines.append(self._paint(f"+{entry.text}", "diff.added"))
                elif entry.kind is LineKind.REMOVED:
                    lines.append(self._paint(f"-{entry.text}", "diff.removed"))
                else:
                    lines.append(f" {entry.text}")

        lines.append("")
        lines.append(self._summary(diff))
        return lines

    def _side_by_side(self, diff: FileDiff) -> list[str]:
        width = self.options.column_width
        rule = "─" * (width * 2 + 3)
        lines = [
            self._paint(f"File: {_display_path(diff.path)}", "diff.header"),
            rule,
            f"{'OLD'.ljust(width)} │ NEW",
            rule,
        ]

        blank = " " * width
        for index, hunk in enumerate(diff.hunks):
            if index:
                lines.append(self._paint(hunk.header, "diff.hunk"))
            for entry in hunk.entries:
                text = truncate(entry.text, width - 2)
                if entry.kind is LineKind.REMOVED:
                    row = f"{self._paint(text.ljust(width), 'diff.removed')} │"
                elif entry.kind is LineKind.ADDED:
                    row = f"{blank} │ {self._paint(text, 'diff.added')}"
                else:
                    row = f"{text.ljust(width)} │ {text}"
                lines.append(row.rstrip(" "))
        return lines

    def _simple(self, diff: FileDiff) -> list[str]:
        tag, style_name = _SIMPLE_TAGS[diff.kind]
        return [
            self._paint(f"File: {_display_path(diff.path)}", "diff.header"),
            self._paint(tag, style_name),
            self._summary(diff),
        ]


def _display_path(path: Path) -> str:
    return str(relative_to_cwd(path))
