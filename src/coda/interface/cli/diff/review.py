"""Interactive per-file review of pending changes.

Walks the changeset one file at a time, shows its diff and asks what to do
with it. Applied and discarded changes leave the changeset immediately;
skipped ones stay pending.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from coda.diff import DiffPreviewer, FailedChange, FileDiff, RenderOptions
from coda.foundation.utils.paths import relative_to_cwd
from coda.interface.cli.core.theme import CHANGE_KIND_STYLES

logger = logging.getLogger(__name__)


class ReviewChoice(Enum):
    """User's decision for one file."""

    APPLY = "a"
    SKIP = "s"
    DISCARD = "d"
    QUIT = "q"


_CHOICE_LABELS = {
    ReviewChoice.APPLY: "apply",
    ReviewChoice.SKIP: "skip",
    ReviewChoice.DISCARD: "discard",
    ReviewChoice.QUIT: "quit",
}


@dataclass(slots=True)
class ReviewOutcome:
    """What happened to each file during a review."""

    applied: list[Path] = field(default_factory=list)
    failed: list[FailedChange] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    discarded: list[Path] = field(default_factory=list)


class ChangeReview:
    """Approve pending changes one file at a time.

    Usage:
        review = ChangeReview(previewer, console)
        outcome = review.run()
    """

    def __init__(
        self,
        previewer: DiffPreviewer,
        console: Console,
        options: RenderOptions | None = None,
    ) -> None:
        self.previewer = previewer
        self.console = console
        self.options = options or RenderOptions.from_config(previewer.config)

    def show_summary(self) -> None:
        """Display a summary table of pending changes."""
        table = Table(title="[coda.heading]Pending Changes[/]", show_header=True)
        table.add_column("Type", style="bold")
        table.add_column("Path")
        table.add_column("Changes", justify="right")

        for diff in self.previewer.get_diffs():
            icon, style = CHANGE_KIND_STYLES[diff.kind.value]
            table.add_row(
                f"[{style}]{icon}[/] {diff.kind.value}",
                escape(str(relative_to_cwd(diff.path))),
                f"+{diff.additions} -{diff.deletions}",
            )

        self.console.print()
        self.console.print(table)
        self.console.print()

    def show_change(self, diff: FileDiff) -> None:
        rendered = self.previewer.get_file_preview(diff.path, self.options)
        self.console.print(Text.from_ansi(rendered))

    def prompt_choice(self, index: int, total: int) -> ReviewChoice:
        """Ask what to do with the current file."""
        self.console.print(f"\n  [coda.heading]Change {index}/{total}[/]")
        prompt_text = " / ".join(
            f"[bold]{choice.value}[/]={label}" for choice, label in _CHOICE_LABELS.items()
        )
        answer = Prompt.ask(
            f"  {prompt_text}",
            choices=[choice.value for choice in ReviewChoice],
            default=ReviewChoice.APPLY.value,
            show_choices=False,
            console=self.console,
        )
        return ReviewChoice(answer.lower())

    def run(self) -> ReviewOutcome:
        outcome = ReviewOutcome()
        if not self.previewer.has_pending_changes():
            return outcome

        self.show_summary()

        diffs = self.previewer.get_diffs()
        for index, diff in enumerate(diffs, 1):
            self.show_change(diff)
            choice = self.prompt_choice(index, len(diffs))

            if choice is ReviewChoice.QUIT:
                outcome.skipped.extend(d.path for d in diffs[index - 1:])
                break
            if choice is ReviewChoice.APPLY:
                result = self.previewer.apply_selected([diff.path])
                outcome.applied.extend(result.succeeded)
                outcome.failed.extend(result.failed)
            elif choice is ReviewChoice.DISCARD:
                self.previewer.discard_change(diff.path)
                outcome.discarded.append(diff.path)
            else:
                outcome.skipped.append(diff.path)

        logger.debug(
            "Review finished: %d applied, %d failed, %d skipped, %d discarded",
            len(outcome.applied),
            len(outcome.failed),
            len(outcome.skipped),
            len(outcome.discarded),
        )
        self._print_outcome(outcome)
        return outcome

    def _print_outcome(self, outcome: ReviewOutcome) -> None:
        self.console.print()
        if outcome.applied:
            self.console.print(f"  [coda.success]✓ {len(outcome.applied)} change(s) applied[/]")
        for failure in outcome.failed:
            self.console.print(
                f"  [coda.error]✗ {escape(str(relative_to_cwd(failure.path)))}: {escape(failure.error)}[/]",
            )
        if outcome.discarded:
            self.console.print(f"  [coda.warning]- {len(outcome.discarded)} change(s) discarded[/]")
        if outcome.skipped:
            self.console.print(f"  [coda.muted]○ {len(outcome.skipped)} change(s) skipped[/]")
