"""Diff command - preview, apply or discard proposed file changes.

The changeset lives in memory, so every invocation stages it from the
options given to the group and then runs one subcommand on it.
"""

import json

import click
from rich.markup import escape
from rich.table import Table

from coda.diff import DiffPreviewer, RenderOptions
from coda.foundation.config import get_config
from coda.foundation.utils import files
from coda.foundation.utils.paths import normalize_path, relative_to_cwd
from coda.interface.cli.core.theme import CHANGE_KIND_STYLES, create_coda_console

console = create_coda_console()

_FORMATS = click.Choice(["unified", "side", "simple"])


def _read_source(source: str) -> str:
    if source == "-":
        return click.get_text_stream("stdin").read()
    return files.read_text(normalize_path(source))


def _previewer(ctx: click.Context) -> DiffPreviewer:
    return ctx.obj["previewer"]


def _nothing_to(action: str) -> None:
    console.print(f"[coda.info]No pending changes to {action}[/]")


@click.group()
@click.option(
    "--write",
    "writes",
    nargs=2,
    multiple=True,
    metavar="PATH SOURCE",
    help="Propose PATH gets the content of file SOURCE ('-' reads stdin)",
)
@click.option(
    "--content",
    "contents",
    nargs=2,
    multiple=True,
    metavar="PATH TEXT",
    help="Propose PATH gets the literal TEXT",
)
@click.option(
    "--delete",
    "deletes",
    multiple=True,
    metavar="PATH",
    help="Propose deleting PATH",
)
@click.pass_context
def diff(
    ctx: click.Context,
    writes: tuple[tuple[str, str], ...],
    contents: tuple[tuple[str, str], ...],
    deletes: tuple[str, ...],
) -> None:
    """Preview, apply or discard proposed file changes.

    Examples:

        coda diff --content notes.md "hello" show

        coda diff --write src/app.py new_app.py show --format side

        generate | coda diff --write src/app.py - apply --yes

        coda diff --delete old.txt --content new.txt "x" stats --json
    """
    ctx.ensure_object(dict)
    cfg = ctx.obj.get("config") or get_config()
    previewer = DiffPreviewer(cfg.diff)

    for path, source in writes:
        previewer.add_file_change(path, _read_source(source))
    for path, text in contents:
        previewer.add_file_change(path, text)
    for path in deletes:
        previewer.add_file_deletion(path)

    ctx.obj["previewer"] = previewer


@diff.command()
@click.option("--format", "fmt", type=_FORMATS, default=None, help="Output format")
@click.option("--no-color", is_flag=True, help="Disable ANSI colours")
@click.option("--context", "context_lines", type=click.IntRange(min=0), default=None,
              help="Unchanged lines around each change")
@click.pass_context
def show(ctx: click.Context, fmt: str | None, no_color: bool, context_lines: int | None) -> None:
    """Print the diff of every pending change."""
    previewer = _previewer(ctx)
    if context_lines is not None:
        previewer.set_context_lines(context_lines)

    cfg = previewer.config
    options = RenderOptions.for_format(
        fmt or cfg.format,
        colorize=cfg.colorize and not no_color,
        column_width=cfg.column_width,
    )
    click.echo(previewer.get_preview(options))


@diff.command()
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def stats(ctx: click.Context, json_output: bool) -> None:
    """Summarize the pending changes."""
    previewer = _previewer(ctx)
    diff_stats = previewer.get_stats()

    if json_output:
        click.echo(json.dumps(diff_stats.to_dict(), indent=2))
        return

    if not previewer.has_pending_changes():
        _nothing_to("summarize")
        return

    table = Table(title="[coda.heading]Pending Changes[/]", show_header=True)
    table.add_column("Type", style="bold")
    table.add_column("Path")
    table.add_column("+", justify="right", style="diff.added")
    table.add_column("-", justify="right", style="diff.removed")

    for file_diff in previewer.get_diffs():
        icon, style = CHANGE_KIND_STYLES[file_diff.kind.value]
        table.add_row(
            f"[{style}]{icon}[/] {file_diff.kind.value}",
            escape(str(relative_to_cwd(file_diff.path))),
            str(file_diff.additions),
            str(file_diff.deletions),
        )

    console.print(table)
    console.print(f"\n  {diff_stats.format()}, net {diff_stats.net_change:+d}")


@diff.command()
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--format", "fmt", type=_FORMATS, default=None, help="Output format")
@click.pass_context
def save(ctx: click.Context, output: str, fmt: str | None) -> None:
    """Write the preview to OUTPUT as plain text."""
    previewer = _previewer(ctx)
    cfg = previewer.config
    options = RenderOptions.for_format(
        fmt or cfg.format,
        colorize=False,
        column_width=cfg.column_width,
    )
    target = previewer.save_preview(output, options)
    console.print(f"[coda.success]✓[/] Preview saved to {escape(str(relative_to_cwd(target)))}")


@diff.command()
@click.option("--yes", "-y", is_flag=True, help="Apply without asking")
@click.pass_context
def apply(ctx: click.Context, yes: bool) -> None:
    """Write every pending change to disk."""
    previewer = _previewer(ctx)
    if not previewer.has_pending_changes():
        _nothing_to("apply")
        return

    summary = previewer.get_stats().format()
    if not yes and not click.confirm(f"Apply {summary}?", default=False):
        console.print("[coda.muted]Nothing applied[/]")
        return

    result = previewer.apply_changes()
    for path in result.succeeded:
        console.print(f"  [coda.success]✓[/] {escape(str(relative_to_cwd(path)))}")
    for failure in result.failed:
        console.print(f"  [coda.error]✗[/] {escape(str(relative_to_cwd(failure.path)))}: {escape(failure.error)}")

    console.print(
        f"\n  Applied {len(result.succeeded)}/{result.total_changes} change(s)"
    )
    if not result.ok:
        ctx.exit(1)


@diff.command()
@click.option("--yes", "-y", is_flag=True, help="Discard without asking")
@click.pass_context
def discard(ctx: click.Context, yes: bool) -> None:
    """Drop every pending change without touching disk."""
    previewer = _previewer(ctx)
    if not previewer.has_pending_changes():
        _nothing_to("discard")
        return

    if not yes and not click.confirm(
        f"Discard {previewer.get_stats().format()}?", default=False
    ):
        return

    count = previewer.discard_changes()
    console.print(f"[coda.warning]Discarded {count} change(s)[/]")


@diff.command()
@click.argument("tool_name", metavar="[TOOL]", required=False)
@click.pass_context
def tool(ctx: click.Context, tool_name: str | None) -> None:
    """Open each pending change in an external diff viewer.

    TOOL defaults to diff.tool from the configuration (vimdiff).
    """
    previewer = _previewer(ctx)
    if not previewer.has_pending_changes():
        _nothing_to("show")
        return

    shown = previewer.open_in_diff_tool(tool_name)
    console.print(f"[coda.muted]Reviewed {shown} file(s) in {tool_name or previewer.config.tool}[/]")


@diff.command()
@click.option("--format", "fmt", type=_FORMATS, default=None, help="Output format")
@click.pass_context
def review(ctx: click.Context, fmt: str | None) -> None:
    """Decide per file: apply, skip, discard or quit."""
    from coda.interface.cli.diff.review import ChangeReview

    previewer = _previewer(ctx)
    if not previewer.has_pending_changes():
        _nothing_to("review")
        return

    cfg = previewer.config
    options = RenderOptions.for_format(
        fmt or cfg.format,
        colorize=cfg.colorize,
        column_width=cfg.column_width,
    )
    outcome = ChangeReview(previewer, console, options).run()
    if outcome.failed:
        ctx.exit(1)
