"""Config command - Inspect coda configuration."""

from dataclasses import fields, is_dataclass

import click
from rich.panel import Panel

from coda.foundation.config import (
    get_config,
    load_config,
    project_config_path,
    save_default_config,
    user_config_path,
)
from coda.interface.cli.core.theme import create_coda_console

console = create_coda_console()


def _get_nested(obj: object, key: str) -> object:
    """Get a nested attribute using dot notation.

    Args:
        obj: The object to traverse
        key: Dot-separated path like 'diff.context_lines'

    Returns:
        The value at the path, or raises KeyError if not found
    """
    current = obj
    for part in key.split("."):
        if is_dataclass(current) and part in {f.name for f in fields(current)}:
            current = getattr(current, part)
        else:
            raise KeyError(f"Key not found: {key}")
    return current


@click.group()
def config() -> None:
    """Inspect coda configuration.

    Configuration is loaded from (in priority order):
    1. Environment variables (CODA_*)
    2. --config PATH
    3. .coda/config.yaml (project-local)
    4. ~/.coda/config.yaml (user-global, or $CODA_CONFIG_DIR)
    5. Built-in defaults

    Examples:

        coda config show
        coda config init
        coda config get diff.context_lines

    Environment overrides:

        CODA_DIFF_TOOL=meld coda diff ... tool
        CODA_DIFF_CONTEXT_LINES=5 coda diff ... show
    """


@config.command()
@click.option("--path", type=click.Path(dir_okay=False), help="Config file path to show")
def show(path: str | None) -> None:
    """Show current configuration and which files exist."""
    cfg = load_config(path) if path else get_config()

    console.print(Panel("[bold]coda configuration[/bold]", border_style="cyan"))

    console.print("\n[coda.heading]Diff[/]")
    console.print(f"  Context lines: {cfg.diff.context_lines}")
    console.print(f"  Colorize: {cfg.diff.colorize}")
    console.print(f"  Format: {cfg.diff.format}")
    console.print(f"  Column width: {cfg.diff.column_width}")
    console.print(f"  Tool: {cfg.diff.tool}")
    console.print(f"  Snapshot dir: {cfg.diff.snapshot_dir or '(default)'}")

    console.print("\n[coda.heading]Logging[/]")
    console.print(f"  Level: {cfg.log.level}")
    console.print(f"  Persist: {cfg.log.persist}")

    console.print(f"\n  Verbose: {cfg.verbose}")

    console.print("\n[coda.muted]Config sources:[/]")
    for source in (project_config_path(), user_config_path()):
        if source.exists():
            console.print(f"  [coda.success]✓[/] {source}")
        else:
            console.print(f"  [coda.muted]○ {source} (not found)[/]")


@config.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file path (default: .coda/config.yaml)",
)
@click.option("--global", "global_config", is_flag=True, help="Create in the user config dir instead")
def init(path: str | None, global_config: bool) -> None:
    """Create a config file holding the defaults.

    Examples:
        coda config init                    # Create .coda/config.yaml
        coda config init --global           # Create ~/.coda/config.yaml
        coda config init --path custom.yaml
    """
    target = user_config_path() if global_config else path
    saved_path = save_default_config(target)
    console.print(f"[coda.success]✓[/] Config file created: {saved_path}")
    console.print("\n[coda.muted]Edit this file to customize coda behavior.[/]")


@config.command()
@click.argument("key")
@click.option("--path", type=click.Path(dir_okay=False), help="Config file path")
def get(key: str, path: str | None) -> None:
    """Get a configuration value.

    Use dot notation to access nested values.

    Examples:
        coda config get diff.tool
        coda config get log.level
    """
    cfg = load_config(path) if path else get_config()

    try:
        value = _get_nested(cfg, key)
    except KeyError:
        console.print(f"[coda.error]✗[/] Key not found: {key}")
        console.print("\n[coda.muted]Available top-level keys:[/]")
        console.print("  diff, log, verbose")
        raise SystemExit(1) from None

    # Plain output for scripting
    click.echo(value)
