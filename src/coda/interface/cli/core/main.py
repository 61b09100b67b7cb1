"""Main CLI entry point.

    coda diff --content notes.md "hello" show
    coda diff --write src/app.py /tmp/proposed_app.py apply --yes
    coda config show
"""

import sys

import click

from coda import __version__
from coda.foundation.config import CodaConfig, LogConfig, load_config
from coda.foundation.logging import configure_logging
from coda.interface.cli.core.theme import create_coda_console

console = create_coda_console()


def cli_entrypoint() -> None:
    """Wrapped entrypoint with global error handling.

    Catches CodaError and shows it with recovery hints instead of a traceback.
    Called from pyproject.toml [project.scripts].
    """
    try:
        code = main(standalone_mode=False)
        if isinstance(code, int) and code:
            sys.exit(code)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        console.print("\n  [coda.muted]Aborted[/]")
        sys.exit(130)
    except Exception as e:
        from coda.interface.cli.core.error_handler import handle_error

        handle_error(e)


def _configured_level(cfg: CodaConfig) -> str | None:
    """Level from config, or None to let the env vars and --debug decide."""
    if cfg.log.level.upper() != LogConfig().level:
        return cfg.log.level
    return "INFO" if cfg.verbose else None


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file to use instead of .coda/config.yaml",
)
@click.version_option(version=__version__, prog_name="coda")
@click.pass_context
def main(ctx: click.Context, debug: bool, config_path: str | None) -> None:
    """coda - orchestration CLI for AI coding assistants.

    \b
    COMMANDS:
        coda diff      Preview, apply or discard proposed file changes
        coda config    Inspect configuration
    """
    cfg = load_config(config_path)
    configure_logging(
        debug=debug,
        level=None if debug else _configured_level(cfg),
        persist=cfg.log.persist,
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


# Command registration
from coda.interface.cli.commands import config_cmd, diff_cmd  # noqa: E402

main.add_command(config_cmd.config)
main.add_command(diff_cmd.diff)
