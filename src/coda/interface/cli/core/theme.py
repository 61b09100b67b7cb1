"""CLI theme.

One Rich theme for every coda command. Diff colours come from the diff
renderer so the terminal tables and the rendered diff text agree.
"""

from rich.console import Console
from rich.theme import Theme

from coda.diff.renderer import DIFF_STYLES

CODA_THEME = Theme({
    # Status
    "coda.success": "bold green",
    "coda.warning": "yellow",
    "coda.error": "bold red",
    "coda.info": "cyan",
    "coda.muted": "dim",

    # Text hierarchy
    "coda.heading": "bold cyan",
    "coda.path": "bold",

    # Change kinds
    "change.create": "green",
    "change.modify": "yellow",
    "change.delete": "red",

    **DIFF_STYLES,
})

# Icon and style per change kind value
CHANGE_KIND_STYLES: dict[str, tuple[str, str]] = {
    "create": ("+", "change.create"),
    "modify": ("~", "change.modify"),
    "delete": ("-", "change.delete"),
}


def create_coda_console(*, stderr: bool = False) -> Console:
    """Create a Rich console with the coda theme."""
    return Console(theme=CODA_THEME, stderr=stderr, highlight=False)
