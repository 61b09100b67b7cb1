"""Core CLI infrastructure: entry point, error handling, theme."""

from coda.interface.cli.core.error_handler import handle_error
from coda.interface.cli.core.theme import CODA_THEME, create_coda_console

__all__ = [
    "CODA_THEME",
    "create_coda_console",
    "handle_error",
]
