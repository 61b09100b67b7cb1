"""CLI Error Handler.

Reports errors as a short human-readable block: the error id and message,
the underlying cause when there is one, and recovery suggestions from the
error code.
"""

import sys
from typing import NoReturn

from coda.foundation.errors import CodaError, ErrorCode


def _wrap(error: CodaError | Exception) -> CodaError:
    if isinstance(error, CodaError):
        return error
    return CodaError(
        code=ErrorCode.RUNTIME_STATE_INVALID,
        context={"detail": str(error) or type(error).__name__},
        cause=error,
    )


def handle_error(error: CodaError | Exception) -> NoReturn:
    """Report an error on stderr and exit.

    Args:
        error: The error to handle (CodaError or generic Exception)

    Raises:
        SystemExit: Always exits with code 1
    """
    _print_human_error(_wrap(error))
    sys.exit(1)


def _print_human_error(error: CodaError) -> None:
    """Print error in human-readable format."""
    from rich.markup import escape
    from rich.text import Text

    from coda.interface.cli.core.theme import create_coda_console

    console = create_coda_console(stderr=True)

    header = Text()
    header.append("✗ ", style="coda.error")
    header.append(error.error_id, style="coda.error")
    header.append(f" {error.message}")
    console.print(header)

    if error.cause is not None and not isinstance(error.cause, CodaError):
        console.print(f"  [coda.muted]caused by: {escape(repr(error.cause))}[/]")

    if error.recovery_hints:
        console.print("\n[bold]What you can do:[/]")
        for i, hint in enumerate(error.recovery_hints, 1):
            console.print(f"  {i}. {hint}", markup=False)
