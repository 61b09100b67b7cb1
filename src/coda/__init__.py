"""coda - orchestration CLI for AI coding assistants.

This package carries the diff & patch preview engine that every change
proposed by an assistant goes through before it touches the workspace.
"""

from coda.diff import ApplyResult, ChangeKind, DiffPreviewer, DiffStats, RenderOptions
from coda.foundation.errors import CodaError, ErrorCode

__version__ = "0.1.0"

__all__ = [
    "ApplyResult",
    "ChangeKind",
    "CodaError",
    "DiffPreviewer",
    "DiffStats",
    "ErrorCode",
    "RenderOptions",
    "__version__",
]
