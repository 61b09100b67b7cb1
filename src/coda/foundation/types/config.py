"""Configuration type definitions - single source of truth for all config classes."""

from dataclasses import dataclass, field
from typing import Literal

DiffFormatName = Literal["unified", "side", "simple"]


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Defaults for the diff preview engine and the `coda diff` commands."""

    context_lines: int = 3
    """Unchanged lines shown around each change."""

    colorize: bool = True
    """Wrap terminal output in ANSI colours."""

    format: DiffFormatName = "unified"
    """Default preview format: unified, side (side-by-side) or simple."""

    column_width: int = 35
    """Column width of the side-by-side format."""

    tool: str = "vimdiff"
    """External diff viewer used by `coda diff tool`."""

    snapshot_dir: str | None = None
    """Scratch directory for diff-tool snapshots (default: <config dir>/diff-snapshots)."""


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Logging defaults (the --debug flag and CODA_LOG_LEVEL still win)."""

    level: str = "WARNING"
    """Console log level."""

    persist: bool = False
    """Keep per-session log files in <config dir>/logs."""


@dataclass(frozen=True, slots=True)
class CodaConfig:
    """Root configuration for coda."""

    diff: DiffConfig = field(default_factory=DiffConfig)
    """Diff preview configuration."""

    log: LogConfig = field(default_factory=LogConfig)
    """Logging configuration."""

    verbose: bool = False
    """Enable verbose output by default."""
