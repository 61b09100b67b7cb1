"""Structured errors for coda.

Every error raised on purpose by coda is a ``CodaError`` carrying an
``ErrorCode``. The code selects a message template and a list of recovery
hints; ``context`` fills in the template. The numeric code doubles as a
stable identifier (``CODA-2001``) that callers can match on or show to users.

Code ranges:
    1xxx  change registration
    2xxx  filesystem
    3xxx  external diff tool
    4xxx  configuration
    5xxx  runtime
"""

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Stable numeric error codes, grouped by category."""

    # Change registration
    CHANGE_INVALID = 1001
    CHANGE_KIND_INVALID = 1002

    # Filesystem
    FILE_NOT_FOUND = 2001
    IO_ERROR = 2002

    # External diff tool
    DIFF_TOOL_NOT_FOUND = 3001
    DIFF_TOOL_FAILED = 3002
    DIFF_TOOL_UNRUNNABLE = 3003

    # Configuration
    CONFIG_MISSING = 4001
    CONFIG_INVALID = 4002

    # Runtime
    RUNTIME_STATE_INVALID = 5001


_CATEGORIES: dict[int, str] = {
    1: "change",
    2: "io",
    3: "tool",
    4: "config",
    5: "runtime",
}


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.CHANGE_INVALID: "Invalid change: {detail}",
    ErrorCode.CHANGE_KIND_INVALID: "Unsupported change kind '{kind}' for {path}",
    ErrorCode.FILE_NOT_FOUND: "File not found: {path}",
    ErrorCode.IO_ERROR: "Could not access {path}: {detail}",
    ErrorCode.DIFF_TOOL_NOT_FOUND: "Diff tool '{tool}' was not found",
    ErrorCode.DIFF_TOOL_FAILED: "Diff tool '{tool}' exited with code {returncode}",
    ErrorCode.DIFF_TOOL_UNRUNNABLE: "Diff tool '{tool}' could not be started: {detail}",
    ErrorCode.CONFIG_MISSING: "Config file not found: {path}",
    ErrorCode.CONFIG_INVALID: "Invalid configuration: {detail}",
    ErrorCode.RUNTIME_STATE_INVALID: "Unexpected error: {detail}",
}


RECOVERY_HINTS: dict[ErrorCode, tuple[str, ...]] = {
    ErrorCode.CHANGE_INVALID: (
        "Pass both a file path and the proposed content",
    ),
    ErrorCode.CHANGE_KIND_INVALID: (
        "Use 'coda diff --delete PATH' to stage a deletion",
    ),
    ErrorCode.FILE_NOT_FOUND: (
        "Check the path relative to the current directory",
        "Only existing files can be staged for deletion",
    ),
    ErrorCode.IO_ERROR: (
        "Check file permissions",
    ),
    ErrorCode.DIFF_TOOL_NOT_FOUND: (
        "Install the tool or pass another one: coda diff tool meld",
        "Set a default with CODA_DIFF_TOOL or diff.tool in .coda/config.yaml",
    ),
    ErrorCode.DIFF_TOOL_FAILED: (
        "Temporary snapshots were removed; rerun the command to reopen them",
    ),
    ErrorCode.DIFF_TOOL_UNRUNNABLE: (
        "Check that the tool is executable",
        "Pass another one: coda diff tool meld",
    ),
    ErrorCode.CONFIG_MISSING: (
        "Create one with: coda config init",
    ),
    ErrorCode.CONFIG_INVALID: (
        "Check .coda/config.yaml for typos",
        "Run 'coda config show' to see the effective values",
    ),
    ErrorCode.RUNTIME_STATE_INVALID: (
        "Rerun with --debug for details",
    ),
}


class _SafeFormat(dict):
    """Leaves unknown placeholders visible instead of raising KeyError."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class CodaError(Exception):
    """An error with a stable code, a formatted message and recovery hints.

    Args:
        code: The error code.
        context: Values for the message template (``path``, ``tool``, ...).
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.code = code
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause
        super().__init__(self.message)

    @property
    def error_id(self) -> str:
        return f"CODA-{int(self.code)}"

    @property
    def category(self) -> str:
        return _CATEGORIES.get(int(self.code) // 1000, "runtime")

    @property
    def message(self) -> str:
        template = ERROR_MESSAGES.get(self.code, "{detail}")
        return template.format_map(_SafeFormat(self.context))

    @property
    def recovery_hints(self) -> tuple[str, ...]:
        return RECOVERY_HINTS.get(self.code, ())

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "error_id": self.error_id,
            "code": int(self.code),
            "category": self.category,
            "message": self.message,
            "recovery_hints": list(self.recovery_hints),
            "context": {k: str(v) for k, v in self.context.items()},
        }

    def __repr__(self) -> str:
        return f"CodaError({self.error_id}, {self.message!r})"


def change_error(detail: str) -> CodaError:
    """Shortcut for an invalid registration argument."""
    return CodaError(code=ErrorCode.CHANGE_INVALID, context={"detail": detail})


def file_not_found(path: object) -> CodaError:
    """Shortcut for a missing file."""
    return CodaError(code=ErrorCode.FILE_NOT_FOUND, context={"path": str(path)})


def config_error(detail: str, cause: BaseException | None = None) -> CodaError:
    """Shortcut for a configuration problem."""
    return CodaError(code=ErrorCode.CONFIG_INVALID, context={"detail": detail}, cause=cause)
