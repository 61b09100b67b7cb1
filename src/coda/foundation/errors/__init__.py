"""Error system for coda."""

from coda.foundation.errors.errors import (
    ERROR_MESSAGES,
    RECOVERY_HINTS,
    CodaError,
    ErrorCode,
    change_error,
    config_error,
    file_not_found,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "RECOVERY_HINTS",
    "CodaError",
    "change_error",
    "config_error",
    "file_not_found",
]
