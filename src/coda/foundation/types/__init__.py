"""Shared type definitions."""

from coda.foundation.types.config import CodaConfig, DiffConfig, LogConfig

__all__ = ["CodaConfig", "DiffConfig", "LogConfig"]
