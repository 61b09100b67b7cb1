"""Configuration management for coda."""

from coda.foundation.config.loader import (
    get_config,
    load_config,
    project_config_path,
    reset_config,
    save_default_config,
    user_config_path,
)
from coda.foundation.types.config import CodaConfig, DiffConfig, LogConfig

__all__ = [
    "CodaConfig",
    "DiffConfig",
    "LogConfig",
    "get_config",
    "load_config",
    "project_config_path",
    "reset_config",
    "save_default_config",
    "user_config_path",
]
