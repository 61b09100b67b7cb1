"""coda configuration management.

Loads configuration from .coda/config.yaml with sensible defaults.
All settings can be overridden via environment variables (CODA_*).

Config locations (in priority order):
1. Explicit path passed to load_config()
2. .coda/config.yaml (project-local)
3. <config dir>/config.yaml (user-global, ~/.coda unless CODA_CONFIG_DIR is set)
4. Built-in defaults

Thread Safety:
    Uses threading.Lock for thread-safe lazy initialization.
"""

import logging
import os
import threading
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

import yaml

from coda.foundation.errors import CodaError, ErrorCode, config_error
from coda.foundation.types.config import CodaConfig, DiffConfig, LogConfig
from coda.foundation.utils.paths import config_directory

logger = logging.getLogger(__name__)

_ENV_PREFIX = "CODA_"
_VALID_FORMATS = ("unified", "side", "simple")

# Global config instance (lazy-loaded, thread-safe)
_config: CodaConfig | None = None
_config_lock = threading.Lock()


def project_config_path() -> Path:
    return Path.cwd() / ".coda" / "config.yaml"


def user_config_path() -> Path:
    return config_directory() / "config.yaml"


def _defaults() -> dict[str, Any]:
    """Defaults taken from the dataclass definitions."""
    return {
        "diff": asdict(DiffConfig()),
        "log": asdict(LogConfig()),
        "verbose": False,
    }


def _deep_update(base: dict, updates: dict) -> dict:
    """Recursively update a dict with another dict."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def _coerce(value: str) -> Any:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    return value


def _apply_env_overrides(config_dict: dict) -> dict:
    """Apply environment variable overrides.

    Environment variables follow pattern: CODA_SECTION_KEY

    Examples:
        CODA_DIFF_CONTEXT_LINES=5
        CODA_DIFF_TOOL=meld
        CODA_LOG_LEVEL=DEBUG
    """
    known_sections = {
        "diff": {f.name for f in fields(DiffConfig)},
        "log": {f.name for f in fields(LogConfig)},
    }

    for key, value in os.environ.items():
        if not key.startswith(_ENV_PREFIX):
            continue
        path_str = key[len(_ENV_PREFIX):].lower()

        if path_str == "verbose":
            config_dict["verbose"] = _coerce(value)
            continue

        for section, keys in known_sections.items():
            if not path_str.startswith(section + "_"):
                continue
            name = path_str[len(section) + 1:]
            if name in keys:
                config_dict.setdefault(section, {})[name] = _coerce(value)
            break

    return config_dict


def _section(data: dict, name: str, cls: type) -> Any:
    raw = data.get(name) or {}
    if not isinstance(raw, dict):
        raise config_error(f"'{name}' must be a mapping, got {type(raw).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning("Ignoring unknown %s settings: %s", name, ", ".join(unknown))
    return cls(**{k: v for k, v in raw.items() if k in known})


def _dict_to_config(data: dict) -> CodaConfig:
    """Convert a dict to CodaConfig, validating the values the engine depends on."""
    diff_config = _section(data, "diff", DiffConfig)
    log_config = _section(data, "log", LogConfig)

    if not isinstance(diff_config.context_lines, int) or diff_config.context_lines < 0:
        raise config_error(f"diff.context_lines must be a non-negative integer, got {diff_config.context_lines!r}")
    if not isinstance(diff_config.column_width, int) or diff_config.column_width < 8:
        raise config_error(f"diff.column_width must be an integer >= 8, got {diff_config.column_width!r}")
    if diff_config.format not in _VALID_FORMATS:
        raise config_error(
            f"diff.format must be one of {', '.join(_VALID_FORMATS)}, got {diff_config.format!r}"
        )

    return CodaConfig(
        diff=diff_config,
        log=log_config,
        verbose=bool(data.get("verbose", False)),
    )


def load_config(path: str | Path | None = None) -> CodaConfig:
    """Load configuration from file with defaults and env overrides.

    Priority (highest to lowest):
    1. Environment variables (CODA_*)
    2. Explicit path if provided
    3. .coda/config.yaml (project-local)
    4. <config dir>/config.yaml (user-global)
    5. Built-in defaults

    Args:
        path: Optional explicit config file path.

    Returns:
        Merged CodaConfig instance.

    Raises:
        CodaError: If an explicit path does not exist, or the merged values
            are invalid.
    """
    global _config

    config_dict = _defaults()

    config_paths = []
    if path:
        if not Path(path).is_file():
            raise CodaError(code=ErrorCode.CONFIG_MISSING, context={"path": str(path)})
        config_paths.append(Path(path))
    config_paths.extend([project_config_path(), user_config_path()])

    for config_path in config_paths:
        if not config_path.exists():
            continue
        try:
            with open(config_path, encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Skipping unreadable config %s: %s", config_path, e)
            continue
        if not isinstance(file_config, dict):
            logger.warning("Skipping config %s: top level must be a mapping", config_path)
            continue
        _deep_update(config_dict, file_config)
        logger.debug("Loaded config from %s", config_path)
        break  # Use first found config

    config_dict = _apply_env_overrides(config_dict)

    _config = _dict_to_config(config_dict)
    return _config


def get_config() -> CodaConfig:
    """Get the current configuration, loading if needed.

    Thread-safe with double-check locking.
    """
    global _config

    if _config is not None:
        return _config

    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def reset_config() -> None:
    """Reset the global config (useful for testing)."""
    global _config
    with _config_lock:
        _config = None


def save_default_config(path: str | Path | None = None) -> Path:
    """Write the built-in defaults as YAML.

    Args:
        path: Target file (default: .coda/config.yaml in the cwd).

    Returns:
        Path of the written file.
    """
    target = Path(path) if path else project_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        f.write("# coda configuration\n")
        f.write("# Environment variables (CODA_DIFF_TOOL, CODA_DIFF_CONTEXT_LINES, ...) override these.\n\n")
        yaml.safe_dump(_defaults(), f, default_flow_style=False, sort_keys=False)
    return target
