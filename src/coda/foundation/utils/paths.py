"""Filesystem-safe path utilities.

Zero-dependency path operations used by the diff engine and the CLI.
"""

import os
import re
from pathlib import Path

CONFIG_DIR_ENV = "CODA_CONFIG_DIR"


def normalize_path(path: str | Path) -> Path:
    """Normalize path (expand user, make absolute against the cwd).

    Symlinks are not resolved, so the path a user staged is the path that
    gets written.

    Args:
        path: Path string or Path object

    Returns:
        Normalized absolute Path

    Example:
        >>> normalize_path("src/app.py")
        Path('/home/user/project/src/app.py')  # if cwd is /home/user/project
    """
    p = Path(path).expanduser()
    return Path(os.path.abspath(p))


def sanitize_filename(name: str) -> str:
    """Make filename filesystem-safe (remove invalid chars).

    Args:
        name: Original filename

    Returns:
        Sanitized filename safe for filesystem

    Example:
        >>> sanitize_filename("my/file:name.txt")
        'my-file-name.txt'
    """
    sanitized = re.sub(r'[<>:"/\\|?*\x00-\x1f]', "-", name)
    sanitized = sanitized.strip(". ")
    sanitized = re.sub(r"-+", "-", sanitized)
    return sanitized or "unnamed"


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, return Path.

    Creates parent directories if needed.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def relative_to_cwd(path: Path) -> Path:
    """Get path relative to current working directory.

    Args:
        path: Path to make relative

    Returns:
        Relative Path if possible, absolute Path otherwise

    Example:
        >>> relative_to_cwd(Path("/home/user/project/file.txt"))
        Path('file.txt')  # if cwd is /home/user/project
    """
    try:
        return path.relative_to(Path.cwd())
    except ValueError:
        # Path is not under cwd, return absolute
        return path


def config_directory() -> Path:
    """User-level coda directory (``$CODA_CONFIG_DIR`` or ``~/.coda``)."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".coda"
