"""Foundation utilities - Generic helpers with zero dependencies.

Provides generic utilities used across coda:
- Path operations (normalize_path, sanitize_filename, ensure_dir, relative_to_cwd, config_directory)
- Exact text I/O (read_text, write_text, remove_file)
"""

from coda.foundation.utils.files import read_text, remove_file, write_text
from coda.foundation.utils.paths import (
    config_directory,
    ensure_dir,
    normalize_path,
    relative_to_cwd,
    sanitize_filename,
)

__all__ = [
    # Path utilities
    "config_directory",
    "ensure_dir",
    "normalize_path",
    "relative_to_cwd",
    "sanitize_filename",
    # Text I/O
    "read_text",
    "remove_file",
    "write_text",
]
