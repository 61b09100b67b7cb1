"""Exact text I/O.

``Path.read_text``/``write_text`` translate newlines. The diff engine must see
``\\r\\n`` files as they are on disk and write back exactly what was
previewed, so text goes through bytes here.
"""

from pathlib import Path

ENCODING = "utf-8"


def read_text(path: Path) -> str:
    """Read a UTF-8 file without newline translation."""
    return path.read_bytes().decode(ENCODING)


def write_text(path: Path, content: str) -> None:
    """Write a UTF-8 file without newline translation."""
    path.write_bytes(content.encode(ENCODING))


def remove_file(path: Path) -> None:
    """Delete a file. Raises if it is missing or is a directory."""
    path.unlink()
