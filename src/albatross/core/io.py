"""Whole-file text helpers used by FileManager.

Reads and writes always go through these two functions so every file is
handled as UTF-8 with its line endings untouched. Both raise OSError (or
UnicodeDecodeError); FileManager turns those into ConfigIOError.
"""

import contextlib
import logging
import os
import stat
from pathlib import Path

from albatross.core.constants import FILE_ENCODING

__all__ = [
    "atomic_write",
    "read_text",
]

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Return the full UTF-8 content of path, line endings unchanged."""
    with path.open("r", encoding=FILE_ENCODING, newline="") as f:
        return f.read()


def atomic_write(path: Path, content: str) -> None:
    """Replace path with content in a single step.

    The text goes to a hidden sibling file first (its name carries the PID
    so concurrent processes never share one) and is then moved over path
    with os.replace. Readers see either the old file or the new one. An
    existing file's permission bits carry over to the replacement.

    Args:
        path: File to replace or create.
        content: Complete new file content.

    Raises:
        OSError: If the staging file cannot be written or moved into place.

    """
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else None

    staging = directory / f".{path.name}.{os.getpid()}.tmp"
    try:
        staging.write_text(content, encoding=FILE_ENCODING, newline="")
        if mode is not None:
            staging.chmod(mode)
        os.replace(staging, path)
    except OSError:
        with contextlib.suppress(OSError):
            staging.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d characters to %s", len(content), path)
