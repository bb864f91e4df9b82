# repository/directory_repository.py
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


def list_files(path: str) -> Optional[tuple[str, ...]]:
    """
    One-shot listing of the regular files directly inside `path`.

    Subdirectories are skipped; symlinks count when they point at a regular
    file. Returns None when the path is missing, unreadable or not a
    directory so callers can fall back instead of crashing. The result is
    materialized and sorted, never a lazy view of the directory.
    """
    try:
        with os.scandir(path) as entries:
            names = [e.name for e in entries if _is_regular_file(e)]
    except OSError as e:
        logger.debug("dir.list.unavailable path=%s err=%s", path, type(e).__name__)
        return None
    return tuple(sorted(names))


def _is_regular_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError:
        # Entry vanished or dangling link between scandir() and stat()
        return False


def read_file(path: str) -> Optional[bytes]:
    """Whole-file read; None when the file is missing or unreadable."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        logger.debug("file.read.unavailable path=%s err=%s", path, type(e).__name__)
        return None
