# repository/line_repository.py
import json
import logging
import random
import threading
from typing import Optional
from util.errors import EmptyCollection, MalformedSource, SourceUnavailable

logger = logging.getLogger(__name__)


def load_lines(path: str) -> tuple[str, ...]:
    """
    Read a JSON array of strings from `path`.

    Raises SourceUnavailable when the file cannot be read, MalformedSource
    when it is not a JSON array of strings and EmptyCollection when the
    array is empty.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(path, f"could not read file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedSource(path, f"could not parse JSON from {path}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
        raise MalformedSource(path, f"expected a JSON array of strings in {path}")

    if not data:
        raise EmptyCollection(path, f"no lines found in {path}")
    return tuple(data)


class LineStore:
    """
    Random-line selection over one JSON source.

    Flow:
    - Default: re-read and re-parse the source on every call.
    - cached=True: keep the first successful load; failed loads are not kept,
      so the next call retries the file.
    """

    def __init__(self, path: str, cached: bool = False) -> None:
        self._path = path
        self._cached = cached
        self._lines: Optional[tuple[str, ...]] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return self._path

    def lines(self) -> tuple[str, ...]:
        if not self._cached:
            return load_lines(self._path)
        current = self._lines
        if current is not None:
            return current
        with self._lock:
            if self._lines is None:
                self._lines = load_lines(self._path)
                logger.info("lines.cached path=%s count=%d", self._path, len(self._lines))
            return self._lines

    def random_line(self) -> str:
        return random.choice(self.lines())
