# core/file_name_cache.py
import logging
import threading
from typing import Iterable
from core.entities import Namespace
from repository import directory_repository
from util.timing import timed

logger = logging.getLogger(__name__)

_EMPTY: tuple[str, ...] = ()


class FileNameCache:
    """
    In-memory namespace -> filename listing.

    Flow:
    - rebuild() holds the namespace's rebuild lock across scan and swap, so
      rebuilds of one namespace land in the order they started. The reader
      lock is only taken for the swap itself.
    - snapshot() hands out the current tuple; readers keep whatever version
      they got even if a rebuild lands right after.
    - A failed scan keeps the previous listing (stale beats empty).
    """

    def __init__(self, namespaces: Iterable[Namespace]) -> None:
        self._namespaces: dict[str, Namespace] = {ns.name: ns for ns in namespaces}
        self._listings: dict[str, tuple[str, ...]] = {}
        self._lock = threading.Lock()
        self._rebuild_locks: dict[str, threading.Lock] = {
            name: threading.Lock() for name in self._namespaces
        }

    @property
    def namespaces(self) -> dict[str, Namespace]:
        return dict(self._namespaces)

    def namespace(self, name: str) -> Namespace:
        try:
            return self._namespaces[name]
        except KeyError:
            raise KeyError(f"unknown namespace: {name}") from None

    def rebuild(self, name: str) -> bool:
        ns = self.namespace(name)
        with self._rebuild_locks[name]:
            with timed(logger, "cache.rebuild", ns=name):
                files = directory_repository.list_files(ns.directory)
            if files is None:
                logger.warning(
                    "cache.rebuild.unavailable ns=%s dir=%s kept=%d",
                    name,
                    ns.directory,
                    len(self.snapshot(name)),
                )
                return False

            with self._lock:
                self._listings[name] = files
        logger.info("cache.rebuild.ok ns=%s files=%d", name, len(files))
        return True

    def rebuild_all(self) -> dict[str, bool]:
        return {name: self.rebuild(name) for name in self._namespaces}

    def snapshot(self, name: str) -> tuple[str, ...]:
        with self._lock:
            return self._listings.get(name, _EMPTY)

    def count(self, name: str) -> int:
        return len(self.snapshot(name))
