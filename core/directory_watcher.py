# core/directory_watcher.py
import logging
import threading
from typing import Callable, Optional
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from core.file_name_cache import FileNameCache
from util.enums import WatcherStatus

logger = logging.getLogger(__name__)


class _NamespaceEventHandler(FileSystemEventHandler):
    """
    Forwards file create/delete/move events to the owning watcher.
    Directory events and in-place modifications don't change the listing.
    """

    def __init__(self, watcher: "DirectoryWatcher") -> None:
        super().__init__()
        self._watcher = watcher

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._watcher.notify(event)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._watcher.notify(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._watcher.notify(event)


class DirectoryWatcher:
    """
    Keeps one namespace of a FileNameCache in step with its directory.

    Flow:
    - start() subscribes a watchdog Observer to the namespace directory.
    - Each qualifying event calls notify(); the first event of a burst arms a
      timer and later ones ride along, so a burst costs one rescan.
    - The timer clears itself before rescanning, so an event that arrives
      during a rescan arms a new timer and is never lost.
    - Failures are logged and surface through `status`; nothing propagates.
    """

    def __init__(
        self,
        cache: FileNameCache,
        namespace: str,
        debounce_seconds: float = 0.25,
        observer_factory: Callable[[], Observer] = Observer,
    ) -> None:
        self._cache = cache
        self._ns = cache.namespace(namespace)
        self._debounce = max(0.0, float(debounce_seconds))
        self._observer_factory = observer_factory
        self._handler = _NamespaceEventHandler(self)

        self._lock = threading.Lock()
        self._observer: Optional[Observer] = None
        self._timer: Optional[threading.Timer] = None
        self._stopping = threading.Event()
        self._status = WatcherStatus.STOPPED
        self._rebuilds = 0

    @property
    def namespace(self) -> str:
        return self._ns.name

    @property
    def rebuild_count(self) -> int:
        return self._rebuilds

    @property
    def status(self) -> WatcherStatus:
        observer = self._observer
        if (
            self._status == WatcherStatus.RUNNING
            and observer is not None
            and not observer.is_alive()
        ):
            logger.error("watch.observer.died ns=%s", self._ns.name)
            self._status = WatcherStatus.FAILED
        return self._status

    def start(self) -> WatcherStatus:
        if self._observer is not None:
            logger.warning("watch.start.ignored ns=%s reason=already_started", self._ns.name)
            return self.status

        self._stopping.clear()
        observer = self._observer_factory()
        try:
            observer.schedule(self._handler, self._ns.directory, recursive=False)
            observer.start()
        except OSError as e:
            # Missing directory, permissions, inotify watch limit...
            logger.error(
                "watch.start.error ns=%s dir=%s err=%s",
                self._ns.name,
                self._ns.directory,
                e,
            )
            self._status = WatcherStatus.FAILED
            return self._status

        self._observer = observer
        self._status = WatcherStatus.RUNNING
        logger.info("watch.start.ok ns=%s dir=%s", self._ns.name, self._ns.directory)
        return self._status

    def stop(self, timeout: float = 5.0) -> None:
        self._stopping.set()
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

        observer, self._observer = self._observer, None
        if observer is not None:
            observer.stop()
            observer.join(timeout)
            logger.info("watch.stop ns=%s", self._ns.name)
        self._status = WatcherStatus.STOPPED

    def notify(self, event: Optional[FileSystemEvent] = None) -> None:
        """Record a directory change and schedule (or run) a rescan."""
        if self._stopping.is_set():
            return
        if event is not None:
            logger.debug(
                "watch.event ns=%s type=%s path=%s",
                self._ns.name,
                event.event_type,
                event.src_path,
            )

        if self._debounce == 0:
            self._rebuild()
            return

        with self._lock:
            if self._timer is not None:
                return
            self._timer = threading.Timer(self._debounce, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        if self._stopping.is_set():
            return
        self._rebuild()

    def _rebuild(self) -> None:
        try:
            self._cache.rebuild(self._ns.name)
        except Exception:
            logger.exception("watch.rebuild.error ns=%s", self._ns.name)
            return
        with self._lock:
            self._rebuilds += 1
