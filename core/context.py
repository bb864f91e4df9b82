# core/context.py
import logging
import mimetypes
import os
from dataclasses import dataclass, field
from typing import Optional
from config.settings import Settings
from core.directory_watcher import DirectoryWatcher
from core.entities import FallbackImage, Namespace
from core.file_name_cache import FileNameCache
from repository import directory_repository, namespaces
from repository.line_repository import LineStore

logger = logging.getLogger(__name__)


def build_namespaces(settings: Settings) -> list[Namespace]:
    return [
        Namespace(
            name=namespaces.GARY,
            directory=settings.GARY_DIR,
            fallback=settings.GARY_FALLBACK,
            base_url=settings.GARYURL,
            static_prefix=namespaces.STATIC_PREFIXES[namespaces.GARY],
            fallback_dir=settings.FALLBACK_DIR,
        ),
        Namespace(
            name=namespaces.GOOBER,
            directory=settings.GOOBER_DIR,
            fallback=settings.GOOBER_FALLBACK,
            base_url=settings.GOOBERURL,
            static_prefix=namespaces.STATIC_PREFIXES[namespaces.GOOBER],
            fallback_dir=settings.FALLBACK_DIR,
        ),
    ]


def load_fallback_image(ns: Namespace) -> Optional[FallbackImage]:
    """
    Read the fallback image from the namespace directory, else `fallback_dir`,
    so it can still be served after the file leaves disk.
    """
    for directory in (ns.directory, ns.fallback_dir):
        if not directory:
            continue
        content = directory_repository.read_file(os.path.join(directory, ns.fallback))
        if content is not None:
            media_type, _ = mimetypes.guess_type(ns.fallback)
            return FallbackImage(
                filename=ns.fallback,
                content=content,
                media_type=media_type or "application/octet-stream",
            )
    return None


@dataclass
class AppContext:
    """
    Everything request handlers share, built once per process and attached to
    `app.state.context` by the lifespan hook.
    """

    settings: Settings
    cache: FileNameCache
    quotes: LineStore
    jokes: LineStore
    watchers: dict[str, DirectoryWatcher] = field(default_factory=dict)
    fallbacks: dict[str, FallbackImage] = field(default_factory=dict)

    def start(self) -> None:
        """
        Read fallback images, subscribe watchers, then warm every namespace
        synchronously so a change landing between the two steps is picked up.
        """
        self.load_fallbacks()
        for watcher in self.watchers.values():
            watcher.start()
        for name, ok in self.cache.rebuild_all().items():
            if not ok:
                logger.warning("context.warmup.empty ns=%s using=fallback", name)
        logger.info(
            "context.ready %s",
            " ".join(f"{n}={self.cache.count(n)}" for n in self.cache.namespaces),
        )

    def load_fallbacks(self) -> None:
        for name, ns in self.cache.namespaces.items():
            image = load_fallback_image(ns)
            if image is None:
                logger.warning("context.fallback.missing ns=%s file=%s", name, ns.fallback)
                continue
            self.fallbacks[name] = image
            logger.info(
                "context.fallback.loaded ns=%s file=%s bytes=%d",
                name,
                image.filename,
                len(image.content),
            )

    def stop(self) -> None:
        for watcher in self.watchers.values():
            watcher.stop()

    def watcher_statuses(self) -> dict[str, str]:
        return {name: w.status.value for name, w in self.watchers.items()}


def build_context(settings: Settings) -> AppContext:
    cache = FileNameCache(build_namespaces(settings))
    watchers: dict[str, DirectoryWatcher] = {}
    if settings.WATCH_ENABLED:
        watchers = {
            name: DirectoryWatcher(
                cache, name, debounce_seconds=settings.WATCH_DEBOUNCE_SECONDS
            )
            for name in cache.namespaces
        }
    return AppContext(
        settings=settings,
        cache=cache,
        quotes=LineStore(settings.QUOTES_FILE, cached=settings.CACHE_LINES),
        jokes=LineStore(settings.JOKES_FILE, cached=settings.CACHE_LINES),
        watchers=watchers,
    )
