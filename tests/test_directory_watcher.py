import threading
import time

import pytest
from watchdog.events import (
    DirCreatedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from core.directory_watcher import DirectoryWatcher, _NamespaceEventHandler
from core.entities import Namespace
from core.file_name_cache import FileNameCache
from repository import directory_repository
from util.enums import WatcherStatus


class FakeObserver:
    def __init__(self):
        self.scheduled = []
        self.alive = False
        self.stopped = False

    def schedule(self, handler, path, recursive=False):
        self.scheduled.append((handler, path, recursive))

    def start(self):
        self.alive = True

    def stop(self):
        self.stopped = True
        self.alive = False

    def join(self, timeout=None):
        pass

    def is_alive(self):
        return self.alive


class FailingObserver(FakeObserver):
    def start(self):
        raise FileNotFoundError("no such directory")


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


@pytest.fixture
def cache(tmp_path):
    ns = Namespace(
        name="gary",
        directory=str(tmp_path),
        fallback="Gary76.jpg",
        base_url="http://test/Gary",
        static_prefix="/Gary",
    )
    c = FileNameCache([ns])
    c.rebuild("gary")
    return c


def test_start_and_stop_with_observer(cache, tmp_path):
    observer = FakeObserver()
    watcher = DirectoryWatcher(cache, "gary", observer_factory=lambda: observer)

    assert watcher.start() == WatcherStatus.RUNNING
    assert observer.scheduled[0][1] == str(tmp_path)
    assert observer.scheduled[0][2] is False

    watcher.stop()
    assert observer.stopped
    assert watcher.status == WatcherStatus.STOPPED


def test_stop_is_safe_before_start_and_twice(cache):
    watcher = DirectoryWatcher(cache, "gary", observer_factory=FakeObserver)
    watcher.stop()
    watcher.stop()
    assert watcher.status == WatcherStatus.STOPPED


def test_subscription_failure_is_not_fatal(cache):
    watcher = DirectoryWatcher(cache, "gary", observer_factory=FailingObserver)
    assert watcher.start() == WatcherStatus.FAILED
    assert watcher.status == WatcherStatus.FAILED


def test_dead_observer_reports_failed(cache):
    observer = FakeObserver()
    watcher = DirectoryWatcher(cache, "gary", observer_factory=lambda: observer)
    watcher.start()
    observer.alive = False
    assert watcher.status == WatcherStatus.FAILED
    watcher.stop()


def test_notify_without_debounce_rebuilds_inline(cache, tmp_path):
    watcher = DirectoryWatcher(cache, "gary", debounce_seconds=0, observer_factory=FakeObserver)
    watcher.start()
    (tmp_path / "A.jpg").write_bytes(b"a")

    watcher.notify(FileCreatedEvent(str(tmp_path / "A.jpg")))

    assert cache.snapshot("gary") == ("A.jpg",)
    assert watcher.rebuild_count == 1
    watcher.stop()


def test_burst_is_coalesced_into_one_rebuild(cache, tmp_path):
    watcher = DirectoryWatcher(cache, "gary", debounce_seconds=0.2, observer_factory=FakeObserver)
    watcher.start()
    for i in range(10):
        (tmp_path / f"{i}.jpg").write_bytes(b"x")
        watcher.notify(FileCreatedEvent(str(tmp_path / f"{i}.jpg")))

    assert _wait_for(lambda: watcher.rebuild_count == 1)
    time.sleep(0.4)
    assert watcher.rebuild_count == 1
    assert len(cache.snapshot("gary")) == 10
    watcher.stop()


def test_stop_cancels_pending_rebuild(cache, tmp_path):
    watcher = DirectoryWatcher(cache, "gary", debounce_seconds=0.3, observer_factory=FakeObserver)
    watcher.start()
    (tmp_path / "A.jpg").write_bytes(b"a")
    watcher.notify()
    watcher.stop()

    time.sleep(0.5)
    assert watcher.rebuild_count == 0
    assert cache.snapshot("gary") == ()


def test_rebuild_errors_are_swallowed(cache, monkeypatch):
    watcher = DirectoryWatcher(cache, "gary", debounce_seconds=0, observer_factory=FakeObserver)
    watcher.start()

    def boom(name):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(cache, "rebuild", boom)
    watcher.notify()

    assert watcher.status == WatcherStatus.RUNNING
    assert watcher.rebuild_count == 0
    watcher.stop()


class TestEventFiltering:
    class Recorder:
        def __init__(self):
            self.events = []

        def notify(self, event=None):
            self.events.append(event)

    @pytest.mark.parametrize(
        "event",
        [
            FileCreatedEvent("/d/a.jpg"),
            FileDeletedEvent("/d/a.jpg"),
            FileMovedEvent("/d/a.jpg", "/d/b.jpg"),
        ],
    )
    def test_listing_changes_are_forwarded(self, event):
        rec = self.Recorder()
        _NamespaceEventHandler(rec).dispatch(event)
        assert rec.events == [event]

    @pytest.mark.parametrize(
        "event", [FileModifiedEvent("/d/a.jpg"), DirCreatedEvent("/d/sub")]
    )
    def test_other_events_are_ignored(self, event):
        rec = self.Recorder()
        _NamespaceEventHandler(rec).dispatch(event)
        assert rec.events == []


def test_real_observer_picks_up_new_files(cache, tmp_path):
    watcher = DirectoryWatcher(cache, "gary", debounce_seconds=0.05)
    if watcher.start() != WatcherStatus.RUNNING:
        pytest.skip("filesystem notifications unavailable")
    try:
        (tmp_path / "new.jpg").write_bytes(b"n")
        assert _wait_for(lambda: cache.snapshot("gary") == ("new.jpg",))

        (tmp_path / "new.jpg").unlink()
        assert _wait_for(lambda: cache.snapshot("gary") == ())
    finally:
        watcher.stop()


def test_event_during_slow_warmup_is_not_lost(cache, tmp_path, monkeypatch):
    real_list_files = directory_repository.list_files
    listed = threading.Event()
    calls = []

    def slow_first_list_files(path):
        files = real_list_files(path)
        calls.append(path)
        if len(calls) == 1:
            listed.set()
            time.sleep(0.3)
        return files

    monkeypatch.setattr(directory_repository, "list_files", slow_first_list_files)
    watcher = DirectoryWatcher(cache, "gary", debounce_seconds=0, observer_factory=FakeObserver)
    watcher.start()

    warmup = threading.Thread(target=cache.rebuild_all)
    warmup.start()
    assert listed.wait(5)
    (tmp_path / "new.jpg").write_bytes(b"n")
    watcher.notify(FileCreatedEvent(str(tmp_path / "new.jpg")))
    warmup.join()

    assert cache.snapshot("gary") == ("new.jpg",)
    watcher.stop()
