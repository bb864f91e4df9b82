import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app


@pytest.fixture
def image_dirs(tmp_path):
    gary = tmp_path / "gary"
    goober = tmp_path / "goober"
    fallback = tmp_path / "fallback"
    for d in (gary, goober, fallback):
        d.mkdir()
    (fallback / "Gary76.jpg").write_bytes(b"fallback-gary")
    (fallback / "goober8.jpg").write_bytes(b"fallback-goober")
    return SimpleNamespace(gary=gary, goober=goober, fallback=fallback)


@pytest.fixture
def line_files(tmp_path):
    quotes = tmp_path / "quotes.json"
    jokes = tmp_path / "jokes.json"
    quotes.write_text(json.dumps(["stay curious"]), encoding="utf-8")
    jokes.write_text(json.dumps(["why did the snail cross the road"]), encoding="utf-8")
    return SimpleNamespace(quotes=quotes, jokes=jokes)


@pytest.fixture
def make_settings(image_dirs, line_files):
    def _make(**overrides) -> Settings:
        values = {
            "APP_ENV": "test",
            "GARY_DIR": str(image_dirs.gary),
            "GOOBER_DIR": str(image_dirs.goober),
            "FALLBACK_DIR": str(image_dirs.fallback),
            "GARYURL": "http://test/Gary",
            "GOOBERURL": "http://test/Goober/",
            "QUOTES_FILE": str(line_files.quotes),
            "JOKES_FILE": str(line_files.jokes),
            "WATCH_ENABLED": False,
            "DOCS_FILE": None,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def make_client(make_settings):
    """Build a started TestClient; lifespan runs on enter, so seed files first."""
    clients = []

    def _make(**overrides) -> TestClient:
        client = TestClient(create_app(make_settings(**overrides)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
