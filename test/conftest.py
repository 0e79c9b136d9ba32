from collections.abc import Generator
from typing import Any
from urllib.parse import urlencode

import pytest
from flask import Flask, g
from flask.testing import FlaskClient
from freezegun import freeze_time
from loguru import logger
from pytest_socket import disable_socket
from requests_mock import Mocker, adapter

from songrepo.app import REPOSITORY_EXTENSION, create_app
from songrepo.catalog import SpotifyCatalog
from songrepo.config import (
    SPOTIFY_BASE_URL,
    SPOTIFY_TOKEN_URL,
    get_config,
    reset_config,
)
from songrepo.models import Song
from songrepo.repository import SongRepository

FAKE_ACCESS_TOKEN = "fake-access-token"  # noqa: S105
SEARCH_PAGE_LENGTH = 8


def pytest_runtest_setup() -> None:
    disable_socket()


@pytest.fixture(autouse=True)
def set_time() -> None:
    with freeze_time("2020-01-01"):
        yield


@pytest.fixture(autouse=True)
def set_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("LOG_FILE", "/dev/null")  # DEBUG logs still written to stdout
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "fake-spotify-client-id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "fake-spotify-client-secret")
    monkeypatch.delenv("CATALOG_MARKET", raising=False)
    monkeypatch.delenv("CATALOG_TIMEOUT_SECONDS", raising=False)
    reset_config()
    yield
    reset_config()


def make_spotify_track(i: int) -> dict[str, Any]:
    # This is a dramatically truncated version of a track object
    # For full example see:
    #   https://developer.spotify.com/documentation/web-api/reference/search
    return {
        "id": f"test-song-id-{i}",
        "name": f"test-song-{i}",
        "uri": f"spotify:track:test-song-id-{i}",
        "artists": [{"name": "test-artist"}, {"name": "other-artist"}],
        "album": {
            "name": f"test-album-{i}",
            "images": [
                {"url": f"https://i.scdn.co/image/test-{i}", "height": 640},
                {"url": f"https://i.scdn.co/image/test-{i}-small", "height": 64},
            ],
        },
        "duration_ms": 185_000 + i * 1000,
        "preview_url": None,
    }


def make_song(song_id: str, title: str = "test-title") -> Song:
    return Song(id=song_id, title=title, artist_name="test-artist")


@pytest.fixture
def mock_token_request(requests_mock: Mocker) -> adapter._Matcher:
    return requests_mock.post(
        SPOTIFY_TOKEN_URL,
        json={
            "access_token": FAKE_ACCESS_TOKEN,
            "token_type": "Bearer",
            "expires_in": 3600,
        },
    )


@pytest.fixture
def mock_search_request(
    requests_mock: Mocker,
    mock_token_request: adapter._Matcher,  # noqa: ARG001
) -> adapter._Matcher:
    params = urlencode(
        {"q": "test-term", "type": "track", "limit": SEARCH_PAGE_LENGTH, "market": "US"}
    )
    return requests_mock.get(
        f"{SPOTIFY_BASE_URL}/search?{params}",
        request_headers={"Authorization": f"Bearer {FAKE_ACCESS_TOKEN}"},
        json={
            "tracks": {
                "items": [make_spotify_track(i) for i in range(SEARCH_PAGE_LENGTH)],
                "limit": SEARCH_PAGE_LENGTH,
                "offset": 0,
                "total": 90,
            }
        },
    )


@pytest.fixture
def catalog() -> SpotifyCatalog:
    return SpotifyCatalog(get_config())


@pytest.fixture
def app() -> Flask:
    flask_app = create_app()
    flask_app.config.update({"TESTING": True})  # pyright: ignore[reportUnknownMemberType]
    return flask_app


@pytest.fixture
def repository(app: Flask) -> SongRepository:
    return app.extensions[REPOSITORY_EXTENSION]


@pytest.fixture
def client(app: Flask) -> Generator[FlaskClient, None, None]:
    with app.app_context():
        g.logger = logger.bind()
        yield app.test_client()
