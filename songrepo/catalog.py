import threading
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from http import HTTPStatus
from typing import Any, Protocol

import requests
from loguru import logger
from requests import HTTPError, RequestException
from requests.auth import HTTPBasicAuth

from songrepo.config import SPOTIFY_BASE_URL, SPOTIFY_TOKEN_URL, Config
from songrepo.errors import CatalogUnavailableError
from songrepo.models import Song

# Token endpoint answers for bad client credentials
_DENIED_STATUSES = (HTTPStatus.BAD_REQUEST, HTTPStatus.UNAUTHORIZED)


class AuthorizationStatus(StrEnum):
    AUTHORIZED = "authorized"
    DENIED = "denied"


class CatalogSearchProvider(Protocol):
    def search(self, term: str, limit: int) -> list[Song]: ...


class AuthorizationProvider(Protocol):
    def request_authorization(self) -> AuthorizationStatus: ...


def song_from_spotify_track(track: dict[str, Any]) -> Song:
    album = track.get("album") or {}
    images = album.get("images") or []
    duration_ms = track.get("duration_ms")
    return Song(
        id=track["id"],
        title=track["name"],
        artist_name=", ".join(artist["name"] for artist in track.get("artists", [])),
        album_title=album.get("name", ""),
        duration=duration_ms / 1000 if duration_ms is not None else None,
        artwork_url=images[0]["url"] if images else None,
        uri=track.get("uri"),
        preview_url=track.get("preview_url"),
    )


def _log_failed_response(error: HTTPError) -> None:
    logger.warning(
        "HTTP Request Failed!\n{}\n{}\n{}",
        error,
        error.response.headers,
        error.response.text,
    )


class SpotifyCatalog:
    """Spotify Web API search, authenticated with the client credentials grant."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._access_token: str | None = None
        self._token_expires: datetime | None = None
        self._token_lock = threading.Lock()

    def _token_is_fresh(self) -> bool:
        if not self._access_token or not self._token_expires:
            return False
        five_minutes_from_now = datetime.now(tz=UTC) + timedelta(minutes=5)
        logger.debug("  token_expires: {}", self._token_expires)
        return self._token_expires >= five_minutes_from_now

    def _refresh_token(self) -> str:
        logger.info("Getting Spotify auth token")
        token_response = requests.post(
            SPOTIFY_TOKEN_URL,
            auth=HTTPBasicAuth(
                self._config.spotify_client_id, self._config.spotify_client_secret
            ),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data={"grant_type": "client_credentials"},
            timeout=self._config.catalog_timeout,
        )
        try:
            token_response.raise_for_status()
        except HTTPError as error:
            _log_failed_response(error)
            raise

        token_json = token_response.json()
        self._access_token = token_json["access_token"]
        expires_in = int(token_json["expires_in"])
        self._token_expires = datetime.now(tz=UTC) + timedelta(seconds=expires_in)
        return self._access_token

    def _get_access_token(self) -> str:
        # One refresh at a time; waiters reuse the token it fetched
        with self._token_lock:
            if self._token_is_fresh():
                return self._access_token
            return self._refresh_token()

    def request_authorization(self) -> AuthorizationStatus:
        try:
            self._get_access_token()
        except HTTPError as error:
            if error.response.status_code in _DENIED_STATUSES:
                logger.warning("Catalog authorization not granted: {}", error)
                return AuthorizationStatus.DENIED
            raise CatalogUnavailableError("Catalog authorization failed") from error
        except (RequestException, KeyError, ValueError) as error:
            raise CatalogUnavailableError("Catalog authorization failed") from error

        logger.info("Catalog authorization successful")
        return AuthorizationStatus.AUTHORIZED

    def search(self, term: str, limit: int) -> list[Song]:
        try:
            access_token = self._get_access_token()
            search_response = requests.get(
                url=f"{SPOTIFY_BASE_URL}/search",
                params={
                    "q": term,
                    "type": "track",
                    "limit": limit,
                    "market": self._config.catalog_market,
                },
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self._config.catalog_timeout,
            )
            try:
                search_response.raise_for_status()
            except HTTPError as error:
                _log_failed_response(error)
                raise

            tracks = search_response.json()["tracks"]["items"]
            return [song_from_spotify_track(track) for track in tracks]
        except (RequestException, KeyError, TypeError, ValueError) as error:
            message = f"Catalog search for {term!r} failed"
            raise CatalogUnavailableError(message) from error
