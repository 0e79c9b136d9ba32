"""In-memory song repository.

Holds three independent views over the same song-identity space:

* the catalog cache, keyed by song id (last write wins)
* the recently played list, most recent first, capped at ``MAX_RECENTLY_PLAYED``
* the favorites list, insertion ordered, no duplicate ids

Removing a song from the catalog does not touch the other two lists.
"""

import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

from loguru import logger

from songrepo.config import DEFAULT_SEARCH_LIMIT
from songrepo.errors import SearchCancelledError
from songrepo.models import Song

if TYPE_CHECKING:
    from songrepo.catalog import CatalogSearchProvider

MAX_RECENTLY_PLAYED = 20


class SongRepository:
    def __init__(self, catalog_provider: "CatalogSearchProvider") -> None:
        self._catalog_provider = catalog_provider
        self._songs: dict[str, Song] = {}
        self._recently_played: list[Song] = []
        self._favorites: list[Song] = []
        self._lock = threading.Lock()

    # Catalog cache

    def _store(self, song: Song) -> None:
        logger.debug("Adding song {} ({})", song.title.upper(), song.id)
        self._songs[song.id] = song

    def add_song(self, song: Song) -> None:
        with self._lock:
            self._store(song)

    def add_songs(self, songs: Iterable[Song]) -> None:
        with self._lock:
            for song in songs:
                self._store(song)

    def get_song(self, song_id: str) -> Song | None:
        with self._lock:
            return self._songs.get(song_id)

    def get_all_songs(self) -> list[Song]:
        with self._lock:
            return list(self._songs.values())

    def remove_song(self, song_id: str) -> Song | None:
        with self._lock:
            removed = self._songs.pop(song_id, None)
        if removed:
            logger.debug("Removed song {} from the catalog cache", song_id)
        return removed

    # Recently played

    def add_to_recently_played(self, song: Song) -> None:
        with self._lock:
            recently_played = [s for s in self._recently_played if s.id != song.id]
            recently_played.insert(0, song)
            self._recently_played = recently_played[:MAX_RECENTLY_PLAYED]
        logger.debug("Recently played: {}", song.id)

    def get_recently_played_songs(self) -> list[Song]:
        with self._lock:
            return list(self._recently_played)

    # Favorites

    def add_to_favorites(self, song: Song) -> None:
        with self._lock:
            if any(s.id == song.id for s in self._favorites):
                return
            self._favorites.append(song)
        logger.debug("Added {} to favorites", song.id)

    def remove_from_favorites(self, song_id: str) -> bool:
        with self._lock:
            initial_count = len(self._favorites)
            self._favorites = [s for s in self._favorites if s.id != song_id]
            removed = len(self._favorites) < initial_count
        if removed:
            logger.debug("Removed {} from favorites", song_id)
        return removed

    def is_favorite(self, song_id: str) -> bool:
        with self._lock:
            return any(s.id == song_id for s in self._favorites)

    def get_favorite_songs(self) -> list[Song]:
        with self._lock:
            return list(self._favorites)

    # Search

    def search_songs(
        self,
        term: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
        cancel_event: threading.Event | None = None,
    ) -> list[Song]:
        """Search the catalog and cache every result.

        The provider call happens outside the lock so a slow search doesn't
        block other callers. Nothing is merged if the provider raises or if
        ``cancel_event`` is set by the time the merge holds the lock.
        """
        songs = list(self._catalog_provider.search(term, limit))

        with self._lock:
            if cancel_event is not None and cancel_event.is_set():
                logger.info(
                    "Search for '{}' cancelled, discarding {} songs", term, len(songs)
                )
                raise SearchCancelledError(term)
            for song in songs:
                self._store(song)
        logger.info("Found {} songs matching '{}'", len(songs), term)
        return songs
