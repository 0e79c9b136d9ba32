from flask import current_app, g
from werkzeug.exceptions import NotFound

from songrepo.app import CATALOG_EXTENSION, REPOSITORY_EXTENSION
from songrepo.catalog import AuthorizationProvider
from songrepo.models import Song
from songrepo.repository import SongRepository


def get_repository() -> SongRepository:
    return current_app.extensions[REPOSITORY_EXTENSION]


def get_authorization_provider() -> AuthorizationProvider:
    return current_app.extensions[CATALOG_EXTENSION]


def get_cached_song(song_id: str) -> Song:
    """Return a song from the catalog cache or raise NotFound.

    Only songs that came back from a search can be played or favorited, the
    same way a user can only tap on a row that's in the results table.
    """
    song = get_repository().get_song(song_id)
    if not song:
        g.logger.debug("Song {} is not in the catalog cache", song_id)
        raise NotFound(f"Song {song_id} not found")
    return song
