from flask import Blueprint, Response, g, jsonify

from songrepo.routes.util import get_cached_song, get_repository

library = Blueprint("library", __name__)


@library.route("/recently-played")
def recently_played() -> Response:
    recent_songs = get_repository().get_recently_played_songs()
    return jsonify({"songs": [song.to_dict() for song in recent_songs]})


@library.route("/favorites")
def favorites() -> Response:
    favorite_songs = get_repository().get_favorite_songs()
    return jsonify({"songs": [song.to_dict() for song in favorite_songs]})


@library.route("/favorites/<song_id>")
def is_favorite(song_id: str) -> Response:
    return jsonify({"id": song_id, "favorite": get_repository().is_favorite(song_id)})


@library.route("/favorites/<song_id>", methods=["POST"])
def add_favorite(song_id: str) -> Response:
    song = get_cached_song(song_id)
    get_repository().add_to_favorites(song)
    g.logger.info("Favorited: {}", song.title)
    return jsonify({"id": song_id, "favorite": True})


@library.route("/favorites/<song_id>", methods=["DELETE"])
def remove_favorite(song_id: str) -> Response:
    removed = get_repository().remove_from_favorites(song_id)
    g.logger.debug("  removed {} from favorites: {}", song_id, removed)
    return jsonify({"id": song_id, "removed": removed})
