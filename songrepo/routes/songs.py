from flask import Blueprint, Response, g, jsonify
from werkzeug.exceptions import NotFound

from songrepo.routes.util import get_cached_song, get_repository

songs = Blueprint("songs", __name__)


@songs.route("/songs")
def list_songs() -> Response:
    all_songs = get_repository().get_all_songs()
    return jsonify({"songs": [song.to_dict() for song in all_songs]})


@songs.route("/songs/<song_id>")
def get_song(song_id: str) -> Response:
    return jsonify(get_cached_song(song_id).to_dict())


@songs.route("/songs/<song_id>", methods=["DELETE"])
def remove_song(song_id: str) -> Response:
    removed = get_repository().remove_song(song_id)
    if not removed:
        raise NotFound(f"Song {song_id} not found")
    g.logger.info("Removed song {} from the catalog cache", song_id)
    return jsonify(removed.to_dict())


@songs.route("/songs/<song_id>/play", methods=["POST"])
def play_song(song_id: str) -> Response:
    """Record a song as played. The audio itself is handled by the client's player."""
    song = get_cached_song(song_id)
    get_repository().add_to_recently_played(song)
    g.logger.info("Now playing: {}", song.title)
    return jsonify(song.to_dict())
