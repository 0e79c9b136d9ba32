from flask import Blueprint, Response, jsonify

from songrepo.routes.util import get_authorization_provider, get_repository

root = Blueprint("root", __name__)


@root.route("/")
def home() -> Response:
    repository = get_repository()
    return jsonify(
        {
            "songs": len(repository.get_all_songs()),
            "recently_played": len(repository.get_recently_played_songs()),
            "favorites": len(repository.get_favorite_songs()),
        }
    )


@root.route("/authorization")
def authorization() -> Response:
    status = get_authorization_provider().request_authorization()
    return jsonify({"status": str(status)})


@root.route("/flask-health-check")
def flask_health_check() -> str:
    return "success"
