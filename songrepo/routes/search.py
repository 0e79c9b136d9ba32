from flask import Blueprint, Response, g, jsonify, request
from werkzeug.exceptions import BadRequest

from songrepo.catalog import AuthorizationStatus
from songrepo.config import DEFAULT_SEARCH_LIMIT
from songrepo.routes.util import get_authorization_provider, get_repository

search = Blueprint("search", __name__)

EMPTY_SEARCH_MESSAGE = "Enter a search term to find songs."
NOT_AUTHORIZED_MESSAGE = "Music catalog access was not authorized."


@search.route("/search")
def get_search_results() -> Response | tuple[Response, int]:
    search_term = request.args.get("search_term", "")

    # The repository passes terms through untouched, blank ones stop here
    if not search_term.strip():
        g.logger.debug("Search requested with an empty term")
        return jsonify(
            {"search_term": search_term, "songs": [], "message": EMPTY_SEARCH_MESSAGE}
        )

    try:
        limit = int(request.args.get("limit", DEFAULT_SEARCH_LIMIT))
    except ValueError as error:
        raise BadRequest("limit must be an integer") from error

    status = get_authorization_provider().request_authorization()
    if status != AuthorizationStatus.AUTHORIZED:
        g.logger.warning(
            "Search for '{}' refused, catalog status: {}", search_term, status
        )
        return jsonify({"error": NOT_AUTHORIZED_MESSAGE, "status": str(status)}), 403

    g.logger.info("Searching for '{}' (limit={})", search_term, limit)
    search_results = get_repository().search_songs(search_term, limit)

    return jsonify(
        {
            "search_term": search_term,
            "songs": [song.to_dict() for song in search_results],
        }
    )
