from uuid import uuid4

from flask import Response, jsonify, request
from loguru import logger
from requests import HTTPError
from werkzeug.exceptions import BadRequest, HTTPException, NotFound

from songrepo.errors import CatalogUnavailableError


def _error_response(message: str, status: int, error_code: str) -> (Response, int):
    return jsonify({"error": message, "error_code": error_code}), status


def handle_generic_errors(error: Exception) -> (Response, int):
    error_code = uuid4()
    try:
        error.add_note(f"Error code: {error_code}")
        logger.exception(error)
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected exception while handling generic error")
    finally:
        return _error_response(  # noqa: B012
            "Something went wrong", 500, str(error_code)[24:]
        )


def handle_catalog_unavailable(error: CatalogUnavailableError) -> (Response, int):
    error_code = uuid4()
    cause = error.__cause__
    try:
        error.add_note(f"Error code: {error_code}")
        if isinstance(cause, HTTPError) and cause.response is not None:
            error.add_note(f"Request: {cause.request}")
            error.add_note(f"Request headers: {cause.request.headers}")
            error.add_note(f"Response: {cause.response}")
            error.add_note(f"Response headers: {cause.response.headers}")
            error.add_note(f"Response body: {cause.response.text}")
        logger.exception(error)
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected exception while handling catalog error")
    finally:
        return _error_response(  # noqa: B012
            "Error loading songs. Please try again later.", 502, str(error_code)[24:]
        )


def handle_bad_request(error: BadRequest) -> (Response, int):
    logger.debug("Bad request to {}: {}", request.path, error.description)
    return jsonify({"error": error.description}), 400


def handle_404_not_found(error: NotFound) -> (Response, int):
    error_code = uuid4()
    try:
        error.add_note(f"Error code: {error_code}")
        logger.debug("Unknown resource requested: {}", request.path)
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected exception while handling Not Found error")
    finally:
        return _error_response(  # noqa: B012
            error.description, 404, str(error_code)[24:]
        )


def handle_dev_null_bots(_: HTTPException) -> (str, int):
    return "Bad Gateway", 502
