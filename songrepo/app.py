import inspect
import logging
import sys
from urllib.parse import urlparse
from uuid import uuid4

import flask
import sentry_sdk
from flask import Flask, g
from loguru import logger
from sentry_sdk.types import Event, Hint
from werkzeug.exceptions import BadRequest, MethodNotAllowed, NotFound

from songrepo.catalog import SpotifyCatalog
from songrepo.config import get_config
from songrepo.error_handlers import (
    handle_404_not_found,
    handle_bad_request,
    handle_catalog_unavailable,
    handle_dev_null_bots,
    handle_generic_errors,
)
from songrepo.errors import CatalogUnavailableError
from songrepo.repository import SongRepository

REPOSITORY_EXTENSION = "song_repository"
CATALOG_EXTENSION = "song_catalog"


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists.
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message.
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


# https://loguru.readthedocs.io/en/stable/api/logger.html#record
logger.remove()
logger.configure(extra={"request_id": "-"})
logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
logger.add(
    sys.stdout,
    colorize=True,
    format="<level>{level: <8}</level> "
    "| <light-blue>{extra[request_id]}</light-blue> "
    "| <yellow>{name}:{line}</yellow> "
    "| <level>{message}</level>",
)

requests_logger = logging.getLogger("requests.packages.urllib3")
requests_logger.setLevel(logging.DEBUG)
requests_logger.propagate = True


def filter_healthchecks(event: Event, _: Hint) -> Event | None:
    url_string = event.get("request", {}).get("url", "")
    parsed_url = urlparse(url_string)

    if parsed_url.path == "/flask-health-check":
        return None

    return event


def create_app(catalog: SpotifyCatalog | None = None) -> Flask:
    config = get_config()  # Loads environment variables
    logger.add(
        config.log_file,
        level=logging.INFO,
        colorize=False,
        rotation="500 MB",
        retention=10,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} "
        "| {extra[request_id]} "
        "| {level: <8} | {name}:{line} | {message}",
    )

    sentry_sdk.init(
        sample_rate=0.5,
        traces_sample_rate=0.1,
        profiles_sample_rate=0.1,
        before_send_transaction=filter_healthchecks,
    )

    flask_app = flask.Flask(__name__)

    # One repository per app; routes reach it through routes.util.get_repository
    catalog = catalog or SpotifyCatalog(config)
    flask_app.extensions[CATALOG_EXTENSION] = catalog
    flask_app.extensions[REPOSITORY_EXTENSION] = SongRepository(catalog)

    @flask_app.before_request
    def before_request() -> None:
        g.logger = logger.bind(request_id=uuid4().hex[:8])

    from songrepo.routes.library import library
    from songrepo.routes.root import root
    from songrepo.routes.search import search
    from songrepo.routes.songs import songs

    flask_app.register_blueprint(root)
    flask_app.register_blueprint(search)
    flask_app.register_blueprint(songs)
    flask_app.register_blueprint(library)

    flask_app.register_error_handler(
        CatalogUnavailableError, handle_catalog_unavailable
    )
    flask_app.register_error_handler(BadRequest, handle_bad_request)
    flask_app.register_error_handler(NotFound, handle_404_not_found)
    flask_app.register_error_handler(MethodNotAllowed, handle_dev_null_bots)
    flask_app.register_error_handler(Exception, handle_generic_errors)

    return flask_app
