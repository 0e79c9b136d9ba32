import os

from loguru import logger

SPOTIFY_BASE_URL = "https://api.spotify.com/v1"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"  # noqa: S105
DEFAULT_SEARCH_LIMIT = 20


class MissingEnvironmentVariableError(Exception):
    def __init__(self, variable_name: str) -> None:
        super().__init__(f"No {variable_name} environment variable provided")


class InvalidEnvironmentVariableError(Exception):
    def __init__(self, variable_name: str, value: str) -> None:
        super().__init__(f"Invalid {variable_name} environment variable: {value!r}")


class Config:
    def __init__(self) -> None:
        self._log_file: str = os.environ.get("LOG_FILE", "/opt/songrepo/songrepo.log")
        logger.debug("logfile={}", self._log_file)

        self._spotify_client_id: str = os.environ.get("SPOTIFY_CLIENT_ID", "")
        if not self._spotify_client_id:
            raise MissingEnvironmentVariableError("SPOTIFY_CLIENT_ID")
        logger.debug("spotify_client_id={}", self._spotify_client_id)

        self._spotify_client_secret: str = os.environ.get("SPOTIFY_CLIENT_SECRET", "")
        if not self._spotify_client_secret:
            raise MissingEnvironmentVariableError("SPOTIFY_CLIENT_SECRET")
        logger.debug("SPOTIFY_CLIENT_SECRET defined (not shown)")

        self._catalog_market: str = os.environ.get("CATALOG_MARKET", "US")
        logger.debug("catalog_market={}", self._catalog_market)

        raw_timeout = os.environ.get("CATALOG_TIMEOUT_SECONDS", "30")
        try:
            self._catalog_timeout: int = int(raw_timeout)
        except ValueError as error:
            raise InvalidEnvironmentVariableError(
                "CATALOG_TIMEOUT_SECONDS", raw_timeout
            ) from error
        logger.debug("catalog_timeout={}", self._catalog_timeout)

    @property
    def log_file(self) -> str:
        return self._log_file

    @property
    def spotify_client_id(self) -> str:
        return self._spotify_client_id

    @property
    def spotify_client_secret(self) -> str:
        return self._spotify_client_secret

    @property
    def catalog_market(self) -> str:
        return self._catalog_market

    @property
    def catalog_timeout(self) -> int:
        return self._catalog_timeout


_config: Config | None = None


def get_config() -> Config:
    global _config  # noqa: PLW0603
    if not _config:
        _config = Config()
    return _config


def reset_config() -> None:
    global _config  # noqa: PLW0603
    _config = None
