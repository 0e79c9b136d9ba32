class CatalogUnavailableError(Exception):
    """The catalog provider did not return a result."""

    def __init__(self, message: str = "Catalog search failed") -> None:
        super().__init__(message)


class SearchCancelledError(Exception):
    def __init__(self, term: str) -> None:
        super().__init__(f"Search for {term!r} was cancelled")
        self.term = term
