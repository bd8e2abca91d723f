class NewsApiError(Exception):
    """Base class for errors raised by the news API client."""


class CacheUnavailableError(NewsApiError):
    """Raised when the on-disk HTTP cache cannot be opened."""


class ParseError(NewsApiError):
    """Raised when an API payload cannot be parsed into expected fields."""


class EmptyBodyError(NewsApiError):
    """Raised when the API answers with a non-2xx status, so there is no body."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchError(NewsApiError):
    """Raised when a request fails at the transport level (DNS, reset, timeout)."""
