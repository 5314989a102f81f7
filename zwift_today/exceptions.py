"""Exceptions raised while fetching today's workout from intervals.icu."""


class ZwiftTodayError(Exception):
    """Base exception for all zwift_today errors."""
    pass


class ConfigurationError(ZwiftTodayError):
    """A required setting is missing or invalid."""
    pass


class InvalidURLError(ZwiftTodayError):
    """Base URL and endpoint do not form a valid URL."""
    pass


class NetworkError(ZwiftTodayError):
    """Network-related error."""
    pass


class HTTPStatusError(ZwiftTodayError):
    """The API answered with something other than 200 OK."""

    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Unexpected HTTP status {status_code} from {url}")


class ParseError(ZwiftTodayError):
    """Parsing-related error."""
    pass


class OutputError(ZwiftTodayError):
    """The workout file could not be written."""
    pass
