"""Exceptions raised by the API clients."""


class TwitchApiError(Exception):
    """Base class for errors raised by this package."""


class MissingOptionsError(TwitchApiError, ValueError):
    """A client was constructed without settings."""


class MissingCredentialsError(TwitchApiError):
    """The call needs a client id, token or secret that is not configured."""


class ApiResponseError(TwitchApiError):
    """An upstream API answered with an error status or an unreadable body."""

    def __init__(self, status: int, url: str, message: str = "") -> None:
        self.status = status
        self.url = url
        self.message = message
        super().__init__(f"HTTP {status} from {url}" + (f": {message}" if message else ""))
