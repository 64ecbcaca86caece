"""API clients for Twitch and its companion services."""

from .base import BaseApiClient
from .errors import (
    ApiResponseError,
    MissingCredentialsError,
    MissingOptionsError,
    TwitchApiError,
)
from .twitch import TwitchApiClient

__all__ = [
    "BaseApiClient",
    "TwitchApiClient",
    "TwitchApiError",
    "ApiResponseError",
    "MissingCredentialsError",
    "MissingOptionsError",
]
