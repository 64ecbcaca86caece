"""Core models and settings for the Twitch API client."""

from .models import ModChannel, Moderator, TokenGrant, TwitchUser
from .settings import Settings, TwitchSettings

__all__ = [
    "ModChannel",
    "Moderator",
    "TokenGrant",
    "TwitchUser",
    "Settings",
    "TwitchSettings",
]
