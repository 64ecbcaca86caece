"""Async client for the Twitch API, modlookup, BTTV and FFZ."""

from .api import TwitchApiClient
from .chat.emotes import parse_emote_tag, rewrite_emote_markup
from .core.settings import Settings, TwitchSettings

__version__ = "0.1.0"

__all__ = [
    "TwitchApiClient",
    "Settings",
    "TwitchSettings",
    "parse_emote_tag",
    "rewrite_emote_markup",
]
