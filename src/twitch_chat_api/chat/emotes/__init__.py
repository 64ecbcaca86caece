"""Emote parsing, markup and third-party providers."""

from .markup import EMOTE_CDN_URL, emote_image_url, rewrite_emote_markup
from .provider import BTTVProvider, FFZProvider, build_emote_pattern
from .tags import parse_emote_tag

__all__ = [
    "EMOTE_CDN_URL",
    "emote_image_url",
    "rewrite_emote_markup",
    "parse_emote_tag",
    "build_emote_pattern",
    "BTTVProvider",
    "FFZProvider",
]
