"""Third-party emote providers (BTTV and FFZ)."""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

import aiohttp

from ...api.base import fetch_json
from ...api.errors import ApiResponseError
from ..models import ChatEmote, EmoteLookup

logger = logging.getLogger(__name__)

_PROVIDER_TIMEOUT = 15  # seconds


def build_emote_pattern(names: Iterable[str]) -> re.Pattern[str] | None:
    """Compile a pattern matching any of names as a whitespace-delimited token.

    The emote name is capture group 1. Returns None for no names.
    """
    alternatives = "|".join(re.escape(name) for name in names if name)
    if not alternatives:
        return None
    return re.compile(rf"(?:^|(?<=\s))({alternatives})(?=$|\s)")


class BaseEmoteProvider(ABC):
    """Base class for emote providers."""

    def __init__(self, session: aiohttp.ClientSession | None = None) -> None:
        self._session = session

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""

    @abstractmethod
    async def get_global_emotes(self) -> list[ChatEmote]:
        """Fetch global emotes for this provider."""

    @abstractmethod
    async def get_channel_emotes(self, channel: str) -> list[ChatEmote]:
        """Fetch channel-specific emotes."""

    @abstractmethod
    def _lookup_value(self, emote: ChatEmote) -> str:
        """Value stored for an emote in an EmoteLookup."""

    async def get_emotes(self, channel: str) -> EmoteLookup:
        """Global plus channel emotes as a name map and a token pattern.

        Channel emotes come after globals, so a channel emote replaces a
        global one with the same name.
        """
        emotes = await self.get_global_emotes()
        emotes.extend(await self._channel_emotes_or_empty(channel))

        lookup = EmoteLookup()
        for emote in emotes:
            lookup.emotes[emote.name] = self._lookup_value(emote)
        lookup.pattern = build_emote_pattern(lookup.emotes)
        return lookup

    async def _channel_emotes_or_empty(self, channel: str) -> list[ChatEmote]:
        try:
            return await self.get_channel_emotes(channel)
        except (ApiResponseError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"{self.name} channel emotes unavailable for {channel}: {e}")
            return []

    async def _get_json(self, url: str) -> Any:
        if self._session is not None:
            return await fetch_json(self._session, url)
        timeout = aiohttp.ClientTimeout(total=_PROVIDER_TIMEOUT)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            return await fetch_json(session, url)


class BTTVProvider(BaseEmoteProvider):
    """BetterTTV emote provider."""

    BASE_URL = "https://api.betterttv.net/3"

    @property
    def name(self) -> str:
        return "bttv"

    async def get_global_emotes(self) -> list[ChatEmote]:
        """Fetch BTTV global emotes."""
        data = await self._get_json(f"{self.BASE_URL}/cached/emotes/global")
        return self._parse_emotes(data)

    async def get_channel_emotes(self, channel: str) -> list[ChatEmote]:
        """Fetch BTTV channel and shared emotes.

        BTTV uses Twitch user IDs for channel lookup.
        """
        data = await self._get_json(f"{self.BASE_URL}/cached/users/twitch/{channel}")
        if not isinstance(data, dict):
            return []
        return self._parse_emotes(data.get("channelEmotes", [])) + self._parse_emotes(
            data.get("sharedEmotes", [])
        )

    def _lookup_value(self, emote: ChatEmote) -> str:
        return emote.id

    def _parse_emotes(self, items: Any) -> list[ChatEmote]:
        if not isinstance(items, list):
            return []
        emotes = []
        for emote_data in items:
            emote = self._parse_emote(emote_data)
            if emote:
                emotes.append(emote)
        return emotes

    def _parse_emote(self, data: dict) -> ChatEmote | None:
        """Parse a BTTV emote from API data."""
        emote_id = data.get("id", "")
        code = data.get("code", "")

        if not emote_id or not code:
            return None

        # BTTV CDN: https://cdn.betterttv.net/emote/{id}/{size}x
        return ChatEmote(
            id=emote_id,
            name=code,
            url=f"https://cdn.betterttv.net/emote/{emote_id}/3x",
            provider="bttv",
        )


class FFZProvider(BaseEmoteProvider):
    """FrankerFaceZ emote provider."""

    BASE_URL = "https://api.frankerfacez.com/v1"

    @property
    def name(self) -> str:
        return "ffz"

    async def get_global_emotes(self) -> list[ChatEmote]:
        """Fetch FFZ global emotes from the default sets."""
        data = await self._get_json(f"{self.BASE_URL}/set/global")
        emotes: list[ChatEmote] = []
        sets = data.get("sets", {})
        for set_id in data.get("default_sets", []):
            emotes.extend(self._parse_set(sets.get(str(set_id), {})))
        return emotes

    async def get_channel_emotes(self, channel: str) -> list[ChatEmote]:
        """Fetch the emote set of a channel's room, by channel login."""
        data = await self._get_json(f"{self.BASE_URL}/room/{channel}")
        room = data.get("room") or {}
        sets = data.get("sets") or {}
        set_id = room.get("set")
        if set_id is None:
            return []
        return self._parse_set(sets.get(str(set_id), {}))

    def _lookup_value(self, emote: ChatEmote) -> str:
        return emote.url

    def _parse_set(self, emote_set: dict) -> list[ChatEmote]:
        emotes = []
        for emote_data in emote_set.get("emoticons", []):
            emote = self._parse_emote(emote_data)
            if emote:
                emotes.append(emote)
        return emotes

    def _parse_emote(self, data: dict) -> ChatEmote | None:
        """Parse an FFZ emote from API data."""
        emote_id = str(data.get("id", ""))
        name = data.get("name", "")

        if not emote_id or not name:
            return None

        # FFZ URLs are keyed by scale ("1", "2", "4"); take the largest
        scales: dict[float, str] = {}
        for scale, scale_url in (data.get("urls") or {}).items():
            try:
                scales[float(scale)] = scale_url
            except (TypeError, ValueError):
                continue
        if not scales:
            return None
        url = scales[max(scales)]
        if url.startswith("//"):
            url = "https:" + url

        return ChatEmote(
            id=emote_id,
            name=name,
            url=url,
            provider="ffz",
        )
