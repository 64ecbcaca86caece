"""Twitch Helix API client."""

import asyncio
import dataclasses
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Optional
from urllib.parse import quote, urlencode

import aiohttp

from ..chat.emotes import provider as emote_providers
from ..chat.emotes.markup import Range, rewrite_emote_markup
from ..chat.models import EmoteLookup
from ..core.models import ModChannel, Moderator, TokenGrant, TwitchUser
from ..core.settings import TwitchSettings
from .base import BaseApiClient, fetch_json
from .errors import ApiResponseError, MissingCredentialsError, MissingOptionsError

logger = logging.getLogger(__name__)

KRAKEN_ACCEPT = "application/vnd.twitchtv.v5+json"


class TwitchApiClient(BaseApiClient):
    """Client for Twitch Helix, the OAuth token endpoint and modlookup."""

    BASE_URL = "https://api.twitch.tv/helix"
    AUTH_URL = "https://id.twitch.tv/oauth2"
    MODLOOKUP_URL = "https://modlookup.3v.fi/api/user-v3"

    def __init__(
        self,
        settings: TwitchSettings | None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        if settings is None:
            raise MissingOptionsError("missing options")
        super().__init__(session)
        self.settings = settings

    @property
    def name(self) -> str:
        return "Twitch"

    @property
    def is_unauthenticated(self) -> bool:
        """True unless both a client id and an access token are set."""
        return not self.settings.client_id or not self.settings.access_token

    def copy(self) -> "TwitchApiClient":
        """New client with the same credentials and its own session."""
        return TwitchApiClient(dataclasses.replace(self.settings))

    def _get_headers(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        """Get headers for API requests."""
        prefix = "OAuth" if self.settings.kraken else "Bearer"
        headers = {
            "Client-ID": self.settings.client_id,
            "Authorization": f"{prefix} {self.settings.access_token}",
        }
        if extra:
            headers.update(extra)
        if self.settings.kraken:
            headers["Accept"] = KRAKEN_ACCEPT
        return headers

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> Any:
        """Request url with the client's auth headers and return parsed JSON.

        The body is only sent with POST requests.

        Raises:
            ApiResponseError: Non-2xx status or a body that is not JSON.
            aiohttp.ClientError: Transport failure.
            asyncio.TimeoutError: The session timeout expired.
        """
        method = method.upper()
        return await fetch_json(
            self.session,
            url,
            method=method,
            headers=self._get_headers(headers),
            data=(body or "") if method == "POST" else None,
        )

    # --- modlookup ---

    async def fetch_mod_channels(self, username: str) -> list[ModChannel]:
        """Get every channel username moderates, following modlookup cursors.

        An error on the first page propagates. An error on a later page
        ends pagination and the channels gathered so far are returned.
        """
        url = f"{self.MODLOOKUP_URL}/{quote(username)}"
        response = await self.fetch(url)
        channels = self._parse_mod_channels(response)

        cursor = response.get("cursor")
        while cursor:
            try:
                response = await self.fetch(f"{url}?{urlencode({'cursor': cursor})}")
            except (ApiResponseError, aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.warning(f"modlookup pagination for {username} stopped early: {e}")
                break
            channels.extend(self._parse_mod_channels(response))
            cursor = response.get("cursor")

        return channels

    async def get_user_moderation_channels(
        self, username: str, convert: bool = False
    ) -> list[ModChannel] | list[Optional[TwitchUser]]:
        """Channels username moderates.

        With convert=True and credentials configured, each channel is
        resolved to its Twitch user, in the same order.
        """
        channels = await self.fetch_mod_channels(username)
        if self.is_unauthenticated or not convert:
            return channels
        return list(await asyncio.gather(*(self.get_user_info(c.name) for c in channels)))

    def _parse_mod_channels(self, data: Any) -> list[ModChannel]:
        channels: list[ModChannel] = []
        for ch in data.get("channels") or []:
            channels.append(
                ModChannel(
                    name=ch["name"],
                    followers=ch.get("followers", 0),
                    views=ch.get("views", 0),
                    partner=bool(ch.get("partner", False)),
                )
            )
        return channels

    # --- users ---

    async def get_user_info(self, username: str) -> Optional[TwitchUser]:
        """Look up a user by login, or by id when username is all digits."""
        if self.is_unauthenticated:
            raise MissingCredentialsError("Missing either your clientId or Authorization Key")

        key = "id" if username.isdigit() else "login"
        data = await self.fetch(f"{self.BASE_URL}/users?{urlencode({key: username})}")
        users = data.get("data", [])
        if not users:
            return None
        return self._parse_user(users[0])

    async def get_user_moderators(self, username: str) -> list[Moderator]:
        """Moderators of username's channel."""
        user = await self._require_user(username)
        data = await self.fetch(
            f"{self.BASE_URL}/moderation/moderators?{urlencode({'broadcaster_id': user.id})}"
        )
        return [
            Moderator(
                user_id=mod["user_id"],
                user_login=mod["user_login"],
                user_name=mod["user_name"],
            )
            for mod in data.get("data", [])
        ]

    async def _require_user(self, username: str) -> TwitchUser:
        user = await self.get_user_info(username)
        if user is None:
            raise ApiResponseError(404, f"{self.BASE_URL}/users", f"no such user: {username}")
        return user

    def _parse_user(self, data: dict) -> TwitchUser:
        created_at = None
        if data.get("created_at"):
            try:
                created_at = datetime.fromisoformat(data["created_at"].replace("Z", "+00:00"))
            except ValueError:
                pass

        return TwitchUser(
            id=data["id"],
            login=data["login"],
            display_name=data.get("display_name") or data["login"],
            type=data.get("type", ""),
            broadcaster_type=data.get("broadcaster_type", ""),
            description=data.get("description", ""),
            profile_image_url=data.get("profile_image_url") or None,
            offline_image_url=data.get("offline_image_url") or None,
            created_at=created_at,
        )

    # --- badges ---

    async def get_badges_by_username(self, username: str) -> dict[str, dict[str, dict]]:
        """Custom chat badges of username's channel."""
        user = await self._require_user(username)
        return await self.get_badges_by_id(user.id)

    async def get_badges_by_id(self, user_id: str) -> dict[str, dict[str, dict]]:
        """Custom chat badges of a channel, by broadcaster id."""
        data = await self.fetch(
            f"{self.BASE_URL}/chat/badges?{urlencode({'broadcaster_id': user_id})}"
        )
        return self._badge_sets(data)

    async def get_global_badges(self) -> dict[str, dict[str, dict]]:
        """Chat badges available in every channel."""
        data = await self.fetch(f"{self.BASE_URL}/chat/badges/global")
        return self._badge_sets(data)

    def _badge_sets(self, data: Any) -> dict[str, dict[str, dict]]:
        """Reshape Helix badge data into {set_id: {version_id: version}}."""
        sets: dict[str, dict[str, dict]] = {}
        for badge_set in data.get("data", []):
            versions = sets.setdefault(badge_set["set_id"], {})
            for version in badge_set.get("versions", []):
                versions[version["id"]] = version
        return sets

    # --- auth ---

    async def refresh_token(
        self, refresh_token: str, client_secret: str | None = None
    ) -> TokenGrant:
        """Exchange a refresh token for a new access token.

        The client's settings are left unchanged.
        """
        secret = self.settings.client_secret or client_secret
        if not self.settings.client_id or not secret:
            raise MissingCredentialsError(
                "Missing client id or client secret required to refresh a refresh token"
            )

        data = await fetch_json(
            self.session,
            f"{self.AUTH_URL}/token",
            method="POST",
            data={
                "client_id": self.settings.client_id,
                "client_secret": secret,
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            },
        )
        try:
            return TokenGrant(
                access_token=data["access_token"],
                refresh_token=data.get("refresh_token", ""),
                expires_in=data.get("expires_in", 0),
                scope=list(data.get("scope") or []),
                token_type=data.get("token_type", "bearer"),
            )
        except KeyError:
            raise ApiResponseError(
                200, f"{self.AUTH_URL}/token", "no access_token in response"
            ) from None

    # --- bits ---

    async def get_cheermotes(self, broadcaster_id: str | None = None) -> list[dict[str, Any]]:
        """Cheermotes, optionally including a broadcaster's custom ones."""
        query = f"?{urlencode({'broadcaster_id': broadcaster_id})}" if broadcaster_id else ""
        data = await self.fetch(f"{self.BASE_URL}/bits/cheermotes{query}")
        return data.get("data", [])

    # --- emotes ---

    async def get_bttv_emotes(self, channel_id: str) -> EmoteLookup:
        """BTTV global and channel emotes (name -> id) for a Twitch user id."""
        return await emote_providers.BTTVProvider(self.session).get_emotes(channel_id)

    async def get_ffz_emotes(self, channel_name: str) -> EmoteLookup:
        """FFZ global and channel emotes (name -> image url) for a channel login."""
        return await emote_providers.FFZProvider(self.session).get_emotes(channel_name)

    def parse_emotes(
        self, message: str, emotes: Mapping[str, Iterable[Range]]
    ) -> dict[str, str]:
        """Emote name -> ``<img>`` markup for the native emotes in message."""
        return rewrite_emote_markup(message, emotes)
