"""Core data models for the Twitch API client."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class TwitchUser:
    """A Twitch account as returned by Helix /users."""

    id: str
    login: str
    display_name: str
    type: str = ""
    broadcaster_type: str = ""  # "partner", "affiliate" or ""
    description: str = ""
    profile_image_url: Optional[str] = None
    offline_image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_partner(self) -> bool:
        return self.broadcaster_type == "partner"


@dataclass
class ModChannel:
    """A channel a user moderates, as reported by modlookup."""

    name: str
    followers: int = 0
    views: int = 0
    partner: bool = False


@dataclass
class Moderator:
    """A moderator of a broadcaster's channel."""

    user_id: str
    user_login: str
    user_name: str


@dataclass
class TokenGrant:
    """Result of an OAuth token refresh."""

    access_token: str
    refresh_token: str = ""
    expires_in: int = 0  # seconds
    scope: list[str] = field(default_factory=list)
    token_type: str = "bearer"
