"""Settings management for the Twitch API client."""

import json
import logging
import os
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from appdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "twitch-chat-api"
APP_AUTHOR = "twitch-chat-api"

# Environment variables that override values from settings.json
ENV_OVERRIDES = {
    "client_id": "TWITCH_CLIENT_ID",
    "client_secret": "TWITCH_CLIENT_SECRET",
    "access_token": "TWITCH_ACCESS_TOKEN",
    "refresh_token": "TWITCH_REFRESH_TOKEN",
}


def get_config_dir() -> Path:
    """Get the configuration directory."""
    path = Path(user_config_dir(APP_NAME, APP_AUTHOR))
    path.mkdir(parents=True, exist_ok=True)
    return path


def secure_file_permissions(filepath: str) -> None:
    """Set file permissions to owner-only (chmod 600)."""
    try:
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        logger.debug(f"Could not set permissions on {filepath}: {e}")


@dataclass
class TwitchSettings:
    """Twitch API credentials."""

    client_id: str = ""
    client_secret: str = ""
    access_token: str = ""
    refresh_token: str = ""
    kraken: bool = False  # Legacy v5 header style (OAuth prefix + v5 Accept)


@dataclass
class Settings:
    """Application settings."""

    twitch: TwitchSettings = field(default_factory=TwitchSettings)

    @classmethod
    def load(cls, path: Path | None = None, use_env: bool = True) -> "Settings":
        """Load settings from file, then apply environment overrides."""
        if path is None:
            path = get_config_dir() / "settings.json"

        settings = cls()
        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
                settings = cls._from_dict(data)
            except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Ignoring unreadable settings file {path}: {e}")
                settings = cls()

        if use_env:
            settings._apply_env(os.environ)
        return settings

    def save(self, path: Path | None = None) -> None:
        """Save settings to file."""
        if path is None:
            path = get_config_dir() / "settings.json"

        path.parent.mkdir(parents=True, exist_ok=True)

        # Atomic write: write to temp file then rename to prevent corruption on crash
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix="settings_")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._to_dict(), f, indent=2)
            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

        # Tokens are stored in plaintext
        secure_file_permissions(str(path))

    def _apply_env(self, environ) -> None:
        for attr, var in ENV_OVERRIDES.items():
            value = environ.get(var)
            if value:
                setattr(self.twitch, attr, value)

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        """Create Settings from a dictionary with validation."""
        settings = cls()
        twitch = data.get("twitch", {})
        if not isinstance(twitch, dict):
            return settings

        for attr in ("client_id", "client_secret", "access_token", "refresh_token"):
            value = twitch.get(attr, "")
            if isinstance(value, str):
                setattr(settings.twitch, attr, value)
        settings.twitch.kraken = bool(twitch.get("kraken", False))
        return settings

    def _to_dict(self) -> dict:
        """Convert Settings to a dictionary."""
        return {
            "twitch": {
                "client_id": self.twitch.client_id,
                "client_secret": self.twitch.client_secret,
                "access_token": self.twitch.access_token,
                "refresh_token": self.twitch.refresh_token,
                "kraken": self.twitch.kraken,
            },
        }
