"""Data models for chat emotes."""

import re
from dataclasses import dataclass, field


@dataclass
class ChatEmote:
    """Represents a chat emote from any provider."""

    id: str
    name: str  # Text code (e.g., "KEKW")
    url: str
    provider: str  # "twitch", "bttv", "ffz"


@dataclass
class EmoteLookup:
    """Emote names for one provider, plus a pattern that finds them in text."""

    emotes: dict[str, str] = field(default_factory=dict)  # name -> id (bttv) or url (ffz)
    pattern: re.Pattern[str] | None = None

    def find(self, text: str) -> list[tuple[int, int, str]]:
        """Return (start, end, name) for every emote token in text."""
        if self.pattern is None:
            return []
        return [(m.start(1), m.end(1), m.group(1)) for m in self.pattern.finditer(text)]
