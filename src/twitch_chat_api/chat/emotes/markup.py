"""Rewrite native Twitch emote ranges into HTML image markup."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from html import escape

EMOTE_CDN_URL = "https://static-cdn.jtvnw.net/emoticons/v1"
EMOTE_CSS_CLASS = "emote"

Range = tuple[int, int] | list[int] | str


def emote_image_url(emote_id: str, size: str = "3.0") -> str:
    """CDN URL of a native Twitch emote image."""
    return f"{EMOTE_CDN_URL}/{emote_id}/{size}"


def _parse_range(value: Range) -> tuple[int, int] | None:
    """Accept (start, end) pairs or the tag form "start-end"."""
    if isinstance(value, str):
        start_str, sep, end_str = value.partition("-")
        if not sep:
            return None
        try:
            return int(start_str), int(end_str)
        except ValueError:
            return None
    try:
        start, end = value
        return int(start), int(end)
    except (TypeError, ValueError):
        return None


def _index_starts(positions: Mapping[str, Iterable[Range]]) -> dict[int, tuple[str, int]]:
    """Map start offset -> (emote id, inclusive end).

    Ranges are visited in the mapping's iteration order, so when two
    emotes claim the same start the later one wins.
    """
    starts: dict[int, tuple[str, int]] = {}
    for emote_id, ranges in positions.items():
        for value in ranges:
            parsed = _parse_range(value)
            if parsed is None:
                continue
            start, end = parsed
            starts[start] = (emote_id, end)
    return starts


def rewrite_emote_markup(
    message: str, positions: Mapping[str, Iterable[Range]]
) -> dict[str, str]:
    """Map each emote name found in message to an ``<img>`` fragment.

    Args:
        message: Chat message text.
        positions: Emote id -> inclusive (start, end) code point ranges,
            as carried by the IRC ``emotes`` tag.

    Returns:
        Literal emote text -> HTML fragment, in order of appearance.

    The title attribute is HTML-escaped, so a name such as ``<3`` is
    emitted as ``title="&lt;3"`` and decodes back to the literal text.

    Offsets are not validated. A range that runs past the message or
    overlaps another one yields whatever slice it describes; starts
    outside the message are never reached and contribute nothing.
    """
    starts = _index_starts(positions)
    names: dict[str, str] = {}
    if not starts:
        return names

    # str indices are code points, which is what Twitch counts, so a
    # logical position is also the slice offset.
    for position in range(len(message)):
        entry = starts.get(position)
        if entry is None:
            continue
        emote_id, end = entry
        name = message[position : end + 1]
        names[name] = (
            f'<img src="{emote_image_url(emote_id)}" class="{EMOTE_CSS_CLASS}" '
            f'title="{escape(name, quote=True)}">'
        )
    return names
