"""Parsing of the IRC ``emotes`` tag."""


def parse_emote_tag(emotes_tag: str | None) -> dict[str, list[tuple[int, int]]]:
    """Parse Twitch emote positions from IRC tags.

    Format: emote_id:start-end,start-end/emote_id:start-end

    Ends stay inclusive, as Twitch sends them.
    """
    positions: dict[str, list[tuple[int, int]]] = {}
    if not emotes_tag:
        return positions

    for emote_section in emotes_tag.split("/"):
        if ":" not in emote_section:
            continue
        emote_id, ranges = emote_section.split(":", 1)
        for range_str in ranges.split(","):
            if "-" not in range_str:
                continue
            start_str, end_str = range_str.split("-", 1)
            try:
                start = int(start_str)
                end = int(end_str)
            except ValueError:
                continue
            positions.setdefault(emote_id, []).append((start, end))

    return positions
