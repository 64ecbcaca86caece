"""Tests for native emote markup rewriting."""

from twitch_chat_api.chat.emotes.markup import emote_image_url, rewrite_emote_markup

KAPPA_MARKUP = (
    '<img src="https://static-cdn.jtvnw.net/emoticons/v1/25/3.0" class="emote" title="Kappa">'
)

# --- basics ---


def test_empty_positions():
    assert rewrite_emote_markup("Hello Kappa world", {}) == {}
    assert rewrite_emote_markup("", {}) == {}


def test_empty_message():
    assert rewrite_emote_markup("", {"25": [(0, 4)]}) == {}


def test_single_emote():
    result = rewrite_emote_markup("Hello Kappa world", {"25": [[6, 10]]})
    assert list(result) == ["Kappa"]
    assert "emoticons/v1/25/3.0" in result["Kappa"]
    assert 'title="Kappa"' in result["Kappa"]
    assert result["Kappa"] == KAPPA_MARKUP


def test_string_ranges():
    assert rewrite_emote_markup("Hello Kappa world", {"25": ["6-10"]}) == {"Kappa": KAPPA_MARKUP}


def test_image_url():
    assert emote_image_url("25") == "https://static-cdn.jtvnw.net/emoticons/v1/25/3.0"
    assert emote_image_url("25", "1.0").endswith("/25/1.0")


# --- code points ---


def test_surrogate_pair_before_emote():
    result = rewrite_emote_markup("\U0001F600 Kappa", {"25": [(2, 6)]})
    assert result == {"Kappa": KAPPA_MARKUP}


def test_multiple_wide_characters():
    message = "\U0001F600\U0001F389 hi \U0001F44D Kappa"
    start = message.index("Kappa")
    result = rewrite_emote_markup(message, {"25": [(start, start + 4)]})
    assert list(result) == ["Kappa"]


# --- multiple emotes ---


def test_two_emote_ids():
    result = rewrite_emote_markup("Kappa Keepo", {"25": [(0, 4)], "1902": [(6, 10)]})
    assert list(result) == ["Kappa", "Keepo"]
    assert "emoticons/v1/1902/3.0" in result["Keepo"]


def test_repeated_emote_single_key():
    result = rewrite_emote_markup("Kappa Kappa", {"25": [(0, 4), (6, 10)]})
    assert result == {"Kappa": KAPPA_MARKUP}


def test_result_in_message_order():
    result = rewrite_emote_markup("Keepo Kappa", {"25": [(6, 10)], "1902": [(0, 4)]})
    assert list(result) == ["Keepo", "Kappa"]


def test_same_start_last_write_wins():
    result = rewrite_emote_markup("Kappa", {"25": [(0, 4)], "99": [(0, 2)]})
    assert list(result) == ["Kap"]
    assert "emoticons/v1/99/3.0" in result["Kap"]


def test_emote_without_ranges():
    assert rewrite_emote_markup("Kappa", {"25": []}) == {}


# --- edge cases ---


def test_trailing_single_character():
    message = "abc D"
    last = len(message) - 1
    result = rewrite_emote_markup(message, {"7": [(last, last)]})
    assert list(result) == ["D"]


def test_deterministic():
    positions = {"25": [(0, 4)], "1902": [(6, 10)]}
    first = rewrite_emote_markup("Kappa Keepo", positions)
    second = rewrite_emote_markup("Kappa Keepo", positions)
    assert first == second
    assert positions == {"25": [(0, 4)], "1902": [(6, 10)]}


def test_start_outside_message_ignored():
    assert rewrite_emote_markup("Kappa", {"25": [(10, 14)]}) == {}
    assert rewrite_emote_markup("Kappa", {"25": [(-1, 3)]}) == {}


def test_end_past_message_truncates():
    result = rewrite_emote_markup("Kap", {"25": [(0, 4)]})
    assert list(result) == ["Kap"]


def test_malformed_ranges_skipped():
    result = rewrite_emote_markup("Kappa", {"25": ["x-y", "nodash", (0, 4)]})
    assert list(result) == ["Kappa"]


def test_overlapping_spans_each_reported():
    result = rewrite_emote_markup("Kappa", {"25": [(0, 4)], "1": [(2, 3)]})
    assert list(result) == ["Kappa", "pp"]


def test_title_is_attribute_escaped():
    result = rewrite_emote_markup('<3 "x"', {"9": [(0, 1)], "10": [(3, 5)]})
    assert 'title="&lt;3"' in result["<3"]
    assert 'title="&quot;x&quot;"' in result['"x"']
