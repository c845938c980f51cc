from __future__ import annotations

import pytest

from discord_message_parser.handlers.tag_handler import TagClassifier, iter_tags
from discord_message_parser.models.message_models import (
    ChannelMention,
    CustomEmoji,
    RoleMention,
    Span,
    Timestamp,
    UserMention,
)
from discord_message_parser.models.timestamp_models import TimestampStyle


def _classify(tag: str):
    return TagClassifier().classify(tag, Span(0, len(tag)))


def test_iter_tags_finds_spans_leftmost_first() -> None:
    text: str = "a <b> c <d><e> <>"
    assert [m.group() for m in iter_tags(text)] == ["<b>", "<d>", "<e>"]
    assert [(m.start(), m.end()) for m in iter_tags(text)] == [(2, 5), (8, 11), (11, 14)]


def test_iter_tags_takes_outermost_opening_bracket() -> None:
    assert [m.group() for m in iter_tags("<<@1>>")] == ["<<@1>"]


def test_iter_tags_spans_newlines() -> None:
    assert [m.group() for m in iter_tags("x <a\nb> y")] == ["<a\nb>"]


def test_iter_tags_restarts_on_every_call() -> None:
    text: str = "<@1> <@2>"
    first: list[str] = [m.group() for m in iter_tags(text)]
    second: list[str] = [m.group() for m in iter_tags(text)]
    assert first == second == ["<@1>", "<@2>"]


def test_classify_user_mentions() -> None:
    assert _classify("<@123>") == UserMention(123, nickname_mention=False)
    assert _classify("<@!42>") == UserMention(42, nickname_mention=True)


def test_classify_channel_and_role_mentions() -> None:
    assert _classify("<#103735883630395392>") == ChannelMention(103735883630395392)
    assert _classify("<@&165511591545143296>") == RoleMention(165511591545143296)


def test_classify_custom_emoji() -> None:
    assert _classify("<:mmLol:216154654256398347>") == CustomEmoji("mmLol", 216154654256398347, animated=False)
    assert _classify("<a:b1nzy:392938283556143104>") == CustomEmoji("b1nzy", 392938283556143104, animated=True)


def test_classify_timestamps() -> None:
    assert _classify("<t:0>") == Timestamp(0, None)
    assert _classify("<t:-3600:R>") == Timestamp(-3600, TimestampStyle.RELATIVE_TIME)
    for style in TimestampStyle:
        assert _classify(f"<t:1618953630:{style.code}>") == Timestamp(1618953630, style)


def test_classify_keeps_span() -> None:
    part = TagClassifier().classify("<#7>", Span(10, 14))
    assert part is not None
    assert part.span == Span(10, 14)


@pytest.mark.parametrize(
    "tag",
    [
        "<x>",
        "<@>",
        "<@-1>",
        "<@ 1>",
        "<@1 >",
        "<@!&1>",
        "<#abc>",
        "<::1>",
        "<:name:>",
        "<b:name:1>",
        "<t:>",
        "<t:1:x>",
        "<t:1:RR>",
        "<t:1.5>",
        "<T:1>",
        "<@١٢٣>",
    ],
)
def test_classify_rejects_malformed_tags(tag: str) -> None:
    assert _classify(tag) is None


def test_classify_id_range() -> None:
    assert _classify("<@18446744073709551615>") == UserMention(18446744073709551615)
    assert _classify("<@18446744073709551616>") is None
    assert _classify("<#99999999999999999999999>") is None
    assert _classify("<:big:18446744073709551616>") is None


def test_classify_ignores_leading_zeros() -> None:
    assert _classify("<@" + "0" * 40 + "1>") == UserMention(1)


def test_classify_huge_digit_runs_do_not_raise() -> None:
    assert _classify("<@" + "9" * 10000 + ">") is None
    assert _classify("<t:-" + "9" * 10000 + ":R>") is None


def test_classify_timestamp_range() -> None:
    assert _classify("<t:9223372036854775808>") is None
    assert _classify("<t:-9223372036854775809:f>") is None
    assert _classify("<t:9223372036854775807>") == Timestamp(9223372036854775807, None)
    assert _classify("<t:-9223372036854775808:R>") == Timestamp(-9223372036854775808, TimestampStyle.RELATIVE_TIME)


def test_classify_instants_beyond_calendar() -> None:
    # Year 10000 and year 0 still fit 64 bits.
    assert _classify("<t:253402300800>") == Timestamp(253402300800, None)
    assert _classify("<t:-62135596800:d>") == Timestamp(-62135596800, TimestampStyle.SHORT_DATE)


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("<@18446744073709551616>", None),
        ("<@!18446744073709551616>", None),
        ("<#18446744073709551616>", None),
        ("<@&18446744073709551616>", None),
        ("<a:x:18446744073709551616>", None),
        ("<a:t:1>", CustomEmoji("t", 1, animated=True)),
        ("<:t:1>", CustomEmoji("t", 1)),
        ("<t:1>", Timestamp(1, None)),
        ("<t:1:t>", Timestamp(1, TimestampStyle.SHORT_TIME)),
        ("<@&1>", RoleMention(1)),
        ("<@!1>", UserMention(1, nickname_mention=True)),
    ],
)
def test_classify_each_tag_shape_reaches_its_rule(tag: str, expected: object) -> None:
    assert _classify(tag) == expected
