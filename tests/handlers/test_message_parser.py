from __future__ import annotations

from types import SimpleNamespace

import pytest

from discord_message_parser.handlers.emoji import EmojiMatcher, EmojiTable
from discord_message_parser.handlers.message_parser import MessageParser, parse_content, parse_message
from discord_message_parser.models.message_models import (
    ChannelMention,
    CustomEmoji,
    Empty,
    MessagePart,
    Nested,
    PlainText,
    RoleMention,
    Span,
    Timestamp,
    UnicodeEmoji,
    UserMention,
)
from discord_message_parser.models.timestamp_models import TimestampStyle

GRIN: str = "\U0001f600"
PARTY: str = "\U0001f389"


def _make_parser() -> MessageParser:
    return MessageParser(EmojiMatcher(EmojiTable([GRIN, PARTY], version="test")))


def test_parse_empty_message() -> None:
    assert _make_parser().parse("") == Empty()


def test_parse_plain_text_is_not_nested() -> None:
    part: MessagePart = _make_parser().parse("just text")
    assert part == PlainText("just text")
    assert part.span == Span(0, 9)


def test_parse_single_tag_is_not_nested() -> None:
    assert _make_parser().parse("<@!42>") == UserMention(42, nickname_mention=True)
    assert _make_parser().parse("<t:0>") == Timestamp(0, None)


def test_parse_mention_between_text() -> None:
    part: MessagePart = _make_parser().parse("hello <@123> world")
    assert part == Nested((PlainText("hello "), UserMention(123), PlainText(" world")))
    assert isinstance(part, Nested)
    assert [child.span for child in part.parts] == [Span(0, 6), Span(6, 12), Span(12, 18)]


def test_parse_every_tag_kind() -> None:
    part: MessagePart = _make_parser().parse("<#1><@&2><a:dance:3><t:4:R>")
    assert part == Nested(
        (
            ChannelMention(1),
            RoleMention(2),
            CustomEmoji("dance", 3, animated=True),
            Timestamp(4, TimestampStyle.RELATIVE_TIME),
        )
    )


def test_parse_unknown_tag_is_plain_text() -> None:
    assert _make_parser().parse("<x>") == PlainText("<x>")


def test_parse_unknown_tag_is_kept_as_separate_text() -> None:
    part: MessagePart = _make_parser().parse("a <x> b")
    assert part == Nested((PlainText("a "), PlainText("<x>"), PlainText(" b")))


def test_parse_emoji_inside_unknown_tag_stays_text() -> None:
    assert _make_parser().parse(f"<{GRIN}>") == PlainText(f"<{GRIN}>")


def test_parse_emoji_in_literal_text() -> None:
    part: MessagePart = _make_parser().parse(f"yay{PARTY}{PARTY} <@1>{GRIN}")
    assert part == Nested(
        (
            PlainText("yay"),
            UnicodeEmoji(PARTY),
            UnicodeEmoji(PARTY),
            PlainText(" "),
            UserMention(1),
            UnicodeEmoji(GRIN),
        )
    )


def test_parse_out_of_range_ids_stay_text() -> None:
    assert _make_parser().parse("<@18446744073709551616>") == PlainText("<@18446744073709551616>")
    assert _make_parser().parse("<t:9223372036854775808:R>") == PlainText("<t:9223372036854775808:R>")


def test_parse_unclosed_bracket_is_text() -> None:
    assert _make_parser().parse("a < b <@1") == PlainText("a < b <@1")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "plain",
        "hello <@123> world",
        "<<@1>> <>",
        f"{GRIN}<t:0:F>{PARTY}x<:e:9>",
        "a <x> b <#1> <@&2> <t:-5>",
        f"line one\n<a\nb>{GRIN}\n",
    ],
)
def test_parse_leaves_cover_source_text(text: str) -> None:
    part: MessagePart = _make_parser().parse(text)
    leaves: list[MessagePart] = list(part.leaves())

    position: int = 0
    for leaf in leaves:
        assert leaf.span.start == position
        assert leaf.span.end > leaf.span.start
        if isinstance(leaf, PlainText):
            assert leaf.text == text[leaf.span.start : leaf.span.end]
        if isinstance(leaf, UnicodeEmoji):
            assert leaf.emoji == text[leaf.span.start : leaf.span.end]
        position = leaf.span.end
    assert position == len(text)

    if len(leaves) == 0:
        assert part == Empty()
    elif len(leaves) == 1:
        assert part == leaves[0]
    else:
        assert isinstance(part, Nested)


def test_parse_is_repeatable() -> None:
    parser: MessageParser = _make_parser()
    assert parser.parse("x <@1> y") == parser.parse("x <@1> y")


def test_parse_message_uses_default_parser() -> None:
    assert parse_message("hi <#7>") == Nested((PlainText("hi "), ChannelMention(7)))


def test_parse_content_reads_message_content() -> None:
    message = SimpleNamespace(content="<#1>", author="someone")
    assert parse_content(message) == ChannelMention(1)


def test_parse_timestamp_beyond_calendar() -> None:
    assert parse_message("<t:253402300800>") == Timestamp(253402300800, None)
