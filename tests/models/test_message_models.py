from __future__ import annotations

import json

import pytest

from discord_message_parser.models.message_models import (
    ChannelMention,
    CustomEmoji,
    Empty,
    MessagePart,
    Nested,
    PlainText,
    Span,
    Timestamp,
    UserMention,
)
from discord_message_parser.models.timestamp_models import TimestampStyle


def test_nested_requires_two_parts() -> None:
    with pytest.raises(ValueError, match=r"at least two parts, got 1"):
        Nested((PlainText("a"),))
    with pytest.raises(ValueError, match=r"got 0"):
        Nested(())


def test_nested_stores_parts_as_tuple() -> None:
    nested = Nested([PlainText("a"), UserMention(1)])  # type: ignore[arg-type]
    assert nested.parts == (PlainText("a"), UserMention(1))
    assert hash(nested) == hash(Nested((PlainText("a"), UserMention(1))))


def test_collapse() -> None:
    assert Nested.collapse([]) == Empty()
    assert Nested.collapse([ChannelMention(5)]) == ChannelMention(5)
    assert Nested.collapse(iter([PlainText("a"), PlainText("b")])) == Nested((PlainText("a"), PlainText("b")))


def test_equality_ignores_span() -> None:
    assert PlainText("a", Span(0, 1)) == PlainText("a", Span(7, 8))
    assert UserMention(1) != UserMention(1, nickname_mention=True)
    assert CustomEmoji("e", 1, animated=True) != CustomEmoji("e", 1)


def test_leaves_flatten_in_order() -> None:
    inner = Nested((PlainText("b"), PlainText("c")))
    tree = Nested((PlainText("a"), inner, UserMention(1)))
    assert list(tree.leaves()) == [PlainText("a"), PlainText("b"), PlainText("c"), UserMention(1)]
    assert list(Empty().leaves()) == []
    assert list(UserMention(1).leaves()) == [UserMention(1)]


def test_parts_are_immutable() -> None:
    part = PlainText("a")
    with pytest.raises(AttributeError):
        part.text = "b"  # type: ignore[misc]


def test_timestamp_effective_style() -> None:
    assert Timestamp(0).effective_style is TimestampStyle.SHORT_DATE_TIME
    assert Timestamp(0, TimestampStyle.RELATIVE_TIME).effective_style is TimestampStyle.RELATIVE_TIME


def test_timestamp_to_datetime() -> None:
    moment = Timestamp(86400).to_datetime()
    assert (moment.year, moment.month, moment.day, moment.hour) == (1970, 1, 2, 0)


def test_timestamp_format() -> None:
    assert Timestamp(0).format() == "1970-01-01 00:00"
    assert Timestamp(0).format(default_style=TimestampStyle.LONG_TIME) == "00:00:00"
    assert Timestamp(0, TimestampStyle.SHORT_TIME).format(default_style=TimestampStyle.LONG_TIME) == "00:00"


def test_to_json() -> None:
    part = UserMention(123, span=Span(6, 12))
    assert json.loads(part.to_json()) == {
        "user": 123,
        "nickname_mention": False,
        "span": [6, 12],
        "type": "user_mention",
    }
    assert json.loads(Timestamp(0, TimestampStyle.RELATIVE_TIME).to_json()) == {
        "instant": 0,
        "style": "R",
        "span": [0, 0],
        "type": "timestamp",
    }


def test_nested_to_json() -> None:
    tree: MessagePart = Nested((PlainText("hi ", Span(0, 3)), ChannelMention(1, Span(3, 7))))
    assert json.loads(tree.to_json()) == {
        "parts": [
            {"text": "hi ", "span": [0, 3], "type": "plain_text"},
            {"channel": 1, "span": [3, 7], "type": "channel_mention"},
        ],
        "type": "nested",
    }
    assert json.loads(Empty().to_json()) == {"type": "empty"}


def test_timestamp_tag() -> None:
    assert Timestamp(5).tag == "<t:5>"
    assert Timestamp(-5, TimestampStyle.LONG_TIME).tag == "<t:-5:T>"


def test_timestamp_beyond_calendar_renders_tag() -> None:
    year_10000 = Timestamp(253402300800)
    assert not year_10000.is_representable
    assert year_10000.format() == "<t:253402300800>"
    assert Timestamp(-9223372036854775808, TimestampStyle.RELATIVE_TIME).format() == "<t:-9223372036854775808:R>"
    with pytest.raises(OverflowError, match=r"out of calendar range"):
        year_10000.to_datetime()
