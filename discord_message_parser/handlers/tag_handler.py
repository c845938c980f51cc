"""Scanning and classification of ``<...>`` formatting tags.

The scanner finds every angle-bracketed span in a message. The classifier then tries
each known tag grammar in a fixed priority order and returns the first part that can be
built, or None when the span is not a recognized tag. Numeric fields that do not fit
their range fail only the rule being tried; classification never raises.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from discord_message_parser.models.message_models import (
    ChannelMention,
    CustomEmoji,
    RoleMention,
    Span,
    Timestamp,
    UserMention,
)
from discord_message_parser.models.re_models import (
    CHANNEL_MENTION_PATTERN,
    CUSTOM_EMOJI_PATTERN,
    ROLE_MENTION_PATTERN,
    STYLED_TIMESTAMP_PATTERN,
    TAG_PATTERN,
    UNSTYLED_TIMESTAMP_PATTERN,
    USER_MENTION_PATTERN,
)
from discord_message_parser.models.timestamp_models import InvalidTimestampStyleError, TimestampStyle
from discord_message_parser.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Iterator
    from re import Match

    from discord_message_parser.models.message_models import MessagePart


__all__: list[str] = ["TagClassifier", "iter_tags"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

MAX_ID: Final[int] = 2**64 - 1
MIN_SECONDS: Final[int] = -(2**63)
MAX_SECONDS: Final[int] = 2**63 - 1


def iter_tags(text: str) -> Iterator[Match[str]]:
    """Lazily yield the tag spans of a message, leftmost first and non-overlapping.

    Every call starts a new scan over the whole text.

    Args:
        text (str): The raw message text.

    Returns:
        Iterator[Match[str]]: Matches whose ``start()``/``end()`` delimit each tag.
    """
    return TAG_PATTERN.finditer(text)


# Longer digit runs cannot fit 64 bits, and would hit int()'s digit limit on huge input.
_MAX_DIGITS: Final[int] = 20


def _to_int(digits: str) -> int | None:
    negative: bool = digits.startswith("-")
    significant: str = digits.lstrip("-").lstrip("0") or "0"
    if len(significant) > _MAX_DIGITS:
        return None
    value: int = int(significant)
    return -value if negative else value


def _parse_id(digits: str) -> int | None:
    value: int | None = _to_int(digits)
    if value is None or value > MAX_ID:
        return None
    return value


def _parse_seconds(digits: str) -> int | None:
    value: int | None = _to_int(digits)
    if value is None or not MIN_SECONDS <= value <= MAX_SECONDS:
        return None
    return value


class TagClassifier:
    """Turns a single tag span into a message part.

    Rules are tried in this order: user mention, channel mention, role mention, custom
    emoji, unstyled timestamp, styled timestamp.
    """

    def __init__(self) -> None:
        self._rules: tuple[Callable[[str, Span], MessagePart | None], ...] = (
            self._user_mention,
            self._channel_mention,
            self._role_mention,
            self._custom_emoji,
            self._unstyled_timestamp,
            self._styled_timestamp,
        )

    def classify(self, tag: str, span: Span) -> MessagePart | None:
        """Classify a tag, including its ``<`` and ``>`` delimiters.

        Args:
            tag (str): The tag text.
            span (Span): Position of the tag in the message.

        Returns:
            MessagePart | None: The first part a rule could build, or None if no rule applies.
        """
        for rule in self._rules:
            part: MessagePart | None = rule(tag, span)
            if part is not None:
                return part
        logger.debug("Unrecognized tag: %r", tag)
        return None

    def _user_mention(self, tag: str, span: Span) -> MessagePart | None:
        match: Match[str] | None = USER_MENTION_PATTERN.fullmatch(tag)
        if match is None or (user := _parse_id(match.group("id"))) is None:
            return None
        return UserMention(user, nickname_mention=match.group("nickname") is not None, span=span)

    def _channel_mention(self, tag: str, span: Span) -> MessagePart | None:
        match: Match[str] | None = CHANNEL_MENTION_PATTERN.fullmatch(tag)
        if match is None or (channel := _parse_id(match.group("id"))) is None:
            return None
        return ChannelMention(channel, span=span)

    def _role_mention(self, tag: str, span: Span) -> MessagePart | None:
        match: Match[str] | None = ROLE_MENTION_PATTERN.fullmatch(tag)
        if match is None or (role := _parse_id(match.group("id"))) is None:
            return None
        return RoleMention(role, span=span)

    def _custom_emoji(self, tag: str, span: Span) -> MessagePart | None:
        match: Match[str] | None = CUSTOM_EMOJI_PATTERN.fullmatch(tag)
        if match is None or (emoji_id := _parse_id(match.group("id"))) is None:
            return None
        return CustomEmoji(
            match.group("name"),
            emoji_id,
            animated=match.group("animated") is not None,
            span=span,
        )

    def _unstyled_timestamp(self, tag: str, span: Span) -> MessagePart | None:
        match: Match[str] | None = UNSTYLED_TIMESTAMP_PATTERN.fullmatch(tag)
        if match is None or (instant := _parse_seconds(match.group("seconds"))) is None:
            return None
        return Timestamp(instant, None, span=span)

    def _styled_timestamp(self, tag: str, span: Span) -> MessagePart | None:
        match: Match[str] | None = STYLED_TIMESTAMP_PATTERN.fullmatch(tag)
        if match is None or (instant := _parse_seconds(match.group("seconds"))) is None:
            return None
        try:
            style: TimestampStyle = TimestampStyle.from_code(match.group("style"))
        except InvalidTimestampStyleError:
            logger.debug("Unknown timestamp style in tag %r", tag)
            return None
        return Timestamp(instant, style, span=span)
