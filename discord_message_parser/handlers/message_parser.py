"""Message assembly: turns raw message text into a tree of message parts.

Tags are classified, the literal text around them is searched for Unicode emoji, and
the resulting flat list is folded into ``Empty``, a single part, or ``Nested``. Parsing
never fails: anything that is not understood is kept as plain text.
"""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING, Protocol

from discord_message_parser.handlers.emoji import EmojiMatcher, get_default_matcher
from discord_message_parser.handlers.tag_handler import TagClassifier, iter_tags
from discord_message_parser.models.message_models import Nested, PlainText, Span
from discord_message_parser.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from discord_message_parser.models.message_models import MessagePart


__all__: list[str] = ["MessageParser", "SupportsContent", "parse_content", "parse_message"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class SupportsContent(Protocol):
    """Any host message object exposing its raw text as ``content`` (discord.py, nextcord, ...)."""

    @property
    def content(self) -> str: ...


class MessageParser:
    """Parses Discord message text into message parts.

    Instances hold only read-only state and can be shared between threads.

    Args:
        matcher (EmojiMatcher | None): Unicode emoji matcher. Defaults to the process-wide
            matcher built from the ``emoji`` package.
    """

    def __init__(self, matcher: EmojiMatcher | None = None) -> None:
        self.matcher: EmojiMatcher = matcher if matcher is not None else get_default_matcher()
        self.classifier: TagClassifier = TagClassifier()

    def parse(self, text: str) -> MessagePart:
        """Parse a message.

        Args:
            text (str): The raw message text.

        Returns:
            MessagePart: ``Empty`` for empty text, the part itself when there is only one,
                otherwise ``Nested`` with the parts in source order.
        """
        parts: list[MessagePart] = []
        start: int = 0  # end of the last tag
        for tag in iter_tags(text):
            if tag.start() > start:
                parts.extend(self.matcher.split(text[start : tag.start()], offset=start))

            span = Span(tag.start(), tag.end())
            part: MessagePart | None = self.classifier.classify(tag.group(), span)
            parts.append(part if part is not None else PlainText(tag.group(), span))
            start = tag.end()

        if len(text) > start:
            parts.extend(self.matcher.split(text[start:], offset=start))

        logger.debug("Parsed %d characters into %d parts", len(text), len(parts))
        return Nested.collapse(parts)


@cache
def _default_parser() -> MessageParser:
    return MessageParser()


def parse_message(text: str) -> MessagePart:
    """Parse message text with the process-wide default parser."""
    return _default_parser().parse(text)


def parse_content(message: SupportsContent) -> MessagePart:
    """Parse the content of a host chat library's message object.

    Args:
        message (SupportsContent): An object with a ``content`` string attribute.

    Returns:
        MessagePart: The parsed message.
    """
    return parse_message(message.content)
