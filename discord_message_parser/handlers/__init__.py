"""Message handling for the parser.

This package provides the tag scanner and classifier, the Unicode emoji table and
matcher, the message assembler, and the formatter that renders parsed messages.
"""

from discord_message_parser.handlers.emoji import (
    EmojiMatcher,
    EmojiTable,
    EmojiTableFormatError,
    get_default_matcher,
    get_default_table,
)
from discord_message_parser.handlers.message_formatter import MessageFormatter
from discord_message_parser.handlers.message_parser import MessageParser, parse_content, parse_message
from discord_message_parser.handlers.tag_handler import TagClassifier, iter_tags

__all__: list[str] = [
    "EmojiMatcher",
    "EmojiTable",
    "EmojiTableFormatError",
    "MessageFormatter",
    "MessageParser",
    "TagClassifier",
    "get_default_matcher",
    "get_default_table",
    "iter_tags",
    "parse_content",
    "parse_message",
]
