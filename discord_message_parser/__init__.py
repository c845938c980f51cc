"""Parser for Discord message formatting tags.

Recognizes user, channel and role mentions, custom and Unicode emoji, and timestamp tags,
and renders timestamps in their display styles. The main entry point is
:func:`parse_message`.
"""

from discord_message_parser.handlers.emoji import EmojiMatcher, EmojiTable, EmojiTableFormatError
from discord_message_parser.handlers.message_formatter import MessageFormatter
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
from discord_message_parser.models.timestamp_models import InvalidTimestampStyleError, TimestampStyle
from discord_message_parser.version import VERSION

__version__: str = VERSION

__all__: list[str] = [
    "ChannelMention",
    "CustomEmoji",
    "EmojiMatcher",
    "EmojiTable",
    "EmojiTableFormatError",
    "Empty",
    "InvalidTimestampStyleError",
    "MessageFormatter",
    "MessageParser",
    "MessagePart",
    "Nested",
    "PlainText",
    "RoleMention",
    "Span",
    "Timestamp",
    "TimestampStyle",
    "UnicodeEmoji",
    "UserMention",
    "__version__",
    "parse_content",
    "parse_message",
]
