"""Data models for the message parser.

This package contains the message part dataclasses, timestamp styles, configuration
sections, and the regular expression patterns for formatting tags.
"""

from __future__ import annotations

from discord_message_parser.models.config_models import Config
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
from discord_message_parser.models.re_models import (
    CHANNEL_MENTION_PATTERN,
    CUSTOM_EMOJI_PATTERN,
    EMOJI_TABLE_LINE_PATTERN,
    EMOJI_TABLE_VERSION_PATTERN,
    ROLE_MENTION_PATTERN,
    STYLED_TIMESTAMP_PATTERN,
    TAG_PATTERN,
    UNSTYLED_TIMESTAMP_PATTERN,
    USER_MENTION_PATTERN,
)
from discord_message_parser.models.timestamp_models import InvalidTimestampStyleError, TimestampStyle

__all__: list[str] = [
    "CHANNEL_MENTION_PATTERN",
    "CUSTOM_EMOJI_PATTERN",
    "EMOJI_TABLE_LINE_PATTERN",
    "EMOJI_TABLE_VERSION_PATTERN",
    "ROLE_MENTION_PATTERN",
    "STYLED_TIMESTAMP_PATTERN",
    "TAG_PATTERN",
    "UNSTYLED_TIMESTAMP_PATTERN",
    "USER_MENTION_PATTERN",
    "ChannelMention",
    "Config",
    "CustomEmoji",
    "Empty",
    "InvalidTimestampStyleError",
    "MessagePart",
    "Nested",
    "PlainText",
    "RoleMention",
    "Span",
    "Timestamp",
    "TimestampStyle",
    "UnicodeEmoji",
    "UserMention",
]
