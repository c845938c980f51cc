"""Regular expressions for Discord message formatting tags.

Patterns for the tag delimiter scan, mentions, custom emoji, timestamps and
emoji table resource lines. All numeric fields are restricted to ASCII digits.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Final

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
]

# Any angle-bracketed span, leftmost-first and non-overlapping
# Example: "hi <@123> and <x>" -> "<@123>", "<x>"
TAG_PATTERN: Final[Pattern[str]] = re.compile(r"<[^>]+>")

# User mention, optionally in the legacy nickname form
# Examples: "<@80351110224678912>", "<@!80351110224678912>"
USER_MENTION_PATTERN: Final[Pattern[str]] = re.compile(r"<@(?P<nickname>!)?(?P<id>[0-9]+)>")

# Example: "<#103735883630395392>"
CHANNEL_MENTION_PATTERN: Final[Pattern[str]] = re.compile(r"<#(?P<id>[0-9]+)>")

# Example: "<@&165511591545143296>"
ROLE_MENTION_PATTERN: Final[Pattern[str]] = re.compile(r"<@&(?P<id>[0-9]+)>")

# Static or animated custom emoji
# Examples: "<:mmLol:216154654256398347>", "<a:b1nzy:392938283556143104>"
CUSTOM_EMOJI_PATTERN: Final[Pattern[str]] = re.compile(r"<(?P<animated>a)?:(?P<name>[^:]+):(?P<id>[0-9]+)>")

# Example: "<t:1618953630>"
UNSTYLED_TIMESTAMP_PATTERN: Final[Pattern[str]] = re.compile(r"<t:(?P<seconds>-?[0-9]+)>")

# The style is any single character here; unknown codes are rejected after matching
# Example: "<t:1618953630:R>"
STYLED_TIMESTAMP_PATTERN: Final[Pattern[str]] = re.compile(r"<t:(?P<seconds>-?[0-9]+):(?P<style>.)>", re.DOTALL)

# One emoji sequence per line, as dash-separated hex code points (Twemoji asset names)
# Examples: "1f600", "1f468-200d-1f469-200d-1f467.svg"
EMOJI_TABLE_LINE_PATTERN: Final[Pattern[str]] = re.compile(
    r"(?P<codepoints>[0-9a-f]{1,6}(?:-[0-9a-f]{1,6})*)(?:\.svg)?"
)

# Optional version header of an emoji table file
# Example: "# version: 15.1"
EMOJI_TABLE_VERSION_PATTERN: Final[Pattern[str]] = re.compile(r"#\s*version:\s*(?P<version>\S.*?)\s*")
