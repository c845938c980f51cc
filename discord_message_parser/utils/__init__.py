"""Utility modules for the message parser.

This package provides logging configuration and calendar helpers for timestamp tags.
"""

from discord_message_parser.utils.logger_utils import LoggerUtils
from discord_message_parser.utils.time_utils import TimeUtils

__all__: list[str] = ["LoggerUtils", "TimeUtils"]
