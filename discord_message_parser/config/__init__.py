"""Configuration loading and validation for the message parser.

This package provides utilities for loading, parsing, and validating settings from an
INI configuration file.
"""

from discord_message_parser.config.loader import (
    ConfigFileNotFoundError,
    ConfigFormatError,
    ConfigLoader,
    ConfigLoaderError,
    ConfigTypeError,
    ConfigValueError,
    resolve_timezone,
)

__all__: list[str] = [
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
    "resolve_timezone",
]
