"""Configuration file loader and validator.

Handles reading, formatting, and validating settings from the INI configuration file.
Raises exceptions for any issues encountered during loading.
"""

from __future__ import annotations

import ast
import configparser
from configparser import ConfigParser
from dataclasses import fields
from datetime import UTC
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from discord_message_parser.models.config_models import Config
from discord_message_parser.models.timestamp_models import InvalidTimestampStyleError, TimestampStyle
from discord_message_parser.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable
    from dataclasses import Field as DataclassField
    from datetime import tzinfo

__all__: list[str] = [
    "OUTPUT_FORMATS",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
    "resolve_timezone",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

OUTPUT_FORMATS: Final[tuple[str, ...]] = ("tree", "json", "text")


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


class ConfigTypeError(ConfigFormatError):
    """The configuration file contains an invalid type."""


def resolve_timezone(name: str) -> tzinfo:
    """Resolve an IANA timezone name, accepting 'UTC' without the system tz database.

    Args:
        name (str): Timezone name such as 'UTC' or 'Europe/Berlin'.

    Returns:
        tzinfo: The timezone.

    Raises:
        ConfigValueError: If the name is not a known timezone.
    """
    if name.strip().upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        msg: str = f"Unknown timezone: '{name}'"
        raise ConfigValueError(msg) from None


class ConfigLoader:
    """Handles loading and validation of configuration settings.

    Without a file name the defaults of :class:`Config` are used, so the command line works
    without any configuration file; keyword overrides are applied either way.

    Args:
        config_filename (str | None): INI file name to load.
        script_name (str): Executing script name, used in error messaging.
        **args: Command-line overrides: ``debug``, ``log_file``, ``emoji_table``,
            ``timezone``, ``default_style``, ``output_format``. None values are ignored.

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values/types.
    """

    def __init__(
        self,
        *,
        config_filename: str | None = None,
        script_name: str = "discord_message_parser",
        **args: Any,
    ) -> None:
        self.config = Config()
        if config_filename:
            self._read_file(config_filename, script_name)

        overrides: dict[str, tuple[str, str]] = {
            "log_file": ("GENERAL", "LOG_FILE"),
            "emoji_table": ("EMOJI", "TABLE_FILE"),
            "timezone": ("TIMESTAMP", "TIMEZONE"),
            "default_style": ("TIMESTAMP", "DEFAULT_STYLE"),
            "output_format": ("OUTPUT", "FORMAT"),
        }
        for arg_name, (section_name, key_name) in overrides.items():
            if args.get(arg_name) is not None:
                setattr(getattr(self.config, section_name), key_name, args[arg_name])
        if args.get("debug", False):
            self.config.GENERAL.DEBUG = True
        self._validate_settings()

    def _read_file(self, config_filename: str, script_name: str) -> None:
        msg: str
        if not Path(config_filename).exists():
            msg = f"Configuration file '{config_filename}' not found (requested by '{script_name}')."
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser()
        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                logger.debug("Skipping undefined section: '%s'", section.name)
                continue
            self._convert_section_field(parser, formatter, section)

    def _convert_section_field(
        self, parser: ConfigParser, formatter: _ConfigFormatter, section: DataclassField[Any]
    ) -> None:
        """Assign every key of one INI section to the matching Config attribute.

        Raises:
            ConfigFormatError: If a value fails to format correctly.
        """
        for key in fields(getattr(self.config, section.name)):
            if not parser.has_option(section.name, key.name):
                logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                continue

            formatted_value = formatter.apply_format(section, key)
            setattr(getattr(self.config, section.name), key.name, formatted_value)

    def _validate_settings(self) -> None:
        """Validate timezone, default timestamp style and output format.

        Raises:
            ConfigValueError: If a setting has an unsupported value.
        """
        resolve_timezone(self.config.TIMESTAMP.TIMEZONE)

        try:
            TimestampStyle.from_code(self.config.TIMESTAMP.DEFAULT_STYLE)
        except InvalidTimestampStyleError as err:
            msg: str = f"Invalid value for TIMESTAMP.DEFAULT_STYLE: {err}"
            raise ConfigValueError(msg) from err

        output_format: str = self.config.OUTPUT.FORMAT.lower()
        if output_format not in OUTPUT_FORMATS:
            msg = f"Unsupported value for OUTPUT.FORMAT: '{self.config.OUTPUT.FORMAT}'"
            raise ConfigValueError(msg)
        self.config.OUTPUT.FORMAT = output_format

        if self.config.EMOJI.TABLE_FILE and not Path(self.config.EMOJI.TABLE_FILE).is_file():
            logger.warning("Emoji table file '%s' does not exist.", self.config.EMOJI.TABLE_FILE)


class _ConfigFormatter:
    """Converts INI string values to the Python types declared by the Config dataclasses."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert an INI value to the type of the field's current (default) value.

        Booleans and numbers go through the parser's getters; anything else is read as a
        Python literal, so strings must be quoted.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If the literal has a different type than the field.
        """
        expected_type: type = type(getattr(getattr(self.config, section.name), key.name))
        formatters: dict[type, Callable[[str, str], bool | int | float]] = {
            bool: self.parser.getboolean,
            int: self.parser.getint,
            float: self.parser.getfloat,
        }

        formatter: Callable[[str, str], bool | int | float] | None = formatters.get(expected_type)
        msg: str
        if formatter:
            try:
                return formatter(section.name, key.name)
            except ValueError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigValueError(msg) from err

        value_str: str = self.parser[section.name][key.name]
        try:
            value: Any = ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

        if not isinstance(value, expected_type):
            msg = f"Expected {expected_type.__name__} for {section.name}.{key.name}, got {type(value).__name__}"
            raise ConfigTypeError(msg)
        return value
