"""Command-line front end: parse message text and print the result.

Examples:
    python -m discord_message_parser "hello <@123> <t:1618953630:R>"
    echo "<a:wave:392938283556143104>" | python -m discord_message_parser --format json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from discord_message_parser import __version__
from discord_message_parser.config.loader import OUTPUT_FORMATS, ConfigLoader, ConfigLoaderError, resolve_timezone
from discord_message_parser.handlers.emoji import EmojiMatcher, EmojiTable, EmojiTableFormatError, get_default_matcher
from discord_message_parser.handlers.message_formatter import MessageFormatter
from discord_message_parser.handlers.message_parser import MessageParser
from discord_message_parser.models.timestamp_models import TimestampStyle
from discord_message_parser.utils.logger_utils import LoggerUtils
from discord_message_parser.utils.time_utils import TimeUtils

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from discord_message_parser.models.config_models import Config
    from discord_message_parser.models.message_models import MessagePart

__all__: list[str] = ["main"]


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def _instant(value: str) -> int:
    try:
        seconds: int = int(value)
    except ValueError:
        msg: str = f"not an integer number of seconds: {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if not TimeUtils.is_representable(seconds):
        msg = f"instant out of calendar range: {value}"
        raise argparse.ArgumentTypeError(msg)
    return seconds


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        prog="discord_message_parser",
        description="Parse Discord message formatting tags and Unicode emoji",
        epilog='Example: python -m discord_message_parser "hi <@123> <t:0:R>" --now 3600',
    )
    parser.add_argument("text", nargs="*", help="Message text. Read from stdin when omitted.")
    parser.add_argument("--config", dest="config", metavar="FILE", help="INI configuration file")
    parser.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS, help="Output format")
    parser.add_argument("--timezone", dest="timezone", metavar="NAME", help="Display timezone, e.g. Europe/Berlin")
    parser.add_argument(
        "--default-style",
        dest="default_style",
        choices=[style.code for style in TimestampStyle],
        help="Style for timestamps written without one",
    )
    parser.add_argument("--now", dest="now", type=_instant, metavar="SECONDS", help="Fixed base for relative times")
    parser.add_argument("--emoji-table", dest="emoji_table", metavar="FILE", help="Emoji table resource file")
    parser.add_argument(
        "--dump-emoji-table",
        dest="dump_emoji_table",
        metavar="FILE",
        help="Write the active emoji table to FILE and exit",
    )
    parser.add_argument("--log-file", dest="log_file", metavar="FILE", help="Write debug log to FILE")
    parser.add_argument("--debug", dest="debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file (if any) and apply command-line overrides.

    Raises:
        ConfigLoaderError: If the configuration cannot be loaded.
    """
    return ConfigLoader(
        config_filename=args.config,
        script_name=Path(sys.argv[0]).stem,
        debug=args.debug,
        log_file=args.log_file,
        emoji_table=args.emoji_table,
        timezone=args.timezone,
        default_style=args.default_style,
        output_format=args.output_format,
    ).config


def build_matcher(config: Config) -> EmojiMatcher:
    """Create the emoji matcher for the configured table.

    Raises:
        EmojiTableFormatError: If the table file is malformed.
        OSError: If the table file cannot be read.
    """
    if config.EMOJI.TABLE_FILE:
        return EmojiMatcher(EmojiTable.from_file(config.EMOJI.TABLE_FILE))
    return get_default_matcher()


def render(part: MessagePart, config: Config, now: datetime | None) -> str:
    """Render a parsed message in the configured output format."""
    formatter = MessageFormatter(
        tz=resolve_timezone(config.TIMESTAMP.TIMEZONE),
        now=now,
        default_style=TimestampStyle.from_code(config.TIMESTAMP.DEFAULT_STYLE),
    )
    if config.OUTPUT.FORMAT == "json":
        return part.to_json(ensure_ascii=False, indent=2)
    if config.OUTPUT.FORMAT == "text":
        return formatter.format(part)
    return formatter.format_tree(part)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the command line.

    Returns:
        int: Process exit status.
    """
    args: argparse.Namespace = parse_arguments(argv)
    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print(f"Error: Failed to load configuration.\nDetails: {err}", file=sys.stderr)
        return 1

    logger_utils = LoggerUtils(config.GENERAL.LOG_FILE)
    if config.GENERAL.DEBUG:
        logger_utils.set_level("DEBUG")
    logger = LoggerUtils.get_logger(__name__)

    try:
        matcher: EmojiMatcher = build_matcher(config)
    except (EmojiTableFormatError, OSError) as err:
        print(f"Error: Failed to load emoji table.\nDetails: {err}", file=sys.stderr)
        return 1

    if args.dump_emoji_table:
        matcher.table.dump(args.dump_emoji_table)
        print(f"Wrote {len(matcher.table)} emoji sequences to {args.dump_emoji_table}")
        return 0

    text: str = " ".join(args.text) if args.text else sys.stdin.read().removesuffix("\n")
    logger.debug("Input: %r", text)

    part: MessagePart = MessageParser(matcher).parse(text)
    now: datetime | None = TimeUtils.from_instant(args.now) if args.now is not None else None
    print(render(part, config, now))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
