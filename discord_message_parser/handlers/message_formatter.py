"""Message formatter for rendering parsed messages back to text.

This module provides the MessageFormatter class, which turns a parsed message tree into
display text (mentions by ID, custom emoji by name, timestamps in their style) or into an
indented debug dump of the tree.
"""

from __future__ import annotations

from datetime import UTC
from typing import TYPE_CHECKING

from discord_message_parser.models.message_models import (
    ChannelMention,
    CustomEmoji,
    Empty,
    Nested,
    PlainText,
    RoleMention,
    Timestamp,
    UnicodeEmoji,
    UserMention,
)
from discord_message_parser.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable
    from datetime import datetime, tzinfo

    from discord_message_parser.models.message_models import MessagePart
    from discord_message_parser.models.timestamp_models import TimestampStyle


__all__: list[str] = ["MessageFormatter"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

_INDENT: str = "    "


class MessageFormatter:
    """Renders message parts as display text.

    The formatter is where relative timestamps are evaluated, so ``now`` is fixed per
    formatter to keep a whole message consistent. Leaving it None reads the clock each time
    a relative timestamp is rendered.

    Args:
        tz (tzinfo): Display timezone for timestamps. Defaults to UTC.
        now (datetime | None): Reference instant for relative timestamps.
        default_style (TimestampStyle | None): Style for timestamps written without one.
    """

    def __init__(
        self,
        tz: tzinfo = UTC,
        now: datetime | None = None,
        default_style: TimestampStyle | None = None,
    ) -> None:
        self.tz: tzinfo = tz
        self.now: datetime | None = now
        self.default_style: TimestampStyle | None = default_style
        self._renderers: dict[type[MessagePart], Callable[[MessagePart], str]] = {
            Empty: lambda _part: "",
            Nested: self._render_nested,
            PlainText: lambda part: part.text,
            UnicodeEmoji: lambda part: part.emoji,
            UserMention: lambda part: f"@{part.user}",
            ChannelMention: lambda part: f"#{part.channel}",
            RoleMention: lambda part: f"@&{part.role}",
            CustomEmoji: lambda part: f":{part.name}:",
            Timestamp: self._render_timestamp,
        }
        logger.debug("Initialized MessageFormatter (tz=%s, now=%s)", tz, now)

    def format(self, part: MessagePart) -> str:
        """Render a message tree as display text.

        Args:
            part (MessagePart): The parsed message.

        Returns:
            str: The display text.

        Raises:
            TypeError: If the tree contains an object that is not a known message part.
        """
        renderer: Callable[[MessagePart], str] | None = self._renderers.get(type(part))
        if renderer is None:
            msg: str = f"Unsupported message part: {type(part).__name__}"
            raise TypeError(msg)
        return renderer(part)

    def format_tree(self, part: MessagePart, depth: int = 0) -> str:
        """Render an indented dump of the tree, one part per line.

        Args:
            part (MessagePart): The parsed message.
            depth (int): Indentation level of ``part``.

        Returns:
            str: The dump, without a trailing newline.
        """
        indent: str = _INDENT * depth
        if isinstance(part, Nested):
            lines: list[str] = [f"{indent}Nested("]
            lines.extend(self.format_tree(child, depth + 1) for child in part.parts)
            lines.append(f"{indent})")
            return "\n".join(lines)
        if isinstance(part, Timestamp):
            return f"{indent}{part!r} -> {self._render_timestamp(part)!r}"
        return f"{indent}{part!r}"

    def _render_nested(self, part: MessagePart) -> str:
        return "".join(self.format(child) for child in part.parts)

    def _render_timestamp(self, part: MessagePart) -> str:
        if not part.is_representable:
            logger.debug("Timestamp %d is outside the calendar range; keeping %r", part.instant, part.tag)
        return part.format(self.tz, self.now, self.default_style)
