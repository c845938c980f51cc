"""Data models for parsed Discord messages.

A parsed message is a tree of immutable parts. Leaf parts remember the ``Span`` of the
source characters they stand for (code point offsets into the parsed string), and
text-carrying parts additionally hold a copy of that substring. Spans are excluded from
equality, so two parts compare equal when they mean the same thing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from dataclasses_json import DataClassJsonMixin

from discord_message_parser.models.timestamp_models import TimestampStyle
from discord_message_parser.utils.time_utils import TimeUtils

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from datetime import datetime, tzinfo


__all__: list[str] = [
    "ChannelMention",
    "CustomEmoji",
    "Empty",
    "MessagePart",
    "Nested",
    "PlainText",
    "RoleMention",
    "Span",
    "Timestamp",
    "UnicodeEmoji",
    "UserMention",
]


class Span(NamedTuple):
    """Represents a character position range within a message.

    Attributes:
        start (int): The starting position (inclusive).
        end (int): The ending position (exclusive).
    """

    start: int
    end: int


_NO_SPAN = Span(start=0, end=0)


class MessagePart(DataClassJsonMixin):
    """Base class of every node in a parsed message tree."""

    def leaves(self) -> Iterator[MessagePart]:
        """Yield the non-nested parts of this tree in source order."""
        yield self


@dataclass(frozen=True)
class Empty(MessagePart):
    """An empty message."""

    type: str = field(default="empty", init=False)

    def leaves(self) -> Iterator[MessagePart]:
        yield from ()


@dataclass(frozen=True)
class Nested(MessagePart):
    """A message made of two or more parts, in the order they occur in the source text."""

    parts: tuple[MessagePart, ...]
    type: str = field(default="nested", init=False)

    def __post_init__(self) -> None:
        parts: tuple[MessagePart, ...] = tuple(self.parts)
        if len(parts) < 2:
            msg: str = f"Nested requires at least two parts, got {len(parts)}"
            raise ValueError(msg)
        object.__setattr__(self, "parts", parts)

    def leaves(self) -> Iterator[MessagePart]:
        for part in self.parts:
            yield from part.leaves()

    @classmethod
    def collapse(cls, parts: Iterable[MessagePart]) -> MessagePart:
        """Fold a flat list of parts into ``Empty``, the single part, or ``Nested``."""
        items: list[MessagePart] = list(parts)
        if not items:
            return Empty()
        if len(items) == 1:
            return items[0]
        return cls(tuple(items))


@dataclass(frozen=True)
class PlainText(MessagePart):
    """Literal text without any recognized formatting."""

    text: str
    span: Span = field(default=_NO_SPAN, compare=False)
    type: str = field(default="plain_text", init=False)


@dataclass(frozen=True)
class UserMention(MessagePart):
    """A tag referring to a user.

    Attributes:
        user (int): The user ID.
        nickname_mention (bool): Whether the legacy ``<@!id>`` form was used. It behaves
            exactly like ``<@id>`` and is only kept so the message can be shown as written.
    """

    user: int
    nickname_mention: bool = False
    span: Span = field(default=_NO_SPAN, compare=False)
    type: str = field(default="user_mention", init=False)


@dataclass(frozen=True)
class ChannelMention(MessagePart):
    """A tag referring to a channel or channel category."""

    channel: int
    span: Span = field(default=_NO_SPAN, compare=False)
    type: str = field(default="channel_mention", init=False)


@dataclass(frozen=True)
class RoleMention(MessagePart):
    """A tag referring to a role."""

    role: int
    span: Span = field(default=_NO_SPAN, compare=False)
    type: str = field(default="role_mention", init=False)


@dataclass(frozen=True)
class UnicodeEmoji(MessagePart):
    """A known Unicode emoji sequence found in literal text."""

    emoji: str
    span: Span = field(default=_NO_SPAN, compare=False)
    type: str = field(default="unicode_emoji", init=False)


@dataclass(frozen=True)
class CustomEmoji(MessagePart):
    """A server emoji referenced by name and ID rather than by Unicode sequence."""

    name: str
    id: int
    animated: bool = False
    span: Span = field(default=_NO_SPAN, compare=False)
    type: str = field(default="custom_emoji", init=False)


@dataclass(frozen=True)
class Timestamp(MessagePart):
    """A timestamp tag.

    Attributes:
        instant (int): Seconds since the UNIX epoch; may be negative.
        style (TimestampStyle | None): ``None`` if omitted, which behaves like SHORT_DATE_TIME.
    """

    instant: int
    style: TimestampStyle | None = None
    span: Span = field(default=_NO_SPAN, compare=False)
    type: str = field(default="timestamp", init=False)

    @property
    def effective_style(self) -> TimestampStyle:
        return self.style if self.style is not None else TimestampStyle.default()

    @property
    def tag(self) -> str:
        """The tag as written, e.g. ``<t:1618953630:R>``."""
        if self.style is None:
            return f"<t:{self.instant}>"
        return f"<t:{self.instant}:{self.style.code}>"

    @property
    def is_representable(self) -> bool:
        """Whether the instant falls within the calendar range of ``datetime``."""
        return TimeUtils.is_representable(self.instant)

    def to_datetime(self, tz: tzinfo | None = None) -> datetime:
        """Return the instant as an aware datetime (UTC unless another timezone is given).

        Raises:
            OverflowError: If the instant is outside the calendar range of ``datetime``.
        """
        if tz is None:
            return TimeUtils.from_instant(self.instant)
        return TimeUtils.from_instant(self.instant, tz)

    def format(
        self,
        tz: tzinfo | None = None,
        now: datetime | None = None,
        default_style: TimestampStyle | None = None,
    ) -> str:
        """Render the timestamp in its style.

        Instants outside the calendar range of ``datetime`` are rendered as their tag text.

        Args:
            tz (tzinfo | None): Display timezone. Defaults to UTC.
            now (datetime | None): Reference instant for relative rendering. Defaults to the current time.
            default_style (TimestampStyle | None): Style used when the tag had none.

        Returns:
            str: The rendered timestamp.
        """
        if not self.is_representable:
            return self.tag
        style: TimestampStyle = self.style or default_style or TimestampStyle.default()
        return style.format(self.to_datetime(tz), now)
