"""Timestamp tag styles.

Defines the closed set of display styles a ``<t:SECONDS:STYLE>`` tag can select and
their locale-independent renderings.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from discord_message_parser.utils.time_utils import TimeUtils

if TYPE_CHECKING:
    from datetime import tzinfo

__all__: list[str] = ["InvalidTimestampStyleError", "TimestampStyle"]


class InvalidTimestampStyleError(ValueError):
    """The given style code is not one of the timestamp style codes."""


class TimestampStyle(Enum):
    """Display style of a timestamp tag, valued by its wire code.

    See https://discord.com/developers/docs/reference#message-formatting-timestamp-styles.
    """

    SHORT_TIME = "t"
    """e.g. ``16:20``"""
    LONG_TIME = "T"
    """e.g. ``16:20:30``"""
    SHORT_DATE = "d"
    """e.g. ``2021-04-20``"""
    LONG_DATE = "D"
    """e.g. ``2021-04-20``; no separate long rendering yet."""
    SHORT_DATE_TIME = "f"
    """e.g. ``2021-04-20 16:20``. This is the default."""
    LONG_DATE_TIME = "F"
    """e.g. ``Tuesday, 2021-04-20 16:20``"""
    RELATIVE_TIME = "R"
    """e.g. ``2 months ago``"""

    @classmethod
    def default(cls) -> TimestampStyle:
        return cls.SHORT_DATE_TIME

    @classmethod
    def from_code(cls, code: str) -> TimestampStyle:
        """Look up a style by its single-character wire code.

        Args:
            code (str): One of ``t``, ``T``, ``d``, ``D``, ``f``, ``F``, ``R``.

        Returns:
            TimestampStyle: The matching style.

        Raises:
            InvalidTimestampStyleError: If the code is not a known style code.
        """
        try:
            return cls(code)
        except ValueError:
            msg: str = f"Invalid timestamp style: {code!r}. Expected one of {', '.join(s.value for s in cls)}."
            raise InvalidTimestampStyleError(msg) from None

    @property
    def code(self) -> str:
        return self.value

    def format(self, moment: datetime, now: datetime | None = None) -> str:
        """Render an aware datetime in this style.

        The output does not depend on the locale. Only RELATIVE_TIME uses ``now``; when it
        is omitted the current time is read from the clock.

        Args:
            moment (datetime): The timezone-aware instant to render, already in the display timezone.
            now (datetime | None): Timezone-aware reference instant for RELATIVE_TIME.

        Returns:
            str: The rendered timestamp.

        Raises:
            ValueError: If RELATIVE_TIME is given a naive ``moment`` or ``now``.
        """
        if self is TimestampStyle.RELATIVE_TIME:
            base: datetime = now if now is not None else datetime.now(UTC)
            _zone(base, "now")
            return TimeUtils.format_relative(moment, base.astimezone(_zone(moment, "moment")))

        short_time: str = f"{moment.hour:02d}:{moment.minute:02d}"
        renderings: dict[TimestampStyle, str] = {
            TimestampStyle.SHORT_TIME: short_time,
            TimestampStyle.LONG_TIME: f"{short_time}:{moment.second:02d}",
            TimestampStyle.SHORT_DATE: _date(moment),
            TimestampStyle.LONG_DATE: _date(moment),
            TimestampStyle.SHORT_DATE_TIME: f"{_date(moment)} {short_time}",
            TimestampStyle.LONG_DATE_TIME: f"{TimeUtils.weekday_name(moment)}, {_date(moment)} {short_time}",
        }
        return renderings[self]

    def format_instant(self, seconds: int, tz: tzinfo = UTC, now: datetime | None = None) -> str:
        """Render seconds since the UNIX epoch in this style, in the given timezone."""
        return self.format(TimeUtils.from_instant(seconds, tz), now)


def _date(moment: datetime) -> str:
    # strftime's %Y is not zero-padded for years before 1000 on every platform.
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def _zone(value: datetime, name: str) -> tzinfo:
    if value.tzinfo is None:
        msg: str = f"{name} must be timezone-aware, got {value!r}"
        raise ValueError(msg)
    return value.tzinfo
