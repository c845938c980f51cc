"""Calendar helpers for timestamp tags.

Converts tag instants (signed seconds since the UNIX epoch) to aware datetimes and
renders the calendar-aware relative form used by the ``R`` timestamp style.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Final

from discord_message_parser.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from datetime import tzinfo

__all__: list[str] = ["TimeUtils"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=UTC)

# One day of margin on both ends keeps every UTC offset inside datetime's year range.
MIN_INSTANT: Final[int] = int((datetime(1, 1, 2, tzinfo=UTC) - EPOCH).total_seconds())
MAX_INSTANT: Final[int] = int((datetime(9999, 12, 30, 23, 59, 59, tzinfo=UTC) - EPOCH).total_seconds())

SECONDS_PER_MINUTE: Final[int] = 60
SECONDS_PER_HOUR: Final[int] = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY: Final[int] = 24 * SECONDS_PER_HOUR
SECONDS_PER_WEEK: Final[int] = 7 * SECONDS_PER_DAY

# Not taken from the locale: rendering must not depend on the host settings.
WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


class TimeUtils:
    """Static helpers for instants and relative time formatting."""

    @staticmethod
    def is_representable(seconds: int) -> bool:
        """Check whether an instant can be turned into a calendar date in any timezone.

        Args:
            seconds (int): Seconds since the UNIX epoch.

        Returns:
            bool: True if the instant lies within the supported calendar range.
        """
        return MIN_INSTANT <= seconds <= MAX_INSTANT

    @staticmethod
    def from_instant(seconds: int, tz: tzinfo = UTC) -> datetime:
        """Convert seconds since the UNIX epoch to an aware datetime.

        Negative instants are supported on every platform since the conversion does not
        go through the C library.

        Args:
            seconds (int): Seconds since the UNIX epoch.
            tz (tzinfo): Target timezone. Defaults to UTC.

        Returns:
            datetime: The instant in the requested timezone.

        Raises:
            OverflowError: If the instant is outside the supported calendar range.
        """
        if not TimeUtils.is_representable(seconds):
            msg: str = f"Instant out of calendar range: {seconds}"
            raise OverflowError(msg)
        return (EPOCH + timedelta(seconds=seconds)).astimezone(tz)

    @staticmethod
    def weekday_name(moment: datetime) -> str:
        return WEEKDAY_NAMES[moment.weekday()]

    @staticmethod
    def elapsed_seconds(time: datetime, base: datetime) -> int:
        """Whole seconds from base to time, truncated toward zero."""
        delta: timedelta = time - base
        seconds: int = delta.days * SECONDS_PER_DAY + delta.seconds
        if seconds < 0 and delta.microseconds:
            seconds += 1
        return seconds

    @staticmethod
    def format_relative(time: datetime, base: datetime) -> str:
        """Describe time relative to base, e.g. 'in 3 days' or '2 months ago'.

        Years and months are true calendar differences: a boundary only counts once the
        target's month, day and time of day have reached the base's. Below one month the
        largest non-zero unit of the exact elapsed duration is used, truncated toward zero.
        Both datetimes are expected to be in the same timezone.

        Args:
            time (datetime): The instant being described.
            base (datetime): The reference instant ("now").

        Returns:
            str: The relative description, or 'now' when both instants are equal to the second.
        """
        years: int = TimeUtils._calendar_years(time, base)
        if years:
            return TimeUtils._describe(years, "year")

        months: int = TimeUtils._calendar_months(time, base)
        if months:
            return TimeUtils._describe(months, "month")

        elapsed: int = TimeUtils.elapsed_seconds(time, base)
        for unit_seconds, unit in (
            (SECONDS_PER_WEEK, "week"),
            (SECONDS_PER_DAY, "day"),
            (SECONDS_PER_HOUR, "hour"),
            (SECONDS_PER_MINUTE, "minute"),
        ):
            amount: int = TimeUtils._truncated_div(elapsed, unit_seconds)
            if amount:
                return TimeUtils._describe(amount, unit)

        if elapsed:
            return TimeUtils._describe(elapsed, "second")
        return "now"

    @staticmethod
    def _calendar_years(time: datetime, base: datetime) -> int:
        years: int = time.year - base.year
        if years > 0 and (time.month, time.day, time.time()) < (base.month, base.day, base.time()):
            years -= 1
        if years < 0 and (time.month, time.day, time.time()) > (base.month, base.day, base.time()):
            years += 1
        return years

    @staticmethod
    def _calendar_months(time: datetime, base: datetime) -> int:
        # Year difference is folded in first so Dec 15 -> Jan 10 is not a full month.
        months: int = 12 * (time.year - base.year) + time.month - base.month
        if months > 0 and (time.day, time.time()) < (base.day, base.time()):
            months -= 1
        if months < 0 and (time.day, time.time()) > (base.day, base.time()):
            months += 1
        return months

    @staticmethod
    def _truncated_div(value: int, divisor: int) -> int:
        quotient: int = abs(value) // divisor
        return quotient if value >= 0 else -quotient

    @staticmethod
    def _describe(amount: int, unit: str) -> str:
        magnitude: int = abs(amount)
        label: str = unit if magnitude == 1 else f"{unit}s"
        if amount > 0:
            return f"in {magnitude} {label}"
        return f"{magnitude} {label} ago"
