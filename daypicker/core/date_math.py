"""Calendar arithmetic for daypicker.

Every component computes day and month boundaries through this module so that
timezone handling is identical everywhere. ``PickerCalendar`` is the calendar
capability handed to the picker (timezone, week start, locale and a clock for
"is today" queries); the module-level functions are pure helpers over it.

Weekday ordinals are 1-based with Sunday = 1 and Saturday = 7.
"""

from __future__ import annotations

import calendar as std_calendar
import datetime
import logging
from typing import Callable, Optional, Union

from dateutil.relativedelta import relativedelta

from daypicker.core.timezone_utils import DEFAULT_TIMEZONE, now_utc, resolve_zone
from daypicker.exceptions import PickerConfigurationError

logger = logging.getLogger(__name__)

DateLike = Union[datetime.datetime, datetime.date]

SUNDAY = 1
MONDAY = 2
SATURDAY = 7


class PickerCalendar:
    """Calendar capability consumed by the selection engine.

    The picker never mutates a calendar; sessions, resolvers and presets all
    read from the same instance.
    """

    def __init__(
        self,
        timezone: str = DEFAULT_TIMEZONE,
        first_weekday: int = SUNDAY,
        locale: str = "en_US",
        clock: Optional[Callable[[], datetime.datetime]] = None,
    ):
        """Initialize calendar.

        Args:
            timezone: IANA timezone used for every day boundary
            first_weekday: Ordinal of the first column of the week (1=Sunday .. 7=Saturday)
            locale: Locale identifier, carried for the label formatting layer
            clock: Callable returning the current aware datetime (defaults to now_utc)

        Raises:
            PickerTimezoneError: If the timezone is unknown
            PickerConfigurationError: If first_weekday is outside 1..7
        """
        if not isinstance(first_weekday, int) or not SUNDAY <= first_weekday <= SATURDAY:
            raise PickerConfigurationError(
                f"first_weekday must be in 1..7, got {first_weekday!r}"
            )
        self.timezone = timezone
        self.zone = resolve_zone(timezone)
        self.first_weekday = first_weekday
        self.locale = locale
        self.clock = clock or now_utc

    def __repr__(self) -> str:
        return (
            f"PickerCalendar(timezone={self.timezone!r}, "
            f"first_weekday={self.first_weekday}, locale={self.locale!r})"
        )

    @property
    def last_weekday(self) -> int:
        """Ordinal of the last column of the week (the day before first_weekday)."""
        return (self.first_weekday + 5) % 7 + 1

    @property
    def python_first_weekday(self) -> int:
        """first_weekday expressed in the stdlib convention (Monday=0 .. Sunday=6)."""
        return (self.first_weekday - 2) % 7

    def localize(self, value: DateLike) -> datetime.datetime:
        """Express a date or datetime in this calendar's timezone.

        Naive datetimes are read as wall-clock time in the calendar's timezone and
        plain dates become local midnight.
        """
        if isinstance(value, datetime.datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=self.zone)
            return value.astimezone(self.zone)
        return datetime.datetime.combine(value, datetime.time.min, tzinfo=self.zone)

    def day_of(self, value: DateLike) -> datetime.date:
        """Return the local calendar day of a date or datetime."""
        return self.localize(value).date()

    def weekday(self, value: DateLike) -> int:
        """Return the 1-based weekday ordinal (Sunday=1) of a date in this calendar."""
        return self.localize(value).isoweekday() % 7 + 1

    def now(self) -> datetime.datetime:
        """Return the clock's current time in this calendar's timezone."""
        return self.clock().astimezone(self.zone)

    def is_today(self, value: DateLike) -> bool:
        return is_same_day(value, self.now(), self)

    def weekday_symbols(self) -> list[str]:
        """Short weekday names ordered from first_weekday, for the week header row."""
        ordinals = [(self.first_weekday - 1 + i) % 7 + 1 for i in range(7)]
        return [std_calendar.day_abbr[(ordinal - 2) % 7] for ordinal in ordinals]


def start_of_day(value: DateLike, calendar: PickerCalendar) -> datetime.datetime:
    """Return local midnight of the day containing ``value``."""
    day = calendar.day_of(value)
    return datetime.datetime.combine(day, datetime.time.min, tzinfo=calendar.zone)


def end_of_day(value: DateLike, calendar: PickerCalendar) -> datetime.datetime:
    """Return the last representable instant of the day containing ``value``."""
    day = calendar.day_of(value)
    return datetime.datetime.combine(day, datetime.time.max, tzinfo=calendar.zone)


def start_of_month(value: DateLike, calendar: PickerCalendar) -> datetime.datetime:
    day = calendar.day_of(value).replace(day=1)
    return start_of_day(day, calendar)


def end_of_month(value: DateLike, calendar: PickerCalendar) -> datetime.datetime:
    day = calendar.day_of(value)
    last_day = std_calendar.monthrange(day.year, day.month)[1]
    return end_of_day(day.replace(day=last_day), calendar)


def is_same_day(a: DateLike, b: DateLike, calendar: PickerCalendar) -> bool:
    """Check whether two dates fall on the same local calendar day."""
    return calendar.day_of(a) == calendar.day_of(b)


def compare(a: DateLike, b: DateLike, calendar: PickerCalendar) -> int:
    """Total order by instant.

    Returns:
        -1 if a is earlier than b, 0 if equal, 1 if later
    """
    left = calendar.localize(a).astimezone(datetime.UTC)
    right = calendar.localize(b).astimezone(datetime.UTC)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def add_days(value: DateLike, days: int, calendar: PickerCalendar) -> datetime.datetime:
    """Shift by whole calendar days keeping the local wall-clock time."""
    local = calendar.localize(value)
    return local + relativedelta(days=days)


def add_months(value: DateLike, months: int, calendar: PickerCalendar) -> datetime.datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    local = calendar.localize(value)
    return local + relativedelta(months=months)
