"""Named selection presets and day-level preset matching.

A shortcut is a name plus a generator ``calendar -> SelectionValue``. The
matcher only decides which preset chip is shown as active; applying a preset
goes through the session's programmatic selection path, which validates it
against the bounds first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from daypicker.core.date_math import PickerCalendar, add_days, add_months, is_same_day
from daypicker.domain.models import DateRange, SelectionMode, SelectionValue, SingleDate

logger = logging.getLogger(__name__)

ShortcutGenerator = Callable[[PickerCalendar], SelectionValue]


@dataclass(frozen=True)
class Shortcut:
    """Named preset selection."""

    name: str
    mode: SelectionMode
    generator: ShortcutGenerator

    def value(self, calendar: PickerCalendar) -> SelectionValue:
        return self.generator(calendar)


def values_match(a: SelectionValue, b: SelectionValue, calendar: PickerCalendar) -> bool:
    """Day-level equality of two selection values.

    Single dates match when they fall on the same day, ranges when both
    endpoints do; different variants never match.
    """
    if isinstance(a, SingleDate) and isinstance(b, SingleDate):
        return is_same_day(a.date, b.date, calendar)
    if isinstance(a, DateRange) and isinstance(b, DateRange):
        return is_same_day(a.from_date, b.from_date, calendar) and is_same_day(
            a.to_date, b.to_date, calendar
        )
    return False


class ShortcutMatcher:
    """Finds the preset equivalent to the current selection."""

    def __init__(self, calendar: PickerCalendar):
        self.calendar = calendar

    def matches(self, shortcut: Shortcut, selection: SelectionValue) -> bool:
        return values_match(shortcut.value(self.calendar), selection, self.calendar)

    def find_active(
        self, shortcuts: Iterable[Shortcut], selection: SelectionValue
    ) -> Optional[Shortcut]:
        """Return the first shortcut equivalent to ``selection``, if any."""
        for shortcut in shortcuts:
            if self.matches(shortcut, selection):
                return shortcut
        return None


# Built-in presets


def _today_single(calendar: PickerCalendar) -> SelectionValue:
    return SingleDate(date=calendar.now())


def _tomorrow(calendar: PickerCalendar) -> SelectionValue:
    return SingleDate(date=add_days(calendar.now(), 1, calendar))


def _yesterday(calendar: PickerCalendar) -> SelectionValue:
    return SingleDate(date=add_days(calendar.now(), -1, calendar))


def _today_range(calendar: PickerCalendar) -> SelectionValue:
    return DateRange.single_day(calendar.now(), calendar)


def _last_week(calendar: PickerCalendar) -> SelectionValue:
    now = calendar.now()
    return DateRange.spanning(add_days(now, -7, calendar), now, calendar)


def _last_month(calendar: PickerCalendar) -> SelectionValue:
    now = calendar.now()
    return DateRange.spanning(add_months(now, -1, calendar), now, calendar)


TODAY = Shortcut("Today", SelectionMode.SINGLE, _today_single)
TOMORROW = Shortcut("Tomorrow", SelectionMode.SINGLE, _tomorrow)
YESTERDAY = Shortcut("Yesterday", SelectionMode.SINGLE, _yesterday)
TODAY_RANGE = Shortcut("Today", SelectionMode.RANGE, _today_range)
LAST_WEEK = Shortcut("Last week", SelectionMode.RANGE, _last_week)
LAST_MONTH = Shortcut("Last month", SelectionMode.RANGE, _last_month)

PRESETS: dict[SelectionMode, dict[str, Shortcut]] = {
    SelectionMode.SINGLE: {"today": TODAY, "tomorrow": TOMORROW, "yesterday": YESTERDAY},
    SelectionMode.RANGE: {"today": TODAY_RANGE, "last_week": LAST_WEEK, "last_month": LAST_MONTH},
}


def preset_shortcuts(names: Iterable[str], mode: SelectionMode) -> list[Shortcut]:
    """Look up built-in presets by name for a mode, skipping unknown names."""
    available = PRESETS[mode]
    result = []
    for name in names:
        key = name.strip().lower().replace(" ", "_")
        if key in available:
            result.append(available[key])
        else:
            logger.warning(
                "Unknown %s shortcut %r; available: %s",
                mode.value,
                name,
                ", ".join(sorted(available)),
            )
    return result
