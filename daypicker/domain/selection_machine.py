"""Tap-driven selection transitions for single-date and range pickers.

The machine is a pure function of (current value, tapped date, configuration).
It does not check bounds or availability: the session only forwards taps on
enabled cells and validates programmatic selections itself.

Range mode implements anchor-drag editing. The existing endpoints act as
anchors: tapping outside the range extends the edge on that side, and tapping
exactly on an endpoint collapses the range onto that endpoint's day.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Union

from daypicker.core.date_math import (
    PickerCalendar,
    compare,
    end_of_day,
    is_same_day,
    start_of_day,
)
from daypicker.domain.models import (
    EMPTY,
    DateRange,
    EmptySelection,
    SelectionMode,
    SelectionValue,
    SingleDate,
)

logger = logging.getLogger(__name__)

TapDate = Union[datetime.datetime, datetime.date]


@dataclass(frozen=True)
class SelectionPolicy:
    """Session-level edit flags.

    Attributes:
        mode: Single or range semantics
        allow_nil_selection: Tapping the sole selected day again clears the selection
        allow_range_edits: Range mode only; when False a multi-day range is locked
            and any tap starts a fresh one-day range
    """

    mode: SelectionMode = SelectionMode.SINGLE
    allow_nil_selection: bool = False
    allow_range_edits: bool = True


class SelectionStateMachine:
    """Computes the next selection value from a tap."""

    def __init__(self, policy: SelectionPolicy, calendar: PickerCalendar):
        self.policy = policy
        self.calendar = calendar

    def next_value(self, current: SelectionValue, tapped: TapDate) -> SelectionValue:
        """Return the selection that results from tapping ``tapped``.

        Args:
            current: Selection before the tap
            tapped: Tapped day (any instant within it)

        Returns:
            New selection value; ``current`` is never modified
        """
        tapped = self.calendar.localize(tapped)
        if self.policy.mode == SelectionMode.SINGLE:
            result = self._next_single(current, tapped)
        else:
            result = self._next_range(current, tapped)
        logger.debug("Tap on %s: %s -> %s", tapped.date(), current, result)
        return result

    def _next_single(self, current: SelectionValue, tapped: datetime.datetime) -> SelectionValue:
        if (
            self.policy.allow_nil_selection
            and isinstance(current, SingleDate)
            and is_same_day(current.date, tapped, self.calendar)
        ):
            return EMPTY
        return SingleDate(date=tapped)

    def _next_range(self, current: SelectionValue, tapped: datetime.datetime) -> SelectionValue:
        calendar = self.calendar

        if (
            self.policy.allow_nil_selection
            and isinstance(current, DateRange)
            and is_same_day(tapped, current.from_date, calendar)
            and is_same_day(tapped, current.to_date, calendar)
        ):
            return EMPTY

        if isinstance(current, (EmptySelection, SingleDate)):
            return DateRange.single_day(tapped, calendar)

        if not isinstance(current, DateRange):
            raise TypeError(f"Unsupported selection value: {current!r}")

        if not self.policy.allow_range_edits and not current.is_degenerate(calendar):
            return DateRange.single_day(tapped, calendar)

        if is_same_day(tapped, current.from_date, calendar):
            return DateRange(from_date=current.from_date, to_date=end_of_day(tapped, calendar))

        if is_same_day(tapped, current.to_date, calendar):
            return DateRange(from_date=start_of_day(tapped, calendar), to_date=current.to_date)

        if compare(tapped, current.from_date, calendar) < 0:
            return DateRange(from_date=start_of_day(tapped, calendar), to_date=current.to_date)

        return DateRange(from_date=current.from_date, to_date=end_of_day(tapped, calendar))
