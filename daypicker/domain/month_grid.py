"""Month grid layout: cell membership, scrollable window and whole-month ranges.

Each month is shown as a fixed 6x7 grid whose first column is the calendar's
first weekday. Days of the neighbouring months fill the leading and trailing
slots; they are "within boundary" when they still fall inside the scrollable
window and "out of boundary" otherwise.
"""

from __future__ import annotations

import calendar as std_calendar
import datetime
import logging
from dataclasses import dataclass
from typing import Optional, Union

from daypicker.core.date_math import (
    PickerCalendar,
    add_days,
    add_months,
    compare,
    end_of_day,
    end_of_month,
    start_of_day,
    start_of_month,
)
from daypicker.domain.models import CellMembership, DateBounds, DateRange

logger = logging.getLogger(__name__)

GRID_ROWS = 6
GRID_COLUMNS = 7

# Default scroll span around today when no bounds are configured
DEFAULT_SPAN_MONTHS = 99 * 12


@dataclass(frozen=True)
class GridCell:
    """One slot of a month grid."""

    date: datetime.date
    membership: CellMembership
    row: int
    column: int

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.column


@dataclass(frozen=True)
class VisibleWindow:
    """First and last scrollable instants of the picker."""

    start: datetime.datetime
    end: datetime.datetime

    def contains_day(self, day: datetime.date) -> bool:
        return self.start.date() <= day <= self.end.date()


def visible_window(
    calendar: PickerCalendar,
    bounds: Optional[DateBounds] = None,
    only_current_month: bool = False,
) -> VisibleWindow:
    """Compute the scrollable window for the given bounds.

    Without bounds the picker scrolls 99 years either side of today. A maximum
    extends the window to the end of the month two days after it so the
    trailing row of the last month can still be drawn; ``only_current_month``
    stops exactly at the bound instead. The minimum side mirrors this.
    """
    now = calendar.now()
    start = add_months(now, -DEFAULT_SPAN_MONTHS, calendar)
    end = add_months(now, DEFAULT_SPAN_MONTHS, calendar)

    bounds = (bounds or DateBounds()).normalized(calendar)
    if bounds.maximum is not None:
        if only_current_month:
            end = bounds.maximum
        else:
            end = end_of_month(add_days(bounds.maximum, 2, calendar), calendar)
    if bounds.minimum is not None:
        if only_current_month:
            start = bounds.minimum
        else:
            start = start_of_month(add_days(bounds.minimum, -2, calendar), calendar)

    return VisibleWindow(start=start, end=end)


def month_grid(
    month: Union[datetime.datetime, datetime.date],
    calendar: PickerCalendar,
    window: Optional[VisibleWindow] = None,
) -> list[list[GridCell]]:
    """Lay out a month as 6 rows of 7 cells.

    Args:
        month: Any day of the month to lay out
        calendar: Calendar providing the first weekday
        window: Scrollable window used to classify leading/trailing days

    Returns:
        Rows of GridCell, first column = calendar.first_weekday
    """
    displayed = calendar.day_of(month)
    weeks = std_calendar.Calendar(calendar.python_first_weekday).monthdatescalendar(
        displayed.year, displayed.month
    )
    while len(weeks) < GRID_ROWS:
        last = weeks[-1][-1]
        weeks.append([last + datetime.timedelta(days=i) for i in range(1, GRID_COLUMNS + 1)])

    rows = []
    for row_index, week in enumerate(weeks):
        row = []
        for column_index, day in enumerate(week):
            row.append(
                GridCell(
                    date=day,
                    membership=_membership(day, displayed, window),
                    row=row_index,
                    column=column_index,
                )
            )
        rows.append(row)
    return rows


def _membership(
    day: datetime.date, displayed: datetime.date, window: Optional[VisibleWindow]
) -> CellMembership:
    if (day.year, day.month) == (displayed.year, displayed.month):
        return CellMembership.CURRENT
    inside = window is None or window.contains_day(day)
    if day < displayed:
        if inside:
            return CellMembership.PREVIOUS_WITHIN_BOUNDARY
        return CellMembership.PREVIOUS_OUT_OF_BOUNDARY
    if inside:
        return CellMembership.NEXT_WITHIN_BOUNDARY
    return CellMembership.NEXT_OUT_OF_BOUNDARY


def month_range(
    month: Union[datetime.datetime, datetime.date],
    bounds: Optional[DateBounds],
    calendar: PickerCalendar,
) -> Optional[DateRange]:
    """Range covering a whole month, clamped to the bounds.

    Returns:
        The clamped range, or None when the month lies entirely outside the bounds
    """
    from_date = start_of_month(month, calendar)
    to_date = end_of_month(month, calendar)
    bounds = (bounds or DateBounds()).normalized(calendar)

    if bounds.minimum is not None:
        if compare(to_date, bounds.minimum, calendar) < 0:
            return None
        if compare(from_date, bounds.minimum, calendar) < 0:
            from_date = start_of_day(bounds.minimum, calendar)
    if bounds.maximum is not None:
        if compare(from_date, bounds.maximum, calendar) > 0:
            return None
        if compare(to_date, bounds.maximum, calendar) > 0:
            to_date = end_of_day(bounds.maximum, calendar)

    return DateRange(from_date=from_date, to_date=to_date)
