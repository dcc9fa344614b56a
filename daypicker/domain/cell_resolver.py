"""Per-cell visual state derivation.

Given a day, its month membership and the current selection, the resolver
produces a ``CellViewState``: whether the day label is shown and enabled,
whether the endpoint highlight is drawn, and the shape of the left and right
edges of the range band. The result depends only on the inputs, so callers may
recompute it on every scroll or cell reuse.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional, Union

from daypicker.core.date_math import (
    PickerCalendar,
    add_months,
    compare,
    end_of_month,
    is_same_day,
    start_of_day,
    start_of_month,
)
from daypicker.domain.models import (
    AvailabilityFilter,
    CellMembership,
    CellViewState,
    DateBounds,
    DateRange,
    EmptySelection,
    RangeEndpointPosition,
    RangeSideState,
    SelectionValue,
    SingleDate,
)

logger = logging.getLogger(__name__)

CellDate = Union[datetime.datetime, datetime.date]

HIDDEN = RangeSideState.HIDDEN
SQUARED = RangeSideState.SQUARED
ROUNDED = RangeSideState.ROUNDED


def endpoint_position(
    value: CellDate, selection: SelectionValue, calendar: PickerCalendar
) -> RangeEndpointPosition:
    """Classify a day against the current selection.

    Args:
        value: Day being rendered
        selection: Current selection
        calendar: Calendar used for day comparisons

    Returns:
        FULL for the selected single date or the day of a one-day range, LEFT/RIGHT
        for the endpoints of a multi-day range, MIDDLE for interior days, NONE otherwise
    """
    if isinstance(selection, EmptySelection):
        return RangeEndpointPosition.NONE

    if isinstance(selection, SingleDate):
        if is_same_day(value, selection.date, calendar):
            return RangeEndpointPosition.FULL
        return RangeEndpointPosition.NONE

    if not isinstance(selection, DateRange):
        raise TypeError(f"Unsupported selection value: {selection!r}")

    day_start = start_of_day(value, calendar)
    if (
        compare(day_start, start_of_day(selection.from_date, calendar), calendar) < 0
        or compare(day_start, selection.to_date, calendar) > 0
    ):
        return RangeEndpointPosition.NONE
    if selection.is_degenerate(calendar):
        return RangeEndpointPosition.FULL
    if is_same_day(value, selection.from_date, calendar):
        return RangeEndpointPosition.LEFT
    if is_same_day(value, selection.to_date, calendar):
        return RangeEndpointPosition.RIGHT
    return RangeEndpointPosition.MIDDLE


def band_sides(
    position: RangeEndpointPosition, weekday: int, calendar: PickerCalendar
) -> tuple[RangeSideState, RangeSideState]:
    """Return (left, right) band edge states for a selected day.

    Endpoints draw a half band toward the inside of the range; week-boundary
    columns round the outer edge of the band. For LEFT/RIGHT/MIDDLE only the
    first matching rule applies, in the order below.
    """
    is_first = weekday == calendar.first_weekday
    is_last = weekday == calendar.last_weekday

    if position == RangeEndpointPosition.NONE:
        return HIDDEN, HIDDEN

    if position == RangeEndpointPosition.FULL:
        if is_first:
            return ROUNDED, SQUARED
        if is_last:
            return SQUARED, ROUNDED
        return HIDDEN, HIDDEN

    if position == RangeEndpointPosition.RIGHT and is_first:
        return ROUNDED, HIDDEN
    if position == RangeEndpointPosition.LEFT and is_last:
        return HIDDEN, ROUNDED
    if position == RangeEndpointPosition.LEFT:
        return HIDDEN, SQUARED
    if position == RangeEndpointPosition.RIGHT:
        return SQUARED, HIDDEN
    if is_first:
        return ROUNDED, SQUARED
    if is_last:
        return SQUARED, ROUNDED
    return SQUARED, SQUARED


def continues_through(
    value: CellDate, membership: CellMembership, selection: DateRange, calendar: PickerCalendar
) -> bool:
    """Check whether a range band crosses an adjacent-month filler cell.

    A trailing cell (next month) continues the band when the range starts before
    the end of the displayed month and ends after the start of the cell's month.
    A leading cell (previous month) is the mirror image.
    """
    if membership == CellMembership.NEXT_WITHIN_BOUNDARY:
        end_of_displayed = end_of_month(add_months(value, -1, calendar), calendar)
        start_of_cell_month = start_of_month(value, calendar)
        return (
            compare(selection.from_date, end_of_displayed, calendar) < 0
            and compare(selection.to_date, start_of_cell_month, calendar) > 0
        )
    if membership == CellMembership.PREVIOUS_WITHIN_BOUNDARY:
        start_of_displayed = start_of_month(add_months(value, 1, calendar), calendar)
        end_of_cell_month = end_of_month(value, calendar)
        return (
            compare(selection.to_date, start_of_displayed, calendar) > 0
            and compare(selection.from_date, end_of_cell_month, calendar) < 0
        )
    return False


def is_date_enabled(
    value: CellDate,
    bounds: DateBounds,
    availability: AvailabilityFilter,
    calendar: PickerCalendar,
) -> bool:
    """Check a day against normalized bounds and the availability filter."""
    if not bounds.contains(start_of_day(value, calendar), calendar):
        return False
    if availability.only_available_dates and not availability.available_days:
        return False
    return availability.allows(calendar.day_of(value))


class CellVisualStateResolver:
    """Derives cell view states for one bounds/availability configuration."""

    def __init__(
        self,
        calendar: PickerCalendar,
        bounds: Optional[DateBounds] = None,
        availability: Optional[AvailabilityFilter] = None,
    ):
        """Initialize resolver.

        Args:
            calendar: Calendar providing week start, timezone and "is today"
            bounds: Selectable window; normalized to day boundaries here
            availability: Optional available-days filter
        """
        self.calendar = calendar
        self.bounds = (bounds or DateBounds()).normalized(calendar)
        self.availability = availability or AvailabilityFilter()

    def is_enabled(self, value: CellDate) -> bool:
        return is_date_enabled(value, self.bounds, self.availability, self.calendar)

    def resolve(
        self, value: CellDate, membership: CellMembership, selection: SelectionValue
    ) -> CellViewState:
        """Compute the view state of one cell.

        Args:
            value: Day shown in the cell
            membership: Month membership relative to the displayed month
            selection: Current selection

        Returns:
            Immutable CellViewState
        """
        calendar = self.calendar

        if membership != CellMembership.CURRENT:
            left, right = HIDDEN, HIDDEN
            if isinstance(selection, DateRange) and continues_through(
                value, membership, selection, calendar
            ):
                weekday = calendar.weekday(value)
                if weekday == calendar.first_weekday:
                    left, right = ROUNDED, SQUARED
                elif weekday == calendar.last_weekday:
                    left, right = SQUARED, ROUNDED
                else:
                    left, right = SQUARED, SQUARED
            return CellViewState(left_side=left, right_side=right)

        position = endpoint_position(value, selection, calendar)
        left, right = band_sides(position, calendar.weekday(value), calendar)

        return CellViewState(
            label_text=str(calendar.day_of(value).day),
            enabled=self.is_enabled(value),
            is_today=calendar.is_today(value),
            selected_highlight_visible=position
            not in (RangeEndpointPosition.NONE, RangeEndpointPosition.MIDDLE),
            left_side=left,
            right_side=right,
        )
