"""Data models for the daypicker selection engine."""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from daypicker.core.date_math import (
    PickerCalendar,
    compare,
    end_of_day,
    is_same_day,
    start_of_day,
)


class SelectionMode(str, Enum):
    """Selection semantics, fixed for the lifetime of a picker."""

    SINGLE = "single"
    RANGE = "range"


class CellMembership(str, Enum):
    """Month a rendered cell belongs to, relative to the displayed month."""

    CURRENT = "current"
    PREVIOUS_OUT_OF_BOUNDARY = "previous_out_of_boundary"
    PREVIOUS_WITHIN_BOUNDARY = "previous_within_boundary"
    NEXT_OUT_OF_BOUNDARY = "next_out_of_boundary"
    NEXT_WITHIN_BOUNDARY = "next_within_boundary"


class RangeEndpointPosition(str, Enum):
    """Role of a day relative to the current selection."""

    NONE = "none"
    FULL = "full"  # single date or one-day range
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


class RangeSideState(str, Enum):
    """Edge shape of a cell's range band."""

    HIDDEN = "hidden"
    SQUARED = "squared"
    ROUNDED = "rounded"


class EmptySelection(BaseModel):
    """No date selected."""

    kind: Literal["empty"] = "empty"

    model_config = ConfigDict(frozen=True)


class SingleDate(BaseModel):
    """One selected date (single mode)."""

    kind: Literal["single"] = "single"
    date: datetime.datetime = Field(..., description="Selected date")

    model_config = ConfigDict(frozen=True)

    @field_serializer("date")
    def serialize_datetime(self, dt: datetime.datetime) -> str:
        """Serialize datetime to ISO format."""
        return dt.isoformat()


class DateRange(BaseModel):
    """Inclusive date range (range mode).

    ``from_date`` is always at or before ``to_date``: inverted input is swapped on
    construction. Day-boundary normalization needs a calendar and happens in
    ``DateRange.spanning``. Naive and aware endpoints cannot be mixed.
    """

    kind: Literal["range"] = "range"
    from_date: datetime.datetime = Field(..., description="Range start (start of day)")
    to_date: datetime.datetime = Field(..., description="Range end (end of day)")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _order_endpoints(cls, data: Any) -> Any:
        if isinstance(data, dict):
            start = data.get("from_date")
            end = data.get("to_date")
            if isinstance(start, datetime.datetime) and isinstance(end, datetime.datetime):
                if (start.tzinfo is None) != (end.tzinfo is None):
                    raise ValueError("from_date and to_date must both be naive or both aware")
                if start > end:
                    data = {**data, "from_date": end, "to_date": start}
        return data

    @classmethod
    def spanning(
        cls,
        start: datetime.datetime | datetime.date,
        end: datetime.datetime | datetime.date,
        calendar: PickerCalendar,
    ) -> DateRange:
        """Build a range covering the days of ``start`` and ``end`` in either order."""
        if compare(start, end, calendar) > 0:
            start, end = end, start
        return cls(from_date=start_of_day(start, calendar), to_date=end_of_day(end, calendar))

    @classmethod
    def single_day(
        cls, day: datetime.datetime | datetime.date, calendar: PickerCalendar
    ) -> DateRange:
        """Build a one-day (degenerate) range."""
        return cls.spanning(day, day, calendar)

    def is_degenerate(self, calendar: PickerCalendar) -> bool:
        """Check whether both endpoints fall on the same day."""
        return is_same_day(self.from_date, self.to_date, calendar)

    @field_serializer("from_date", "to_date")
    def serialize_datetime(self, dt: datetime.datetime) -> str:
        """Serialize datetime fields to ISO format."""
        return dt.isoformat()


SelectionValue = Annotated[
    Union[EmptySelection, SingleDate, DateRange], Field(discriminator="kind")
]

EMPTY = EmptySelection()


class DateBounds(BaseModel):
    """Optional selectable window."""

    minimum: Optional[datetime.datetime] = None
    maximum: Optional[datetime.datetime] = None

    model_config = ConfigDict(frozen=True)

    def normalized(self, calendar: PickerCalendar) -> DateBounds:
        """Return bounds snapped to day boundaries with an inverted pair swapped."""
        minimum, maximum = self.minimum, self.maximum
        if minimum is not None and maximum is not None and compare(minimum, maximum, calendar) > 0:
            minimum, maximum = maximum, minimum
        return DateBounds(
            minimum=start_of_day(minimum, calendar) if minimum is not None else None,
            maximum=end_of_day(maximum, calendar) if maximum is not None else None,
        )

    def contains(self, value: datetime.datetime | datetime.date, calendar: PickerCalendar) -> bool:
        """Check ``value`` against normalized bounds (inclusive on both ends)."""
        if self.minimum is not None and compare(value, self.minimum, calendar) < 0:
            return False
        if self.maximum is not None and compare(value, self.maximum, calendar) > 0:
            return False
        return True


class AvailabilityFilter(BaseModel):
    """Restricts selection to an explicit set of days when enabled."""

    only_available_dates: bool = False
    available_days: frozenset[datetime.date] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @field_validator("available_days", mode="before")
    @classmethod
    def _instants_to_days(cls, value: Any) -> Any:
        # datetimes keep their own wall-clock day; from_dates localizes first
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
            return [v.date() if isinstance(v, datetime.datetime) else v for v in value]
        return value

    @classmethod
    def from_dates(
        cls,
        dates: Iterable[datetime.datetime | datetime.date],
        calendar: PickerCalendar,
        only_available_dates: bool = True,
    ) -> AvailabilityFilter:
        """Build a filter from dates or datetimes, keyed by local calendar day."""
        return cls(
            only_available_dates=only_available_dates,
            available_days=frozenset(calendar.day_of(d) for d in dates),
        )

    def allows(self, day: datetime.date) -> bool:
        """Check whether a local calendar day passes the filter."""
        if not self.only_available_dates:
            return True
        return day in self.available_days


class CellViewState(BaseModel):
    """Rendering descriptor for one calendar cell."""

    label_text: Optional[str] = None
    enabled: bool = False
    is_today: bool = False
    selected_highlight_visible: bool = False
    left_side: RangeSideState = RangeSideState.HIDDEN
    right_side: RangeSideState = RangeSideState.HIDDEN

    model_config = ConfigDict(frozen=True)

    @property
    def band_visible(self) -> bool:
        """Check whether any part of the range band is drawn."""
        return not (
            self.left_side == RangeSideState.HIDDEN and self.right_side == RangeSideState.HIDDEN
        )

    @property
    def interactive(self) -> bool:
        """Check whether the rendering layer should forward taps on this cell."""
        return self.label_text is not None and self.enabled


class SelectionCommit(BaseModel):
    """Final outcome delivered to commit handlers when a session ends."""

    cancelled: bool = False
    value: Optional[SelectionValue] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def done(cls, value: Optional[SelectionValue]) -> SelectionCommit:
        return cls(cancelled=False, value=value)

    @classmethod
    def cancel(cls) -> SelectionCommit:
        return cls(cancelled=True)
