"""Picker session: owns the selection value, the cell cache and the observers.

The rendering layer forwards taps and programmatic requests here and reads
cell view states back. Every change to the selection or to the bounds and
availability configuration goes through a single mutation path that replaces
the value and invalidates the whole cell cache.

Usage:
    calendar = PickerCalendar("Europe/Madrid", first_weekday=MONDAY)
    session = PickerSession(SelectionMode.RANGE, calendar, on_commit=[handle_commit])
    session.tap(date(2025, 1, 5))
    session.tap(date(2025, 1, 10))
    state = session.cell_state(date(2025, 1, 7), CellMembership.CURRENT)
    session.done()
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Hashable, Iterable
from typing import TYPE_CHECKING, Callable, Optional, Union

from daypicker.core.date_math import PickerCalendar, compare, start_of_month
from daypicker.core.view_state_cache import ViewStateCache
from daypicker.domain.cell_resolver import CellVisualStateResolver
from daypicker.domain.models import (
    EMPTY,
    AvailabilityFilter,
    CellMembership,
    CellViewState,
    DateBounds,
    DateRange,
    EmptySelection,
    SelectionCommit,
    SelectionMode,
    SelectionValue,
    SingleDate,
)
from daypicker.domain.month_grid import (
    GridCell,
    VisibleWindow,
    month_grid,
    month_range,
    visible_window,
)
from daypicker.domain.selection_machine import SelectionPolicy, SelectionStateMachine
from daypicker.domain.shortcuts import Shortcut, ShortcutMatcher, preset_shortcuts
from daypicker.domain.styles import ResolvedLabelStyle, StyleSet
from daypicker.exceptions import PickerConfigurationError

if TYPE_CHECKING:
    from daypicker.config_loader import PickerConfig

logger = logging.getLogger(__name__)

DateInput = Union[datetime.datetime, datetime.date]
ChangeHandler = Callable[[SelectionValue], None]
CommitHandler = Callable[[SelectionCommit], None]


class PickerSession:
    """One picker presentation, from construction to commit or cancel."""

    def __init__(
        self,
        mode: SelectionMode,
        calendar: PickerCalendar,
        *,
        allow_nil_selection: bool = False,
        allow_range_edits: bool = True,
        bounds: Optional[DateBounds] = None,
        availability: Optional[AvailabilityFilter] = None,
        initial_value: Optional[SelectionValue] = None,
        shortcuts: Iterable[Shortcut] = (),
        close_on_selection: bool = False,
        select_month_on_header_tap: bool = False,
        only_current_month: bool = False,
        styles: Optional[StyleSet] = None,
        on_change: Iterable[ChangeHandler] = (),
        on_commit: Iterable[CommitHandler] = (),
        cache_size: int = 512,
    ):
        """Initialize session.

        Args:
            mode: Single or range selection
            calendar: Calendar capability shared with the rendering layer
            allow_nil_selection: Tapping the sole selected day again clears the selection
            allow_range_edits: Range mode only; False locks a multi-day range
            bounds: Selectable window (inverted bounds are swapped)
            availability: Available-days filter
            initial_value: Selection shown when the picker opens
            shortcuts: Presets offered as chips
            close_on_selection: Single mode only; commit as soon as a date is tapped
            select_month_on_header_tap: Range mode only; a month-header tap selects the month
            only_current_month: Stop the scrollable window exactly at the bounds
            styles: Cell styles used by label_style()
            on_change: Handlers called with every new selection value
            on_commit: Handlers called once with the final SelectionCommit
            cache_size: Maximum number of memoized cell states
        """
        try:
            self.mode = SelectionMode(mode)
        except ValueError as e:
            raise PickerConfigurationError(f"Unknown selection mode: {mode!r}") from e
        self.calendar = calendar
        self.policy = SelectionPolicy(
            mode=self.mode,
            allow_nil_selection=allow_nil_selection,
            allow_range_edits=allow_range_edits,
        )
        self.machine = SelectionStateMachine(self.policy, calendar)
        self.resolver = CellVisualStateResolver(calendar, bounds, availability)
        self.matcher = ShortcutMatcher(calendar)
        self.cache: ViewStateCache[CellViewState] = ViewStateCache(max_size=cache_size)
        self.styles = styles or StyleSet()
        self.close_on_selection = close_on_selection
        self.select_month_on_header_tap = select_month_on_header_tap
        self.only_current_month = only_current_month

        self.shortcuts = []
        for shortcut in shortcuts:
            if shortcut.mode != self.mode:
                logger.warning(
                    "Skipping %s shortcut %r in a %s picker",
                    shortcut.mode.value,
                    shortcut.name,
                    self.mode.value,
                )
                continue
            self.shortcuts.append(shortcut)

        self._change_handlers: list[ChangeHandler] = list(on_change)
        self._commit_handlers: list[CommitHandler] = list(on_commit)
        self._committed: Optional[SelectionCommit] = None
        self._value: SelectionValue = EMPTY
        self._active_shortcut: Optional[Shortcut] = None

        initial = self._normalize(initial_value) if initial_value is not None else EMPTY
        if not self._is_eligible(initial):
            logger.warning("Initial value %s is outside the selectable dates; ignoring", initial)
            initial = EMPTY
        self._value = initial
        self._active_shortcut = self._find_active_shortcut()

    @classmethod
    def from_config(
        cls,
        config: PickerConfig,
        calendar: Optional[PickerCalendar] = None,
        **kwargs,
    ) -> PickerSession:
        """Build a session from a loaded PickerConfig.

        Keyword arguments (handlers, initial_value, ...) are passed through.
        """
        calendar = calendar or PickerCalendar(
            timezone=config.timezone, first_weekday=config.first_weekday
        )
        mode = SelectionMode(config.mode)

        bounds = None
        if config.minimum_date is not None or config.maximum_date is not None:
            bounds = DateBounds(
                minimum=calendar.localize(config.minimum_date) if config.minimum_date else None,
                maximum=calendar.localize(config.maximum_date) if config.maximum_date else None,
            )
        availability = None
        if config.only_available_dates:
            availability = AvailabilityFilter.from_dates(config.available_days, calendar)

        return cls(
            mode,
            calendar,
            allow_nil_selection=config.allow_nil_selection,
            allow_range_edits=config.allow_range_edits,
            bounds=bounds,
            availability=availability,
            shortcuts=preset_shortcuts(config.shortcuts, mode),
            close_on_selection=config.close_on_selection,
            select_month_on_header_tap=config.select_month_on_header_tap,
            only_current_month=config.only_current_month,
            styles=StyleSet.from_mapping(config.styles),
            **kwargs,
        )

    # Read side

    @property
    def value(self) -> SelectionValue:
        return self._value

    @property
    def bounds(self) -> DateBounds:
        return self.resolver.bounds

    @property
    def availability(self) -> AvailabilityFilter:
        return self.resolver.availability

    @property
    def can_reset(self) -> bool:
        """True when there is a selection to clear."""
        return not isinstance(self._value, EmptySelection)

    @property
    def active_shortcut(self) -> Optional[Shortcut]:
        return self._active_shortcut

    @property
    def is_committed(self) -> bool:
        return self._committed is not None

    def cell_state(
        self, value: DateInput, membership: CellMembership, key: Optional[Hashable] = None
    ) -> CellViewState:
        """Return the view state of one cell.

        Args:
            value: Day shown in the cell
            membership: Month membership of the cell
            key: Cell position; when given the state is memoized until the next change

        Returns:
            CellViewState for the current selection
        """

        def compute() -> CellViewState:
            return self.resolver.resolve(value, membership, self._value)

        if key is None:
            return compute()
        return self.cache.get_or_compute(key, compute)

    def label_style(self, state: CellViewState) -> ResolvedLabelStyle:
        return self.styles.label_style(state)

    def visible_window(self) -> VisibleWindow:
        return visible_window(self.calendar, self.bounds, self.only_current_month)

    def month_grid(self, month: DateInput) -> list[list[GridCell]]:
        return month_grid(month, self.calendar, self.visible_window())

    def month_states(self, month: DateInput) -> list[list[tuple[GridCell, CellViewState]]]:
        """Lay out a month and resolve every cell through the cache."""
        displayed = self.calendar.day_of(month)
        rows = []
        for row in self.month_grid(displayed):
            rows.append(
                [
                    (
                        cell,
                        self.cell_state(
                            cell.date,
                            cell.membership,
                            key=(displayed.year, displayed.month, cell.row, cell.column),
                        ),
                    )
                    for cell in row
                ]
            )
        return rows

    def initial_month(self) -> datetime.date:
        """First day of the month to scroll to when the picker opens.

        The selected date or range start wins; otherwise the maximum bound when it
        lies in the past, otherwise today.
        """
        if isinstance(self._value, SingleDate):
            target = self._value.date
        elif isinstance(self._value, DateRange):
            target = self._value.from_date
        else:
            now = self.calendar.now()
            target = now
            maximum = self.bounds.maximum
            if maximum is not None and compare(maximum, now, self.calendar) < 0:
                target = maximum
        return start_of_month(target, self.calendar).date()

    # Handlers

    def add_change_handler(self, handler: ChangeHandler) -> None:
        self._change_handlers.append(handler)

    def add_commit_handler(self, handler: CommitHandler) -> None:
        self._commit_handlers.append(handler)

    # Write side

    def tap(self, value: DateInput) -> bool:
        """Handle a user tap on a day cell.

        Returns:
            True if the tap changed or confirmed the selection, False if it was ignored
        """
        if self.is_committed:
            logger.debug("Ignoring tap on %s: session already committed", value)
            return False
        if not self.resolver.is_enabled(value):
            logger.debug("Ignoring tap on disabled date %s", value)
            return False

        self._apply(self.machine.next_value(self._value, value))

        if (
            self.close_on_selection
            and self.mode == SelectionMode.SINGLE
            and isinstance(self._value, SingleDate)
        ):
            self.done()
        return True

    def select(self, value: SelectionValue) -> bool:
        """Apply a programmatic selection after validating it.

        Returns:
            False (selection unchanged) when the value falls outside the bounds or
            the available days
        """
        if self.is_committed:
            logger.debug("Ignoring selection %s: session already committed", value)
            return False
        normalized = self._normalize(value)
        if not self._is_eligible(normalized):
            logger.info("Ignoring selection %s: outside the selectable dates", normalized)
            return False
        self._apply(normalized)
        return True

    def select_shortcut(self, shortcut: Shortcut) -> bool:
        """Apply a preset; rejected like any programmatic selection when out of bounds."""
        if shortcut.mode != self.mode:
            logger.warning(
                "Shortcut %r is for %s pickers; ignoring", shortcut.name, shortcut.mode.value
            )
            return False
        return self.select(shortcut.value(self.calendar))

    def select_month(self, month: DateInput) -> bool:
        """Handle a month-header tap by selecting the month clamped to the bounds."""
        if self.mode != SelectionMode.RANGE or not self.select_month_on_header_tap:
            return False
        if self.is_committed:
            return False
        selected = month_range(month, self.bounds, self.calendar)
        if selected is None:
            logger.debug("Month of %s lies outside the bounds; ignoring header tap", month)
            return False
        if not self._has_available_day(selected):
            logger.debug("No available day in the month of %s; ignoring header tap", month)
            return False
        self._apply(selected)
        return True

    def clear(self) -> None:
        self._apply(EMPTY)

    def update_bounds(self, bounds: Optional[DateBounds]) -> None:
        """Replace the selectable window and drop every cached cell state."""
        self.resolver = CellVisualStateResolver(self.calendar, bounds, self.availability)
        self._invalidate()

    def update_availability(self, availability: Optional[AvailabilityFilter]) -> None:
        """Replace the availability filter and drop every cached cell state."""
        self.resolver = CellVisualStateResolver(self.calendar, self.bounds, availability)
        self._invalidate()

    def done(self) -> None:
        """Commit the current selection to the commit handlers."""
        value = None if isinstance(self._value, EmptySelection) else self._value
        self._commit(SelectionCommit.done(value))

    def cancel(self) -> None:
        self._commit(SelectionCommit.cancel())

    # Internals

    def _apply(self, value: SelectionValue) -> None:
        self._value = value
        self._invalidate()
        self._active_shortcut = self._find_active_shortcut()
        for handler in list(self._change_handlers):
            try:
                handler(value)
            except Exception:
                logger.exception("Selection change handler %r failed", handler)

    def _has_available_day(self, selected: DateRange) -> bool:
        availability = self.availability
        if not availability.only_available_dates:
            return True
        day = self.calendar.day_of(selected.from_date)
        last = self.calendar.day_of(selected.to_date)
        while day <= last:
            if availability.allows(day):
                return True
            day += datetime.timedelta(days=1)
        return False

    def _invalidate(self) -> None:
        self.cache.invalidate_all()

    def _commit(self, commit: SelectionCommit) -> None:
        if self._committed is not None:
            logger.warning("Session already committed (%s); ignoring %s", self._committed, commit)
            return
        self._committed = commit
        logger.debug("Session committed: %s", commit)
        for handler in list(self._commit_handlers):
            try:
                handler(commit)
            except Exception:
                logger.exception("Commit handler %r failed", handler)

    def _find_active_shortcut(self) -> Optional[Shortcut]:
        if not self.shortcuts or isinstance(self._value, EmptySelection):
            return None
        return self.matcher.find_active(self.shortcuts, self._value)

    def _normalize(self, value: SelectionValue) -> SelectionValue:
        """Convert a value to this session's mode and snap ranges to day boundaries."""
        calendar = self.calendar
        if isinstance(value, EmptySelection):
            return EMPTY
        if isinstance(value, SingleDate):
            if self.mode == SelectionMode.RANGE:
                return DateRange.single_day(value.date, calendar)
            return SingleDate(date=calendar.localize(value.date))
        if isinstance(value, DateRange):
            if self.mode == SelectionMode.SINGLE:
                return SingleDate(date=calendar.localize(value.from_date))
            return DateRange.spanning(value.from_date, value.to_date, calendar)
        raise PickerConfigurationError(f"Unsupported selection value: {value!r}")

    def _is_eligible(self, value: SelectionValue) -> bool:
        if isinstance(value, EmptySelection):
            return True
        if isinstance(value, SingleDate):
            return self.resolver.is_enabled(value.date)
        if isinstance(value, DateRange):
            return self.resolver.is_enabled(value.from_date) and self.resolver.is_enabled(
                value.to_date
            )
        return False
