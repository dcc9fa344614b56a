"""Unit tests for the tap-driven selection transitions."""

import datetime

import pytest

from daypicker.core.date_math import end_of_day, start_of_day
from daypicker.domain.models import EMPTY, DateRange, SelectionMode, SingleDate
from daypicker.domain.selection_machine import SelectionPolicy, SelectionStateMachine

pytestmark = pytest.mark.unit

UTC = datetime.UTC


def jan(day: int) -> datetime.date:
    return datetime.date(2025, 1, day)


def span(calendar, first: int, last: int) -> DateRange:
    return DateRange.spanning(jan(first), jan(last), calendar)


def machine(calendar, mode=SelectionMode.RANGE, **flags) -> SelectionStateMachine:
    return SelectionStateMachine(SelectionPolicy(mode=mode, **flags), calendar)


class TestSingleMode:
    """Single-date transitions."""

    def test_tap_on_empty_selects_date(self, utc_calendar):
        result = machine(utc_calendar, SelectionMode.SINGLE).next_value(EMPTY, jan(5))

        assert result == SingleDate(date=datetime.datetime(2025, 1, 5, tzinfo=UTC))

    def test_tap_replaces_previous_date(self, utc_calendar):
        single = machine(utc_calendar, SelectionMode.SINGLE)
        current = SingleDate(date=datetime.datetime(2025, 1, 5, tzinfo=UTC))

        result = single.next_value(current, jan(9))

        assert result.date.date() == jan(9)

    def test_repeated_tap_is_idempotent_without_nil(self, utc_calendar):
        single = machine(utc_calendar, SelectionMode.SINGLE)

        first = single.next_value(EMPTY, jan(5))
        second = single.next_value(first, jan(5))

        assert second == first

    def test_repeated_tap_clears_with_nil(self, utc_calendar):
        single = machine(utc_calendar, SelectionMode.SINGLE, allow_nil_selection=True)

        first = single.next_value(EMPTY, jan(5))

        assert single.next_value(first, datetime.datetime(2025, 1, 5, 18, 0)) == EMPTY

    def test_nil_toggle_only_for_same_day(self, utc_calendar):
        single = machine(utc_calendar, SelectionMode.SINGLE, allow_nil_selection=True)

        first = single.next_value(EMPTY, jan(5))

        assert single.next_value(first, jan(6)) == SingleDate(
            date=datetime.datetime(2025, 1, 6, tzinfo=UTC)
        )


class TestRangeMode:
    """Anchor-drag range transitions."""

    def test_first_tap_starts_degenerate_range(self, utc_calendar):
        result = machine(utc_calendar).next_value(EMPTY, jan(10))

        assert result == span(utc_calendar, 10, 10)

    def test_single_date_value_restarts_range(self, utc_calendar):
        current = SingleDate(date=datetime.datetime(2025, 1, 3, tzinfo=UTC))

        assert machine(utc_calendar).next_value(current, jan(10)) == span(utc_calendar, 10, 10)

    def test_extend_right_from_degenerate(self, utc_calendar):
        result = machine(utc_calendar).next_value(span(utc_calendar, 5, 5), jan(10))

        assert result == span(utc_calendar, 5, 10)

    def test_extend_left_from_degenerate(self, utc_calendar):
        result = machine(utc_calendar).next_value(span(utc_calendar, 5, 5), jan(1))

        assert result == span(utc_calendar, 1, 5)

    def test_tap_on_from_collapses_to_from_day(self, utc_calendar):
        result = machine(utc_calendar).next_value(span(utc_calendar, 1, 10), jan(1))

        assert result == span(utc_calendar, 1, 1)
        assert result.to_date == end_of_day(jan(1), utc_calendar)

    def test_tap_on_to_collapses_to_to_day(self, utc_calendar):
        result = machine(utc_calendar).next_value(span(utc_calendar, 1, 10), jan(10))

        assert result == span(utc_calendar, 10, 10)
        assert result.from_date == start_of_day(jan(10), utc_calendar)

    def test_tap_inside_range_moves_right_edge(self, utc_calendar):
        result = machine(utc_calendar).next_value(span(utc_calendar, 1, 10), jan(4))

        assert result == span(utc_calendar, 1, 4)

    def test_tap_after_range_extends_right(self, utc_calendar):
        result = machine(utc_calendar).next_value(span(utc_calendar, 1, 10), jan(20))

        assert result == span(utc_calendar, 1, 20)

    def test_tap_before_range_extends_left(self, utc_calendar):
        result = machine(utc_calendar).next_value(span(utc_calendar, 5, 10), jan(2))

        assert result == span(utc_calendar, 2, 10)

    def test_locked_range_restarts_on_tap(self, utc_calendar):
        locked = machine(utc_calendar, allow_range_edits=False)

        assert locked.next_value(span(utc_calendar, 1, 10), jan(15)) == span(utc_calendar, 15, 15)
        assert locked.next_value(span(utc_calendar, 1, 10), jan(5)) == span(utc_calendar, 5, 5)

    def test_locked_flag_still_allows_extending_degenerate_range(self, utc_calendar):
        locked = machine(utc_calendar, allow_range_edits=False)

        assert locked.next_value(span(utc_calendar, 5, 5), jan(10)) == span(utc_calendar, 5, 10)

    def test_degenerate_range_tapped_again_clears_with_nil(self, utc_calendar):
        nil = machine(utc_calendar, allow_nil_selection=True)

        first = nil.next_value(EMPTY, jan(5))

        assert nil.next_value(first, jan(5)) == EMPTY

    def test_degenerate_range_tapped_again_is_stable_without_nil(self, utc_calendar):
        ranges = machine(utc_calendar)

        first = ranges.next_value(EMPTY, jan(5))

        assert ranges.next_value(first, jan(5)) == first

    def test_nil_does_not_clear_multi_day_range(self, utc_calendar):
        nil = machine(utc_calendar, allow_nil_selection=True)

        assert nil.next_value(span(utc_calendar, 1, 10), jan(1)) == span(utc_calendar, 1, 1)

    def test_every_result_is_an_ordered_day_boundary_pair(self, utc_calendar):
        ranges = machine(utc_calendar)
        value = EMPTY
        taps = [
            jan(10),
            jan(3),
            datetime.datetime(2025, 1, 20, 17, 30),
            jan(3),
            jan(28),
            jan(12),
            jan(1),
        ]

        for tapped in taps:
            value = ranges.next_value(value, tapped)
            assert value.from_date <= value.to_date
            assert value.from_date == start_of_day(value.from_date, utc_calendar)
            assert value.to_date == end_of_day(value.to_date, utc_calendar)

    def test_tap_in_other_timezone_uses_local_day(self, new_york_calendar):
        ranges = machine(new_york_calendar)

        # 03:00 UTC on the 6th is the 5th in New York
        result = ranges.next_value(EMPTY, datetime.datetime(2025, 1, 6, 3, 0, tzinfo=UTC))

        assert result.from_date.date() == datetime.date(2025, 1, 5)
