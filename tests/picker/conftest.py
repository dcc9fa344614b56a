"""Fixtures shared by the picker tests."""

import datetime
import logging
import os
from collections.abc import Generator
from typing import Any, Callable

import pytest

from daypicker.core.date_math import MONDAY, PickerCalendar
from daypicker.picker_logging import PICKER_MODULES

# Wednesday, mid-January
FROZEN_NOW = datetime.datetime(2025, 1, 15, 12, 0, tzinfo=datetime.UTC)


@pytest.fixture
def frozen_clock() -> Callable[[], datetime.datetime]:
    """Clock pinned to FROZEN_NOW so "today" is deterministic."""
    return lambda: FROZEN_NOW


@pytest.fixture
def utc_calendar(frozen_clock: Callable[[], datetime.datetime]) -> PickerCalendar:
    """Sunday-first UTC calendar with a frozen clock."""
    return PickerCalendar("UTC", clock=frozen_clock)


@pytest.fixture
def monday_calendar(frozen_clock: Callable[[], datetime.datetime]) -> PickerCalendar:
    """Monday-first UTC calendar with a frozen clock."""
    return PickerCalendar("UTC", first_weekday=MONDAY, clock=frozen_clock)


@pytest.fixture
def new_york_calendar(frozen_clock: Callable[[], datetime.datetime]) -> PickerCalendar:
    """Sunday-first calendar in a zone with DST transitions."""
    return PickerCalendar("America/New_York", clock=frozen_clock)


@pytest.fixture(autouse=True)
def clean_picker_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Clear DAYPICKER_* variables around each test.

    ConfigManager.load_env_file writes to os.environ directly, so anything it
    leaves behind is popped after the test.
    """
    for key in list(os.environ):
        if key.startswith("DAYPICKER_"):
            monkeypatch.delenv(key)
    yield
    for key in list(os.environ):
        if key.startswith("DAYPICKER_"):
            os.environ.pop(key, None)


@pytest.fixture(autouse=True)
def restore_logging_levels() -> Generator[None, Any, None]:
    """Undo level changes made by the logging setup helpers."""
    names = ["", *PICKER_MODULES]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)
