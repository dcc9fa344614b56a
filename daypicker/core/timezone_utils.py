"""Clock and timezone helpers for daypicker."""

from __future__ import annotations

import datetime
import logging
import os
import zoneinfo
from functools import lru_cache

from dateutil import parser as date_parser

from daypicker.exceptions import PickerTimezoneError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"

TEST_TIME_ENV_VAR = "DAYPICKER_TEST_TIME"
TIMEZONE_ENV_VAR = "DAYPICKER_TIMEZONE"


class TimeProvider:
    """Wall clock that a test can pin through an environment variable."""

    def __init__(self, env_var: str = TEST_TIME_ENV_VAR):
        """Initialize time provider.

        Args:
            env_var: Variable holding an ISO 8601 instant, e.g. "2025-01-15T08:20:00-08:00"
        """
        self.env_var = env_var

    def _pinned(self) -> datetime.datetime | None:
        raw = os.environ.get(self.env_var)
        if not raw:
            return None
        try:
            pinned = date_parser.isoparse(raw)
        except (ValueError, OverflowError) as e:
            logger.warning("Failed to parse %s=%r, using the real clock: %s", self.env_var, raw, e)
            return None
        # Naive values are taken as UTC
        if pinned.tzinfo is None:
            return pinned.replace(tzinfo=datetime.UTC)
        return pinned.astimezone(datetime.UTC)

    def now_utc(self) -> datetime.datetime:
        """Return the pinned instant when set, otherwise the real current time (aware, UTC)."""
        return self._pinned() or datetime.datetime.now(datetime.UTC)


_time_provider = TimeProvider()


def now_utc() -> datetime.datetime:
    """Default clock for PickerCalendar."""
    return _time_provider.now_utc()


@lru_cache(maxsize=32)
def resolve_zone(tz_name: str) -> zoneinfo.ZoneInfo:
    """Look up an IANA timezone.

    Args:
        tz_name: Zone identifier such as "Europe/Madrid"

    Returns:
        ZoneInfo for the name

    Raises:
        PickerTimezoneError: If the name is empty or not in the tz database
    """
    if not tz_name:
        raise PickerTimezoneError("Timezone name must not be empty")
    try:
        return zoneinfo.ZoneInfo(tz_name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
        raise PickerTimezoneError(f"Unknown timezone: {tz_name!r}") from e


def get_default_timezone(fallback: str = DEFAULT_TIMEZONE) -> str:
    """Timezone for configs that do not name one.

    Reads DAYPICKER_TIMEZONE and returns ``fallback`` when it is unset or does
    not resolve.
    """
    candidate = os.environ.get(TIMEZONE_ENV_VAR, fallback)
    try:
        resolve_zone(candidate)
    except PickerTimezoneError:
        logger.warning("Invalid timezone %r in %s, using %r", candidate, TIMEZONE_ENV_VAR, fallback)
        return fallback
    return candidate
