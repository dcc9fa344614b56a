"""Unit tests for daypicker.core.timezone_utils."""

import datetime
import logging
import zoneinfo

import pytest

from daypicker.core.timezone_utils import (
    TimeProvider,
    get_default_timezone,
    now_utc,
    resolve_zone,
)
from daypicker.exceptions import PickerTimezoneError

pytestmark = pytest.mark.unit


class TestTimeProvider:
    """Tests for the test-time override."""

    def test_override_with_offset_is_converted_to_utc(self, monkeypatch):
        monkeypatch.setenv("DAYPICKER_TEST_TIME", "2025-01-15T08:20:00-08:00")

        assert now_utc() == datetime.datetime(2025, 1, 15, 16, 20, tzinfo=datetime.UTC)

    def test_naive_override_is_read_as_utc(self, monkeypatch):
        monkeypatch.setenv("DAYPICKER_TEST_TIME", "2025-01-15T08:20:00")

        result = now_utc()

        assert result.tzinfo == datetime.UTC
        assert result.hour == 8

    def test_invalid_override_falls_back_to_real_time(self, monkeypatch, caplog):
        monkeypatch.setenv("DAYPICKER_TEST_TIME", "not-a-date")
        before = datetime.datetime.now(datetime.UTC)

        with caplog.at_level(logging.WARNING):
            result = now_utc()

        assert result >= before
        assert "Failed to parse" in caplog.text

    def test_custom_env_var(self, monkeypatch):
        monkeypatch.setenv("PICKER_CLOCK", "2024-02-29T00:00:00Z")
        provider = TimeProvider(env_var="PICKER_CLOCK")

        assert provider.now_utc().date() == datetime.date(2024, 2, 29)

    def test_real_time_is_aware(self):
        assert now_utc().tzinfo == datetime.UTC


class TestResolveZone:
    """Tests for IANA name resolution."""

    def test_known_zone(self):
        assert resolve_zone("Europe/Madrid") == zoneinfo.ZoneInfo("Europe/Madrid")

    @pytest.mark.parametrize("name", ["", "Not/AZone"])
    def test_invalid_zone_raises(self, name):
        with pytest.raises(PickerTimezoneError):
            resolve_zone(name)


class TestGetDefaultTimezone:
    """Tests for the environment timezone lookup."""

    def test_uses_fallback_when_unset(self):
        assert get_default_timezone() == "UTC"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DAYPICKER_TIMEZONE", "Asia/Tokyo")

        assert get_default_timezone() == "Asia/Tokyo"

    def test_invalid_environment_value_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("DAYPICKER_TIMEZONE", "Mars/Olympus")

        with caplog.at_level(logging.WARNING):
            assert get_default_timezone("Europe/Paris") == "Europe/Paris"

        assert "Invalid timezone" in caplog.text
