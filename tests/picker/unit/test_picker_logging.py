"""Tests for daypicker logging setup."""

import logging

import pytest

from daypicker import _init_logging
from daypicker.picker_logging import (
    PICKER_MODULES,
    configure_picker_logging,
    get_logging_status,
)

pytestmark = pytest.mark.unit


def test_production_levels():
    configure_picker_logging()

    assert logging.getLogger().level == logging.INFO
    for name in PICKER_MODULES:
        assert logging.getLogger(name).level == logging.INFO


def test_debug_mode_enables_picker_debug():
    configure_picker_logging(debug_mode=True)

    assert logging.getLogger("daypicker.session").level == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_env_debug_flag(monkeypatch):
    monkeypatch.setenv("DAYPICKER_DEBUG", "true")

    configure_picker_logging()

    assert logging.getLogger("daypicker").level == logging.DEBUG


def test_force_debug_overrides_env(monkeypatch):
    monkeypatch.setenv("DAYPICKER_DEBUG", "1")

    configure_picker_logging(debug_mode=True, force_debug=False)

    assert logging.getLogger("daypicker").level == logging.INFO


def test_env_log_level_overrides_root(monkeypatch):
    monkeypatch.setenv("DAYPICKER_LOG_LEVEL", "warning")

    configure_picker_logging(debug_mode=True)

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("daypicker").level == logging.DEBUG


def test_configured_root_level_overrides_env(monkeypatch):
    monkeypatch.setenv("DAYPICKER_LOG_LEVEL", "warning")

    configure_picker_logging(root_level="error")

    assert logging.getLogger().level == logging.ERROR
    assert logging.getLogger("daypicker.session").level == logging.INFO


def test_get_logging_status():
    configure_picker_logging()

    status = get_logging_status()

    assert status["root"] == "INFO"
    assert set(PICKER_MODULES) <= set(status)
    assert status["daypicker.session"] == "INFO"


def test_init_logging_sets_root_level():
    _init_logging("warning")

    assert logging.getLogger().level == logging.WARNING


def test_init_logging_debug_env(monkeypatch):
    monkeypatch.setenv("DAYPICKER_DEBUG", "yes")

    _init_logging("ERROR")

    assert logging.getLogger().level == logging.DEBUG


def test_init_logging_unknown_level_defaults_to_info():
    _init_logging("chatty")

    assert logging.getLogger().level == logging.INFO
