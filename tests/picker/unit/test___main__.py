"""Tests for the daypicker command-line entry."""

import calendar
import json
import logging

import pytest

from daypicker.__main__ import _create_parser, main, render_cell
from daypicker.domain.models import CellViewState, RangeSideState

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty directory so no stray .env or daypicker.yaml is read."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DAYPICKER_TEST_TIME", "2025-01-15T12:00:00Z")


def run(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    captured = capsys.readouterr()
    return exc_info.value.code, captured.out, captured.err


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = _create_parser().parse_args([])

        assert args.mode is None
        assert args.tap == []
        assert not args.done

    def test_repeated_taps(self):
        args = _create_parser().parse_args(["--tap", "2025-01-05", "--tap", "2025-01-09"])

        assert args.tap == ["2025-01-05", "2025-01-09"]

    def test_rejects_unknown_mode(self):
        with pytest.raises(SystemExit):
            _create_parser().parse_args(["--mode", "multi"])


class TestRenderCell:
    """Tests for the text cell format."""

    def test_filler_cell(self):
        assert render_cell(CellViewState()) == "     "

    def test_highlighted_left_endpoint(self):
        state = CellViewState(
            label_text="6",
            enabled=True,
            selected_highlight_visible=True,
            right_side=RangeSideState.SQUARED,
        )

        assert render_cell(state) == " * 6="

    def test_rounded_middle_day(self):
        state = CellViewState(
            label_text="12",
            enabled=True,
            left_side=RangeSideState.ROUNDED,
            right_side=RangeSideState.SQUARED,
        )

        assert render_cell(state) == "( 12="

    def test_disabled_and_today_markers(self):
        assert render_cell(CellViewState(label_text="3")) == " x 3 "
        assert render_cell(CellViewState(label_text="15", enabled=True, is_today=True)) == " !15 "


class TestMain:
    """Tests for the CLI run."""

    def test_range_taps(self, capsys):
        code, out, _ = run(
            ["--mode", "range", "--month", "2025-01", "--tap", "2025-01-06", "--tap", "2025-01-09"],
            capsys,
        )

        assert code == 0
        assert "January 2025" in out
        assert "selection: 2025-01-06 .. 2025-01-09" in out
        assert " * 6=" in out

    def test_defaults_to_current_month(self, capsys):
        code, out, _ = run([], capsys)

        assert code == 0
        assert "January 2025" in out
        assert "selection: (empty)" in out

    def test_shortcut_and_done(self, capsys):
        code, out, _ = run(["--mode", "range", "--shortcut", "last_week", "--done"], capsys)

        assert code == 0
        assert "[Last week]" in out
        commit = json.loads(out.strip().splitlines()[-1])
        assert commit["cancelled"] is False
        assert commit["value"]["kind"] == "range"
        assert commit["value"]["from_date"].startswith("2025-01-08")

    def test_unknown_shortcut_is_reported(self, capsys):
        code, _, err = run(["--shortcut", "someday"], capsys)

        assert code == 0
        assert "someday" in err

    def test_select_month(self, capsys):
        code, out, _ = run(["--mode", "range", "--select-month", "2025-02"], capsys)

        assert code == 0
        assert "February 2025" in out
        assert "selection: 2025-02-01 .. 2025-02-28" in out

    def test_config_file(self, tmp_path, capsys):
        config = tmp_path / "picker.yaml"
        config.write_text("mode: range\nfirst_weekday: 2\n")

        code, out, _ = run(["--config", str(config), "--month", "2025-01"], capsys)

        assert code == 0
        header = out.splitlines()[1]
        assert header.split()[0] == calendar.day_abbr[0][:3]

    def test_default_config_file_in_working_directory(self, tmp_path, capsys):
        (tmp_path / "daypicker.yaml").write_text("mode: range\n")

        code, out, _ = run(["--tap", "2025-01-06", "--tap", "2025-01-09"], capsys)

        assert code == 0
        assert "selection: 2025-01-06 .. 2025-01-09" in out

    def test_config_log_level_sets_root_level(self, tmp_path, capsys):
        config = tmp_path / "picker.yaml"
        config.write_text("log_level: ERROR\n")

        code, _, _ = run(["--config", str(config)], capsys)

        assert code == 0
        assert logging.getLogger().level == logging.ERROR

    def test_configured_shortcut_is_reported_active(self, tmp_path, capsys):
        (tmp_path / "daypicker.yaml").write_text("mode: range\nshortcuts: [last_week]\n")

        code, out, _ = run(["--shortcut", "last_week"], capsys)

        assert code == 0
        assert "selection: 2025-01-08 .. 2025-01-15 [Last week]" in out

    def test_invalid_timezone_exits_with_error(self, capsys):
        code, _, err = run(["--timezone", "Nowhere/Special"], capsys)

        assert code == 2
        assert "Error" in err

    def test_invalid_tap_date(self, capsys):
        code, _, err = run(["--tap", "2025-13-40"], capsys)

        assert code == 2
        assert "Error" in err
