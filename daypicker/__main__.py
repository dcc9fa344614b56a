"""Command-line entry for daypicker.

Replays a scripted sequence of taps against a picker session and prints the
resulting month grid as text, one five-character cell per day:

    left edge   " " hidden, "=" squared, "(" rounded
    marker      "*" endpoint highlight, "!" today, "x" disabled
    day number  blank for adjacent-month filler cells
    right edge  " " hidden, "=" squared, ")" rounded
"""

from __future__ import annotations

import argparse
import calendar as std_calendar
import datetime
import logging
import os
import sys
from typing import NoReturn, Optional

from . import _init_logging
from .config_loader import PickerConfig, load_config
from .core.config_manager import ConfigManager
from .core.date_math import PickerCalendar
from .domain.models import CellViewState, DateRange, RangeSideState, SingleDate
from .domain.shortcuts import preset_shortcuts
from .exceptions import PickerError
from .picker_logging import configure_picker_logging
from .session import PickerSession

logger = logging.getLogger(__name__)

_LEFT_EDGE = {RangeSideState.HIDDEN: " ", RangeSideState.SQUARED: "=", RangeSideState.ROUNDED: "("}
_RIGHT_EDGE = {RangeSideState.HIDDEN: " ", RangeSideState.SQUARED: "=", RangeSideState.ROUNDED: ")"}


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the daypicker CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="daypicker",
        description="daypicker - replay taps and print the resulting month grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m daypicker --mode range --tap 2025-01-05 --tap 2025-01-10
  python -m daypicker --config picker.yaml --month 2025-02 --shortcut last_week
        """,
    )
    parser.add_argument("--config", metavar="PATH", help="YAML/JSON config file")
    parser.add_argument("--mode", choices=["single", "range"], help="Selection mode")
    parser.add_argument("--timezone", metavar="TZ", help="IANA timezone")
    parser.add_argument(
        "--first-weekday", type=int, metavar="N", help="First weekday (1=Sunday .. 7=Saturday)"
    )
    parser.add_argument("--month", metavar="YYYY-MM", help="Month to print")
    parser.add_argument(
        "--tap", action="append", default=[], metavar="YYYY-MM-DD", help="Tap a date (repeatable)"
    )
    parser.add_argument("--select-month", metavar="YYYY-MM", help="Tap a month header")
    parser.add_argument("--shortcut", metavar="NAME", help="Apply a built-in preset")
    parser.add_argument("--allow-nil", action="store_true", help="Allow clearing by re-tapping")
    parser.add_argument(
        "--lock-ranges", action="store_true", help="Disable editing of multi-day ranges"
    )
    parser.add_argument("--done", action="store_true", help="Print the committed value as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def _parse_month(raw: str) -> datetime.date:
    year, month = raw.split("-", 1)
    return datetime.date(int(year), int(month), 1)


def _build_config(args: argparse.Namespace) -> PickerConfig:
    base = vars(load_config(args.config)).copy()
    merged = ConfigManager().load_full_config(base)
    if args.mode:
        merged["mode"] = args.mode
    if args.timezone:
        merged["timezone"] = args.timezone
    if args.first_weekday is not None:
        merged["first_weekday"] = args.first_weekday
    if args.allow_nil:
        merged["allow_nil_selection"] = True
    if args.lock_ranges:
        merged["allow_range_edits"] = False
    if args.select_month:
        merged["select_month_on_header_tap"] = True
    registered = list(merged.get("shortcuts") or [])
    if args.shortcut and args.shortcut not in registered:
        merged["shortcuts"] = [*registered, args.shortcut]
    return PickerConfig.from_dict(merged)


def render_cell(state: CellViewState) -> str:
    """Render one cell as five characters."""
    if state.label_text is None:
        body = "   "
    else:
        if state.selected_highlight_visible:
            marker = "*"
        elif state.is_today:
            marker = "!"
        elif not state.enabled:
            marker = "x"
        else:
            marker = " "
        body = marker + state.label_text.rjust(2)
    return _LEFT_EDGE[state.left_side] + body + _RIGHT_EDGE[state.right_side]


def render_month(session: PickerSession, month: datetime.date) -> str:
    """Render a month grid with a title line and a weekday header."""
    lines = [f"{std_calendar.month_name[month.month]} {month.year}".center(35).rstrip()]
    lines.append("".join(symbol[:3].center(5) for symbol in session.calendar.weekday_symbols()))
    for row in session.month_states(month):
        lines.append("".join(render_cell(state) for _, state in row).rstrip())
    return "\n".join(lines)


def _describe(session: PickerSession) -> str:
    value = session.value
    if isinstance(value, SingleDate):
        text = f"selection: {value.date.date().isoformat()}"
    elif isinstance(value, DateRange):
        start, end = value.from_date.date(), value.to_date.date()
        text = f"selection: {start.isoformat()} .. {end.isoformat()}"
    else:
        text = "selection: (empty)"
    if session.active_shortcut is not None:
        text += f" [{session.active_shortcut.name}]"
    return text


def main(argv: Optional[list[str]] = None) -> NoReturn:
    """Run the daypicker CLI."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    # config loading logs through the environment level until the file level is known
    _init_logging(os.environ.get("DAYPICKER_LOG_LEVEL"))

    try:
        config = _build_config(args)
        configure_picker_logging(debug_mode=args.debug, root_level=config.log_level)
        calendar = PickerCalendar(timezone=config.timezone, first_weekday=config.first_weekday)
        session = PickerSession.from_config(config, calendar)
    except (PickerError, ValueError, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    try:
        if args.shortcut:
            wanted = preset_shortcuts([args.shortcut], session.mode)
            shortcut = next((s for s in session.shortcuts if s in wanted), None)
            if shortcut is None or not session.select_shortcut(shortcut):
                print(f"Shortcut {args.shortcut!r} was not applied", file=sys.stderr)
        if args.select_month and not session.select_month(_parse_month(args.select_month)):
            print(f"Month {args.select_month} was not selected", file=sys.stderr)
        for raw in args.tap:
            if not session.tap(datetime.date.fromisoformat(raw)):
                print(f"Tap on {raw} was ignored", file=sys.stderr)
        month = _parse_month(args.month) if args.month else session.initial_month()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    print(render_month(session, month))
    print(_describe(session))

    if args.done:
        session.add_commit_handler(lambda commit: print(commit.model_dump_json()))
        session.done()
    sys.exit(0)


if __name__ == "__main__":
    main()
