"""daypicker - selection engine for a date / date-range picker.

The package turns date taps into selection values and derives the visual state
of every calendar cell. Rendering is left to the host UI; ``python -m daypicker``
prints a month grid for a scripted tap sequence. Imports are kept light so the
package can be inspected without pulling in its runtime dependencies.
"""

__version__ = "0.1.0"

from typing import Optional

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
_COLOR_CONSOLE_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s [%(name)s] %(message)s"
_LEVEL_COLORS = {
    "DEBUG": "blue",
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def _console_formatter():
    import logging

    try:
        from colorlog import ColoredFormatter
    except ImportError:
        return logging.Formatter(_CONSOLE_FORMAT, datefmt="%H:%M:%S")
    return ColoredFormatter(_COLOR_CONSOLE_FORMAT, datefmt="%H:%M:%S", log_colors=_LEVEL_COLORS)


def _init_logging(level_name: Optional[str]) -> None:
    """Send picker logs to stderr at ``level_name`` (INFO when unknown).

    DAYPICKER_DEBUG set to a truthy value forces DEBUG. A console handler is
    attached only when the root logger has none, so host applications keep
    their own handlers.
    """
    import logging
    import os
    import sys

    if os.environ.get("DAYPICKER_DEBUG", "").strip().lower() in _TRUTHY:
        level_name = "DEBUG"

    root = logging.getLogger()
    if not root.handlers:
        console = logging.StreamHandler(stream=sys.stderr)
        console.setFormatter(_console_formatter())
        root.addHandler(console)

    level = logging.getLevelName((level_name or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO
    root.setLevel(level)
    logging.getLogger(__name__).debug("Console logging at %s", logging.getLevelName(level))
