"""Logger levels for the daypicker modules.

The picker's own loggers run at INFO, or DEBUG when asked for; the root level
can be pinned from the environment while troubleshooting a host application.
"""

import logging
import os
from typing import Optional

PICKER_MODULES = [
    "daypicker",
    "daypicker.session",
    "daypicker.domain.selection_machine",
    "daypicker.domain.cell_resolver",
    "daypicker.core.view_state_cache",
]

_ROOT_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _debug_requested(debug_mode: bool, force_debug: Optional[bool]) -> bool:
    if force_debug is not None:
        return force_debug
    if os.getenv("DAYPICKER_DEBUG", "").lower() in ("1", "true", "yes"):
        return True
    return debug_mode


def configure_picker_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    root_level: Optional[str] = None,
) -> None:
    """
    Set root and picker logger levels.

    Args:
        debug_mode: Run the picker modules at DEBUG
        force_debug: Takes precedence over both debug_mode and DAYPICKER_DEBUG when not None
        root_level: Root level name, e.g. from PickerConfig.log_level; overrides
            DAYPICKER_LOG_LEVEL

    Environment Variables:
        DAYPICKER_DEBUG: '1', 'true' or 'yes' turns on debug_mode
        DAYPICKER_LOG_LEVEL: Pins the root level (DEBUG .. CRITICAL) when root_level is unset
    """
    debug = _debug_requested(debug_mode, force_debug)
    picker_level = logging.DEBUG if debug else logging.INFO

    pinned = (root_level or os.getenv("DAYPICKER_LOG_LEVEL", "")).upper()
    effective = getattr(logging, pinned) if pinned in _ROOT_LEVEL_NAMES else picker_level

    root = logging.getLogger()
    root.setLevel(effective)
    if not root.handlers:
        fallback = logging.StreamHandler()
        fallback.setLevel(effective)
        fallback.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
        )
        root.addHandler(fallback)

    for name in PICKER_MODULES:
        logging.getLogger(name).setLevel(picker_level)

    root.log(
        logging.INFO if debug else logging.DEBUG,
        "daypicker loggers set to %s (root %s)",
        logging.getLevelName(picker_level),
        logging.getLevelName(effective),
    )


def get_logging_status() -> dict[str, str]:
    """
    Report the effective configuration.

    Returns:
        Level name per logger, keyed "root" plus each PICKER_MODULES entry
    """
    names = ["", *PICKER_MODULES]
    return {
        name or "root": logging.getLevelName(logging.getLogger(name).level) for name in names
    }
