"""daypicker.config_loader

Config loader for daypicker.

- Prefers YAML (PyYAML) if available, falls back to JSON.
- Exposes a typed dataclass `PickerConfig` and a `load_config()` helper that
  accepts an optional path override.
"""

from __future__ import annotations

import datetime
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from daypicker.core.timezone_utils import DEFAULT_TIMEZONE, get_default_timezone

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("daypicker.yaml")

VALID_MODES = ("single", "range")


@dataclass
class PickerConfig:
    """Typed configuration for a picker session.

    Fields:
        mode: "single" or "range"
        timezone: IANA timezone used for day boundaries
        first_weekday: first column of the week (1=Sunday .. 7=Saturday)
        allow_nil_selection: tapping the sole selected day again clears it
        allow_range_edits: range mode only; False locks multi-day ranges
        close_on_selection: single mode only; commit on the first tap
        select_month_on_header_tap: range mode only; header tap selects the month
        only_current_month: stop scrolling exactly at the bounds
        minimum_date / maximum_date: optional selectable window
        only_available_dates / available_days: explicit available-days filter
        shortcuts: built-in preset names ("today", "last_week", ...)
        log_level: logging level name
        styles: raw mapping for StyleSet
    """

    mode: str = "single"
    timezone: str = DEFAULT_TIMEZONE
    first_weekday: int = 1
    allow_nil_selection: bool = False
    allow_range_edits: bool = True
    close_on_selection: bool = False
    select_month_on_header_tap: bool = False
    only_current_month: bool = False
    minimum_date: Optional[datetime.date] = None
    maximum_date: Optional[datetime.date] = None
    only_available_dates: bool = False
    available_days: list[datetime.date] = field(default_factory=list)
    shortcuts: list[str] = field(default_factory=list)
    log_level: str = "INFO"
    styles: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> PickerConfig:
        """Create PickerConfig from a plain mapping, applying defaults and validation.

        Conservative about types: coerces numeric-like values to int and truthy
        strings to bool, drops unparsable dates, and falls back to defaults for
        out-of-range values, logging a warning for every coercion.
        """
        if data is None:
            data = {}

        mode = str(data.get("mode", "single")).lower()
        if mode not in VALID_MODES:
            logger.warning("Config mode=%r is unknown; using 'single'", mode)
            mode = "single"

        first_weekday = _coerce_int(data, "first_weekday", 1)
        if not 1 <= first_weekday <= 7:
            logger.warning("Config first_weekday=%d outside 1..7; using 1", first_weekday)
            first_weekday = 1

        timezone = data.get("timezone") or get_default_timezone()

        available_raw = data.get("available_days") or []
        if not isinstance(available_raw, (list, tuple)):
            logger.warning("Config `available_days` is not a list; coercing to single-item list")
            available_raw = [available_raw]
        available_days = [
            d for d in (_coerce_date("available_days", raw) for raw in available_raw) if d
        ]

        shortcuts_raw = data.get("shortcuts") or []
        if not isinstance(shortcuts_raw, (list, tuple)):
            shortcuts_raw = [shortcuts_raw]

        styles = data.get("styles") or {}
        if not isinstance(styles, dict):
            logger.warning("Config `styles` is not a mapping; ignoring")
            styles = {}

        log_level = data.get("log_level", "INFO")
        log_level = str(log_level).upper() if log_level is not None else "INFO"

        return cls(
            mode=mode,
            timezone=str(timezone),
            first_weekday=first_weekday,
            allow_nil_selection=_coerce_bool(data, "allow_nil_selection", False),
            allow_range_edits=_coerce_bool(data, "allow_range_edits", True),
            close_on_selection=_coerce_bool(data, "close_on_selection", False),
            select_month_on_header_tap=_coerce_bool(data, "select_month_on_header_tap", False),
            only_current_month=_coerce_bool(data, "only_current_month", False),
            minimum_date=_coerce_date("minimum_date", data.get("minimum_date")),
            maximum_date=_coerce_date("maximum_date", data.get("maximum_date")),
            only_available_dates=_coerce_bool(data, "only_available_dates", False),
            available_days=available_days,
            shortcuts=[str(s) for s in shortcuts_raw],
            log_level=log_level,
            styles=styles,
        )


def _coerce_int(data: dict[str, Any], key: str, default: int) -> int:
    raw = data.get(key, default)
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Config %s=%r is not an int; using default %d", key, raw, default)
        return default


def _coerce_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    raw = data.get(key, default)
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off", ""):
            return False
    if isinstance(raw, int):
        return bool(raw)
    logger.warning("Config %s=%r is not a boolean; using default %s", key, raw, default)
    return default


def _coerce_date(key: str, raw: Any) -> Optional[datetime.date]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime.datetime):
        return raw.date()
    if isinstance(raw, datetime.date):
        return raw
    try:
        return datetime.date.fromisoformat(str(raw))
    except ValueError:
        logger.warning("Config %s=%r is not an ISO date; ignoring", key, raw)
        return None


def _load_yaml_or_json(path: Path) -> Any:
    """
    Load a mapping from a YAML or JSON file.

    Prefers PyYAML; falls back to JSON and raises a helpful error if neither works.
    """
    text = path.read_text(encoding="utf-8")
    try:
        import yaml  # noqa: PLC0415
    except ImportError:
        try:
            return json.loads(text)
        except ValueError as exc:
            raise RuntimeError(
                "Unable to parse config: PyYAML not installed and file is not valid JSON. "
                "Install pyyaml (`pip install pyyaml`) or provide a JSON formatted config."
            ) from exc
    loaded = yaml.safe_load(text)
    # safe_load returns None for empty files
    if loaded is None:
        return {}
    return loaded


def load_config(path: str | Path | None = None) -> PickerConfig:
    """Load configuration from a YAML/JSON file and return a PickerConfig instance.

    Args:
        path: Optional path to the config file. Defaults to ./daypicker.yaml.

    Returns:
        PickerConfig with values from the file (or defaults).

    Behavior:
    - If file is missing: returns PickerConfig() with defaults.
    - If file exists but top-level is not a mapping: raises ValueError.
    """
    p = Path(path) if path else Path.cwd() / DEFAULT_CONFIG_PATH
    logger.debug("Attempting to load config from %s", p)
    if not p.exists():
        logger.info("Config file %s not found; using defaults", p)
        return PickerConfig()

    raw = _load_yaml_or_json(p)
    if not isinstance(raw, dict):
        logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, raw)
        raise ValueError("Config file must contain a mapping at top level")  # noqa: TRY004
    cfg = PickerConfig.from_dict(raw)
    logger.info("Loaded configuration from %s", p)
    logger.debug("Configuration values: %s", cfg)
    return cfg
