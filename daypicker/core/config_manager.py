"""Environment-based configuration for daypicker.

Values come from ``DAYPICKER_*`` variables, optionally seeded from a ``.env``
file. They overlay whatever a config file provided.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)

ENV_PREFIX = "DAYPICKER_"

# suffix -> (PickerConfig field, parser)
ENV_FIELDS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "MODE": ("mode", str),
    "TIMEZONE": ("timezone", str),
    "FIRST_WEEKDAY": ("first_weekday", int),
    "LOG_LEVEL": ("log_level", str),
}


def parse_env_file(path: Path) -> dict[str, str]:
    """Read ``KEY=value`` pairs from a .env file.

    Blank lines, ``#`` comments and lines without ``=`` are skipped, and one
    layer of single or double quotes is stripped from values. A missing or
    unreadable file yields an empty dict.
    """
    if not path.exists():
        return {}

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.debug("Could not read %s; ignoring it", path, exc_info=True)
        return {}

    pairs: dict[str, str] = {}
    for line in (raw.strip() for raw in lines):
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key:
            pairs[key] = value.strip().strip('"').strip("'")
    return pairs


class ConfigManager:
    """Collects picker configuration from the process environment."""

    def __init__(self, env_file_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            env_file_path: .env file consulted by load_env_file (defaults to ./.env)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Copy .env entries into os.environ without overriding existing variables.

        Returns:
            Names of the variables that were set
        """
        added = []
        for key, value in parse_env_file(self.env_file_path).items():
            if key in os.environ:
                continue
            os.environ[key] = value
            added.append(key)

        if added:
            logger.debug("Seeded from %s: %s", self.env_file_path, ", ".join(added))
        return added

    def build_config_from_env(self) -> dict[str, Any]:
        """Map set DAYPICKER_* variables onto PickerConfig field names.

        Values that fail to parse are logged and left out.

        Returns:
            Partial mapping for PickerConfig.from_dict
        """
        cfg: dict[str, Any] = {}
        for suffix, (field_name, parse) in ENV_FIELDS.items():
            raw = os.environ.get(ENV_PREFIX + suffix)
            if not raw:
                continue
            try:
                cfg[field_name] = parse(raw)
            except ValueError:
                logger.warning(
                    "Ignoring %s%s=%r: not a valid %s", ENV_PREFIX, suffix, raw, field_name
                )
        return cfg

    def load_full_config(self, base: dict[str, Any] | None = None) -> dict[str, Any]:
        """Seed from .env, then overlay environment values on ``base``.

        Args:
            base: Mapping loaded from a config file

        Returns:
            New merged mapping; environment values win
        """
        self.load_env_file()
        return {**(base or {}), **self.build_config_from_env()}
