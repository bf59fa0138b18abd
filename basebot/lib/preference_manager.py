"""Demo settings with config file persistence."""

from __future__ import annotations

import configparser
import logging
import os
from typing import Any

from basebot.lib.get_platform import get_data_directory

SECTION = "BASEBOT"


class PreferenceManager:
    """Single source of truth for the demo settings.

    Stores settings in config.ini under the [BASEBOT] section and handles type
    conversion of the stored strings.
    """

    DEFAULTS = {
        "handler_timeout": 0,
        "poll_interval": 0.1,
        "time_scale": 1.0,
    }

    def __init__(self, config_file_path: str = "config.ini", target: object | None = None) -> None:
        """Initialize with config path and optional target object to sync.

        Args:
            config_file_path: Path to config.ini (relative paths go in data directory)
            target: Optional object to sync attributes on when preferences change
        """
        self._config_obj = configparser.ConfigParser()
        self._target = target

        if not os.path.isabs(config_file_path):
            self.config_file_path = os.path.join(get_data_directory(), config_file_path)
        else:
            self.config_file_path = config_file_path

        logging.debug(f"Using config file: {self.config_file_path}")

    def get(self, preference: str, default_value: Any = None) -> Any:
        """Get a preference value, auto-converting to bool/int/float."""
        # Silently ignores missing files
        self._config_obj.read(self.config_file_path, encoding="utf-8")

        if not self._config_obj.has_section(SECTION):
            return default_value

        try:
            return self._convert_value(self._config_obj.get(SECTION, preference))
        except (configparser.NoOptionError, ValueError):
            return default_value

    def get_or_default(self, preference: str) -> Any:
        """Get a preference value, falling back to DEFAULTS if not set."""
        return self.get(preference, self.DEFAULTS.get(preference))

    def set(self, preference: str, val: Any) -> bool:
        """Update a preference, persist it and sync the target object. Returns success."""
        logging.debug(f"Changing preference << {preference} >> to {val}")
        try:
            self._config_obj.read(self.config_file_path, encoding="utf-8")

            if SECTION not in self._config_obj:
                self._config_obj.add_section(SECTION)
            self._config_obj[SECTION][preference] = str(val)

            with open(self.config_file_path, "w", encoding="utf-8") as conf:
                self._config_obj.write(conf)
        except OSError as e:
            logging.error(f"Failed to change preference << {preference} >>: {e}")
            return False

        if self._target is not None:
            setattr(self._target, preference, self._convert_value(val))
        return True

    def clear(self) -> bool:
        """Remove all preferences by deleting the config file. Returns success."""
        try:
            if os.path.exists(self.config_file_path):
                os.remove(self.config_file_path)
                logging.info(f"Cleared preferences: deleted {self.config_file_path}")
        except OSError as e:
            logging.error(f"Failed to clear preferences: {e}")
            return False
        # Drop cached values so they don't outlive the file
        self._config_obj.clear()
        return True

    def _convert_value(self, val: Any) -> Any:
        """Convert a string to bool/int/float if applicable, otherwise return as-is."""
        if not isinstance(val, str):
            return val

        val_lower = val.lower()
        if val_lower in ("true", "yes", "on"):
            return True
        if val_lower in ("false", "no", "off"):
            return False

        stripped = val.lstrip("-")
        if stripped.isdigit():
            return int(val)
        if stripped.replace(".", "", 1).isdigit():
            return float(val)

        return val

    def apply_all(self, **cli_overrides: Any) -> None:
        """Hydrate the target object with every setting.

        Priority: CLI argument (if not None) > config file > DEFAULTS. CLI values
        are not persisted.
        """
        if self._target is None:
            return

        for pref, default in self.DEFAULTS.items():
            cli_value = cli_overrides.get(pref)
            if cli_value is not None:
                setattr(self._target, pref, cli_value)
            else:
                setattr(self._target, pref, self.get(pref, default))
