"""User settings for the editor.

Settings are read from a JSON file in the user's config directory, which
the user edits by hand. Anything missing or invalid falls back to the
defaults in :class:`EditorConstants`.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "POUND_CONFIG_DIR"


@dataclass
class EditorSettings:
    quit_times: int = EditorConstants.QUIT_TIMES
    message_timeout: float = EditorConstants.MESSAGE_TIMEOUT


class SettingsStore:
    """Reads :class:`EditorSettings` from ``settings.json``."""

    def __init__(self, config_dir: Optional[os.PathLike] = None):
        """Initialize settings storage.

        Args:
            config_dir: Directory holding settings.json. Defaults to
                $POUND_CONFIG_DIR or the platform config directory.
        """
        if config_dir is None:
            config_dir = os.environ.get(CONFIG_DIR_ENV) or platformdirs.user_config_dir("pound")
        self._config_dir = Path(config_dir)
        self._settings_file = self._config_dir / "settings.json"

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _read_raw(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    @staticmethod
    def validate_setting(key: str, value: Any) -> bool:
        """Validate a setting value.

        Returns:
            True if setting is valid, False otherwise.
        """
        if key == 'quit_times':
            return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 10
        if key == 'message_timeout':
            return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
        # Unknown settings are ignored (forward compatibility)
        return False

    def load(self) -> EditorSettings:
        """Load settings, keeping defaults for anything missing or invalid."""
        settings = EditorSettings()
        for key, value in self._read_raw().items():
            if not hasattr(settings, key):
                logger.debug(f"Ignoring unknown setting {key!r}")
                continue
            if not self.validate_setting(key, value):
                logger.warning(f"Invalid value for setting {key!r}: {value!r}, using default")
                continue
            setattr(settings, key, value)
        return settings
