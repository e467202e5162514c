import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from grid_core.catalog import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class SettingsManager:
    """
    Manages persistent application settings using a JSON file.
    """
    SETTINGS_FILE = Path("settings.json")

    DEFAULT_SETTINGS = {
        "steam_path": "",
        "request_timeout": DEFAULT_TIMEOUT,
        "start_minimized": False,
    }

    def __init__(self, settings_file: Optional[Path] = None):
        self.settings_file = Path(settings_file) if settings_file else self.SETTINGS_FILE
        self._settings = self.load_settings()

    def load_settings(self) -> Dict[str, Any]:
        """
        Loads settings from disk, or returns defaults if file doesn't exist.
        """
        if not self.settings_file.exists():
            return self.DEFAULT_SETTINGS.copy()

        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error loading settings: {e}")
            return self.DEFAULT_SETTINGS.copy()

        # Merge with defaults to ensure all keys exist
        settings = self.DEFAULT_SETTINGS.copy()
        if isinstance(data, dict):
            settings.update(data)
        else:
            logger.warning(f"Ignoring malformed settings file {self.settings_file}")
        return settings

    def save_settings(self):
        try:
            with open(self.settings_file, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, indent=4)
        except OSError as e:
            logger.error(f"Error saving settings: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings.get(key, default)

    def set(self, key: str, value: Any):
        self._settings[key] = value
        self.save_settings()

    @property
    def steam_path(self) -> str:
        return self._settings.get("steam_path") or ""

    @steam_path.setter
    def steam_path(self, path: str):
        self.set("steam_path", path)

    @property
    def request_timeout(self) -> float:
        """
        Catalog request timeout in seconds. Falls back to the default on bad values.
        """
        value = self._settings.get("request_timeout", DEFAULT_TIMEOUT)
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            return DEFAULT_TIMEOUT
        return timeout if timeout > 0 else DEFAULT_TIMEOUT

    @request_timeout.setter
    def request_timeout(self, seconds: float):
        self.set("request_timeout", seconds)
