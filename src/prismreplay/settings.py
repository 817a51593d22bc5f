"""Settings for prismreplay.

Settings are read from ~/.prismreplay/settings.json, merged over DEFAULTS.
Environment variables override values from the file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Settings file location
SETTINGS_DIR = Path.home() / ".prismreplay"
SETTINGS_FILE = SETTINGS_DIR / "settings.json"

# Known replays on the public archive
SAMPLE_CODES = ["ib0Qt-pp8PL", "VyrET-IGxyL", "yjUKQ-HzFRz"]

# Default settings
DEFAULTS = {
    "archive_url": "http://saved-games-alpha.s3-website-us-east-1.amazonaws.com/",
    "extension": ".json.gz",
    "timeout": 30.0,  # seconds per archive request
    "log_level": "INFO",
}

# Environment variable -> (setting key, converter)
ENV_OVERRIDES = {
    "PRISMREPLAY_ARCHIVE_URL": ("archive_url", str),
    "PRISMREPLAY_TIMEOUT": ("timeout", float),
}


class Settings:
    """Read-only settings loaded from the settings file and environment.

    Example:
        settings = Settings()
        url = settings.get("archive_url")
    """

    def __init__(self, settings_file: Optional[Path] = None) -> None:
        """Initialize settings, loading from disk and environment.

        Args:
            settings_file: JSON file to load. Defaults to ~/.prismreplay/settings.json
        """
        self._file = Path(settings_file) if settings_file else SETTINGS_FILE
        self._data: dict[str, Any] = DEFAULTS.copy()
        self._load()
        self._apply_env()

    def _load(self) -> None:
        """Load settings from disk."""
        if not self._file.exists():
            return

        try:
            with open(self._file, "r", encoding="utf-8") as f:
                loaded = json.load(f)
                # Merge with defaults (new settings get defaults)
                for key, value in loaded.items():
                    self._data[key] = value
            logger.debug(f"Loaded settings from {self._file}")
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Failed to load settings: {e}")

    def _apply_env(self) -> None:
        """Override settings from environment variables."""
        for var, (key, convert) in ENV_OVERRIDES.items():
            raw = os.environ.get(var)
            if not raw:
                continue
            try:
                self._data[key] = convert(raw)
                logger.debug(f"Setting '{key}' overridden by {var}")
            except ValueError:
                logger.warning(f"Ignoring invalid {var}={raw!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """Setting value, falling back to ``default`` and then to DEFAULTS."""
        if key in self._data:
            return self._data[key]
        return default if default is not None else DEFAULTS.get(key)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
