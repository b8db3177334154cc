"""Asynchronous string key-value stores for user preferences."""

import json
import os
from pathlib import Path
from typing import Optional, Protocol
import logging

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "DevToolsPreferences"
PREFERENCES_FILE_NAME = "preferences.json"


class KeyValueStorage(Protocol):
    """Async key-value store. Keys and values are plain strings."""

    async def get_value(self, key: str) -> Optional[str]:
        ...

    async def set_value(self, key: str, value: str) -> None:
        ...


def get_default_storage_dir(app_name: str = DEFAULT_APP_NAME) -> Path:
    """Get the appropriate preferences directory for the platform.

    Args:
        app_name: Name of the application (used as the directory name)

    Returns:
        The per-user configuration directory for the application
    """
    if os.name == "nt":  # Windows
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:  # Linux/Mac
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    return base / app_name


class JsonFileStorage:
    """Stores preferences as a flat JSON object of strings on disk."""

    def __init__(self, storage_dir: Optional[Path] = None):
        """Initialize the file storage.

        Args:
            storage_dir: Directory holding the preferences file
                         (uses the platform default if None)
        """
        self._storage_dir = Path(storage_dir) if storage_dir else get_default_storage_dir()
        self._file = self._storage_dir / PREFERENCES_FILE_NAME
        self._values: Optional[dict[str, str]] = None

    @property
    def path(self) -> Path:
        """Get the preferences file path."""
        return self._file

    def _load(self) -> dict[str, str]:
        if self._values is not None:
            return self._values

        self._values = {}
        if self._file.exists():
            try:
                with open(self._file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    self._values = {str(k): str(v) for k, v in data.items()}
                    logger.info(f"Preferences loaded from {self._file}")
                else:
                    logger.warning(f"Ignoring preferences file with unexpected content: {self._file}")
            except (ValueError, OSError) as e:
                logger.warning(f"Failed to load preferences, using defaults: {e}")
        else:
            logger.info("No preferences file found, using defaults")

        return self._values

    async def get_value(self, key: str) -> Optional[str]:
        """Get a stored value.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key was never written
        """
        return self._load().get(key)

    async def set_value(self, key: str, value: str) -> None:
        """Store a value and write the file.

        Args:
            key: Storage key
            value: String value to store
        """
        values = self._load()
        values[key] = value

        try:
            self._storage_dir.mkdir(parents=True, exist_ok=True)
            with open(self._file, "w", encoding="utf-8") as f:
                json.dump(values, f, indent=2, sort_keys=True)
            logger.debug(f"Saved {key}={value!r} to {self._file}")
        except OSError as e:
            logger.error(f"Failed to save preference {key}: {e}")


class MemoryStorage:
    """In-memory store, for headless runs and tests."""

    def __init__(self, values: Optional[dict[str, str]] = None):
        self.values: dict[str, str] = dict(values or {})

    async def get_value(self, key: str) -> Optional[str]:
        return self.values.get(key)

    async def set_value(self, key: str, value: str) -> None:
        self.values[key] = value
