"""JSON-backed scanner settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from foldersize.core.dispatcher import MAX_CONCURRENT_TASKS
from foldersize.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "foldersize"
_SETTINGS_FILE = "settings.json"

# Known keys and their defaults; the default's type drives parsing.
DEFAULTS: dict[str, Any] = {
    "scan.max_concurrent_tasks": MAX_CONCURRENT_TASKS,
    "scan.recurse": True,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class SettingsError(ValueError):
    """Raised for unknown keys or values of the wrong type."""


def parse_value(key: str, raw: str) -> Any:
    """Convert a command-line string into the type expected for *key*."""
    if key not in DEFAULTS:
        raise SettingsError(f"Unknown setting '{key}' (known: {', '.join(sorted(DEFAULTS))})")
    default = DEFAULTS[key]
    text = raw.strip().lower()
    if isinstance(default, bool):
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise SettingsError(f"'{raw}' is not a boolean")
    if isinstance(default, int):
        try:
            value = int(text)
        except ValueError:
            raise SettingsError(f"'{raw}' is not an integer") from None
        if value < 1:
            raise SettingsError(f"{key} must be at least 1")
        return value
    return raw


class Settings:
    """Persistent settings backed by a JSON file.

    Keys use dot notation and map onto nested objects, so
    ``scan.max_concurrent_tasks`` is stored as
    ``{"scan": {"max_concurrent_tasks": 20}}``. Missing keys fall back to
    :data:`DEFAULTS`.
    """

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @classmethod
    def instance(cls) -> Settings:
        """Return the singleton settings instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, falling back to the built-in default."""
        if default is None:
            default = DEFAULTS.get(key)
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """Set a value by dot-notation key and persist to disk."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self._save()

    @property
    def max_concurrent_tasks(self) -> int:
        value = self.get("scan.max_concurrent_tasks")
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            log.warning("Ignoring invalid scan.max_concurrent_tasks=%r in %s", value, self._path)
            return MAX_CONCURRENT_TASKS
        return value

    @property
    def recurse(self) -> bool:
        value = self.get("scan.recurse")
        if not isinstance(value, bool):
            log.warning("Ignoring invalid scan.recurse=%r in %s", value, self._path)
            return True
        return value

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            log.warning("Ignoring settings in %s: expected a JSON object", self._path)

    def _save(self) -> None:
        """Persist settings to disk."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._data, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self._path, e)
