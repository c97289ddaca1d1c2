"""
Settings provider — key-value stores and typed accessors.

The host owns the real preference store; anything with get(key, default)
and set(key, value) works. Two backends ship here:

  MemoryStore    → dict in process (host adapters, tests)
  JsonFileStore  → config.json in the agent data dir (standalone runner)
"""

from pathlib import Path
from urllib.parse import quote

from .config import CONFIG_FILE, log, load_config, save_config
from .constants import (
    HEARTBEAT_PATH, DEFAULT_PROJECT,
    KEY_ENABLED, KEY_VERSION_CONTROL, KEY_API_KEY, KEY_BASE_URL, KEY_ACTIVE_PROJECT,
)


class MemoryStore:
    def __init__(self, values=None):
        self._values = dict(values or {})

    def get(self, key, default=None):
        return self._values.get(key, default)

    def set(self, key, value):
        self._values[key] = value


class JsonFileStore:
    """Reads the file on every get so edits made by hand are picked up live."""

    def __init__(self, path=CONFIG_FILE):
        self.path = path

    def get(self, key, default=None):
        data = load_config(self.path) or {}
        return data.get(key, default)

    def set(self, key, value):
        data = load_config(self.path)
        if data is None:
            self._backup_unreadable()
            data = {}
        data[key] = value
        save_config(data, self.path)

    def _backup_unreadable(self):
        """Move an existing file we could not parse aside before replacing it."""
        path = Path(self.path)
        if not path.exists():
            return
        backup = path.with_name(path.name + ".bak")
        path.replace(backup)
        log.warning("Unreadable config %s moved to %s", path, backup)


class WakapiSettings:
    """Typed view over a key-value store. Last write wins."""

    def __init__(self, store=None, default_project=DEFAULT_PROJECT):
        self.store = store if store is not None else MemoryStore()
        self.default_project = default_project

    def _get_bool(self, key, default):
        value = self.store.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)

    @property
    def enabled(self) -> bool:
        return self._get_bool(KEY_ENABLED, False)

    @enabled.setter
    def enabled(self, value):
        self.store.set(KEY_ENABLED, bool(value))

    @property
    def enable_version_control(self) -> bool:
        return self._get_bool(KEY_VERSION_CONTROL, True)

    @enable_version_control.setter
    def enable_version_control(self, value):
        self.store.set(KEY_VERSION_CONTROL, bool(value))

    @property
    def api_key(self) -> str:
        return str(self.store.get(KEY_API_KEY, "") or "")

    @api_key.setter
    def api_key(self, value):
        self.store.set(KEY_API_KEY, value)

    @property
    def base_url(self) -> str:
        return str(self.store.get(KEY_BASE_URL, "") or "")

    @base_url.setter
    def base_url(self, value):
        self.store.set(KEY_BASE_URL, value)

    @property
    def active_project(self) -> str:
        return str(self.store.get(KEY_ACTIVE_PROJECT, self.default_project) or self.default_project)

    @active_project.setter
    def active_project(self, value):
        self.store.set(KEY_ACTIVE_PROJECT, value)

    @property
    def heartbeat_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{HEARTBEAT_PATH}?api_key={quote(self.api_key, safe='')}"
