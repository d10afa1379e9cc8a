"""
Local key/value persistence for search history and the theme preference.

Values are stored as JSON strings under fixed keys in a single JSON file,
mirroring the browser's localStorage API (string keys, string values).
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

HISTORY_KEY = "report-history"
THEME_KEY = "theme"
DEFAULT_STORAGE_PATH = Path(".insightforge") / "local_storage.json"

T = TypeVar("T")


class LocalStorage:
    """String key/value store backed by one JSON file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path is not None else DEFAULT_STORAGE_PATH

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read_for_write()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_for_write()
        if data.pop(key, None) is not None:
            self._write_all(data)

    def _read_all(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self._path} does not contain a JSON object.")
        return data

    def _read_for_write(self) -> Dict[str, Any]:
        try:
            return self._read_all()
        except ValueError as exc:
            logger.warning("Discarding unreadable storage file %s: %s", self._path, exc)
            return {}

    def _write_all(self, data: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


class StoredValue(Generic[T]):
    """
    A single JSON-serialized value kept under one storage key.

    The value starts out as ``initial`` and only reflects what is stored after
    ``load()`` has been called, so a page can render with the default before
    storage is consulted.
    """

    def __init__(self, storage: LocalStorage, key: str, initial: T) -> None:
        self._storage = storage
        self._key = key
        self._initial = initial
        self._value: T = initial

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> T:
        return self._value

    def load(self) -> T:
        try:
            item = self._storage.get_item(self._key)
            if item:
                self._value = json.loads(item)
        except (OSError, ValueError) as exc:
            logger.warning('Error reading local storage key "%s": %s', self._key, exc)
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        try:
            self._storage.set_item(self._key, json.dumps(value))
        except (OSError, ValueError, TypeError) as exc:
            logger.warning('Error setting local storage key "%s": %s', self._key, exc)


class HistoryStore:
    """Newest-first list of previously submitted topics."""

    def __init__(self, storage: LocalStorage) -> None:
        self._stored: StoredValue[List[str]] = StoredValue(storage, HISTORY_KEY, [])

    def load(self) -> List[str]:
        loaded = self._stored.load()
        if not isinstance(loaded, list):
            logger.warning("Ignoring malformed history value: %r", loaded)
            self._stored.set([])
        return self.topics

    @property
    def topics(self) -> List[str]:
        return [str(topic) for topic in self._stored.value]

    def add(self, topic: str) -> bool:
        """Prepend ``topic`` unless it is already present anywhere in the history."""
        topics = self.topics
        if topic in topics:
            return False
        self._stored.set([topic, *topics])
        logger.info("Added topic to history: %s", topic)
        return True

    def clear(self) -> None:
        self._stored.set([])
        logger.info("History cleared.")


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class ThemeStore:
    def __init__(self, storage: LocalStorage) -> None:
        self._stored: StoredValue[str] = StoredValue(storage, THEME_KEY, Theme.LIGHT.value)

    def load(self) -> Theme:
        self._stored.load()
        return self.theme

    @property
    def theme(self) -> Theme:
        try:
            return Theme(self._stored.value)
        except ValueError:
            return Theme.LIGHT

    def set(self, theme: Theme) -> None:
        self._stored.set(Theme(theme).value)

    def toggle(self) -> Theme:
        new_theme = Theme.LIGHT if self.theme is Theme.DARK else Theme.DARK
        self.set(new_theme)
        return new_theme
