"""Preference persistence: a tiny key/value store and the grid's view of it.

The grid persists two preferences per grid key: the visible column keys
and the page size. Stored values are plain JSON-compatible data.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Protocol

logger = logging.getLogger(__name__)

TABLE_STORAGE_KEY = "app-table"
VISIBLE_COLUMNS = "visibleColumns"
PAGE_SIZE = "pageSize"


def build_storage_key(namespace: str, grid_key: str, name: str) -> str:
    """``"<namespace>-<grid_key>-<name>"``."""
    return f"{namespace}-{grid_key}-{name}"


class PreferenceStore(Protocol):
    def read(self, key: str) -> Any | None: ...

    def write(self, key: str, value: Any) -> None: ...


class MemoryPreferenceStore:
    """Process-local store; values are JSON round-tripped like a real store."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {
            k: json.dumps(v) for k, v in (initial or {}).items()
        }

    def read(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def write(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFilePreferenceStore:
    """All preferences in one JSON document on disk.

    A missing, unreadable or malformed file reads as empty. Every write
    rewrites the whole document.
    """

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = os.fspath(path)

    def _load(self) -> dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring preferences file %s: not a JSON object", self.path)
            return {}
        return raw

    def read(self, key: str) -> Any | None:
        return self._load().get(key)

    def write(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)


class GridPreferences:
    """Typed access to one grid's persisted preferences.

    Reads validate the stored shape; anything unexpected is reported and
    treated as absent so a corrupt entry never reaches the grid state.
    """

    def __init__(
        self,
        store: PreferenceStore | None,
        grid_key: str,
        namespace: str = TABLE_STORAGE_KEY,
    ) -> None:
        self.store = store
        self.grid_key = grid_key
        self.namespace = namespace

    def key(self, name: str) -> str:
        return build_storage_key(self.namespace, self.grid_key, name)

    def read_visible_columns(self) -> list[str] | None:
        if self.store is None:
            return None
        value = self.store.read(self.key(VISIBLE_COLUMNS))
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            logger.warning("Ignoring stored %s: %r", self.key(VISIBLE_COLUMNS), value)
            return None
        return value

    def read_page_size(self) -> int | None:
        if self.store is None:
            return None
        value = self.store.read(self.key(PAGE_SIZE))
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            logger.warning("Ignoring stored %s: %r", self.key(PAGE_SIZE), value)
            return None
        return value

    def write_visible_columns(self, column_keys: list[str]) -> None:
        if self.store is None:
            return
        logger.debug("Persisting %s=%r", self.key(VISIBLE_COLUMNS), column_keys)
        self.store.write(self.key(VISIBLE_COLUMNS), list(column_keys))

    def write_page_size(self, page_size: int) -> None:
        if self.store is None:
            return
        logger.debug("Persisting %s=%r", self.key(PAGE_SIZE), page_size)
        self.store.write(self.key(PAGE_SIZE), int(page_size))
