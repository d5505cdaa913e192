"""
Local key-value session store.

Holds named slots (``currentUser``, ``cart``, ``orders``...) each containing a
JSON-compatible snapshot. It is the storage behind the local fallback
backend and behind the cart of a client profile.

Two implementations:
- JsonFileSessionStore: one JSON document on disk, rewritten atomically
- MemorySessionStore: process memory, for tests and ephemeral sessions

Usage:
    store = JsonFileSessionStore(Path(".kiosco/local_store.json"))
    store.load()
    orders = store.get(StoreSlots.ORDERS, [])
    store.set(StoreSlots.ORDERS, orders + [new_order])
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class SessionStore(ABC):
    """
    Key-value snapshot store with an explicit load/save lifecycle.

    ``get`` returns deep copies so callers never mutate the stored snapshot
    in place; every ``set``/``delete`` persists immediately via ``save``.
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._loaded = False
        self._lock = threading.RLock()

    def load(self) -> None:
        """Read the snapshot from the backing medium (idempotent)."""
        with self._lock:
            self._data = self._read()
            self._loaded = True

    def save(self) -> None:
        """Write the whole snapshot to the backing medium."""
        with self._lock:
            self._write(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            self._ensure_loaded()
            if key not in self._data:
                return copy.deepcopy(default)
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._ensure_loaded()
            self._data[key] = copy.deepcopy(value)
            self.save()

    def delete(self, key: str) -> None:
        with self._lock:
            self._ensure_loaded()
            if self._data.pop(key, None) is not None:
                self.save()

    def keys(self) -> list[str]:
        with self._lock:
            self._ensure_loaded()
            return sorted(self._data)

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    @abstractmethod
    def _read(self) -> dict[str, Any]:
        ...

    @abstractmethod
    def _write(self, data: dict[str, Any]) -> None:
        ...


class MemorySessionStore(SessionStore):
    """In-process store; contents vanish with the process."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        super().__init__()
        self._snapshot: dict[str, Any] = copy.deepcopy(initial or {})

    def _read(self) -> dict[str, Any]:
        return copy.deepcopy(self._snapshot)

    def _write(self, data: dict[str, Any]) -> None:
        self._snapshot = copy.deepcopy(data)


class JsonFileSessionStore(SessionStore):
    """
    Store persisted as a single JSON document.

    Writes go to a temporary file in the same directory followed by
    ``os.replace`` so readers never observe a torn snapshot.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError:
            logger.warning("Corrupt session store, starting empty", path=str(self._path))
            return {}
        if not isinstance(data, dict):
            logger.warning("Unexpected session store layout, starting empty", path=str(self._path))
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2, default=str)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
