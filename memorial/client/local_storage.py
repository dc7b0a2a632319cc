"""
Client-local key-value storage.

The planner's equivalent of a browser's localStorage: string values
under string keys, kept on the visitor's machine and never sent to the
server.
"""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from memorial.core.errors import ClientPersistenceError


class LocalStorage(ABC):
    """String key-value storage local to one client."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """
        Get the value stored under a key, or None.

        Raises:
            ClientPersistenceError: Storage is unavailable
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key.

        Raises:
            ClientPersistenceError: Storage is unavailable or full
        """
        pass


class InMemoryLocalStorage(LocalStorage):
    """Storage that lasts as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class FileLocalStorage(LocalStorage):
    """
    Storage kept in a JSON file of key -> string.

    A corrupt file reads as empty and is replaced on the next write. A
    file that cannot be read at all raises ClientPersistenceError, for
    writes too, so keys written by others are never dropped.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            return {}
        except OSError as e:
            raise ClientPersistenceError(f"Local storage unavailable: {e}") from e
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ClientPersistenceError(f"Could not write local storage: {e}") from e

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)
