"""
Local storage implementations.

An in-memory store for development and tests, and a JSON-file store
that keeps the curated content across restarts without any external
services.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from memorial.core.errors import StorageError
from memorial.storage.base import (
    MetadataStorage,
    StorageProvider,
)

logger = logging.getLogger(__name__)


# =============================================================================
# In-Memory Metadata Storage
# =============================================================================


class InMemoryMetadataStorage(MetadataStorage):
    """In-memory document storage for development."""

    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}

    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        if collection not in self._data:
            self._data[collection] = {}
        self._data[collection][id] = dict(data)

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        doc = self._data.get(collection, {}).get(id)
        return dict(doc) if doc is not None else None

    async def delete(self, collection: str, id: str) -> bool:
        if collection in self._data and id in self._data[collection]:
            del self._data[collection][id]
            return True
        return False

    async def query(self, collection: str) -> list[dict[str, Any]]:
        return [dict(doc) for doc in self._data.get(collection, {}).values()]


# =============================================================================
# JSON File Metadata Storage
# =============================================================================


class JsonFileMetadataStorage(MetadataStorage):
    """
    Document storage persisted to a single JSON file.

    The whole file is rewritten on every mutation: written to a temporary
    file in the same directory, then moved over the original.
    """

    def __init__(self, path: str | Path = "./data/content.json"):
        self.path = Path(path)

    def _load(self) -> dict[str, dict[str, dict[str, Any]]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read content store {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Content store {self.path} is not a JSON object")
        return data

    def _write(self, data: dict[str, dict[str, dict[str, Any]]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Could not write content store {self.path}: {e}") from e

    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        store = self._load()
        store.setdefault(collection, {})[id] = dict(data)
        self._write(store)
        logger.debug("Saved %s/%s to %s", collection, id, self.path)

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        return self._load().get(collection, {}).get(id)

    async def delete(self, collection: str, id: str) -> bool:
        store = self._load()
        if id not in store.get(collection, {}):
            return False
        del store[collection][id]
        self._write(store)
        return True

    async def query(self, collection: str) -> list[dict[str, Any]]:
        return list(self._load().get(collection, {}).values())


# =============================================================================
# Factory
# =============================================================================


def create_local_storage(
    backend: str = "memory",
    data_dir: str | Path = "./data",
) -> StorageProvider:
    """
    Create a StorageProvider with local implementations.

    Args:
        backend: "memory" or "json"
        data_dir: Directory holding the JSON store (json backend only)
    """
    if backend == "memory":
        metadata: MetadataStorage = InMemoryMetadataStorage()
    elif backend == "json":
        metadata = JsonFileMetadataStorage(Path(data_dir) / "content.json")
    else:
        raise ValueError(f"Unknown storage backend: {backend}")

    return StorageProvider(metadata=metadata)
