"""
Storage interface for curated content.

Each category's items live in their own collection of JSON-compatible
documents keyed by item id. Services only see `MetadataStorage`, so the
in-memory and JSON-file backends are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class MetadataStorage(ABC):
    """
    Document collections keyed by id.

    `query` returns a collection's documents in the order they were
    first saved; callers sort by their own fields on top of that.
    Backend failures surface as StorageError.
    """

    @abstractmethod
    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        """Insert or replace one document."""

    @abstractmethod
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        """One document, or None when absent."""

    @abstractmethod
    async def delete(self, collection: str, id: str) -> bool:
        """Remove one document; False when there was nothing to remove."""

    @abstractmethod
    async def query(self, collection: str) -> list[dict[str, Any]]:
        """Every document of a collection."""


class StorageProvider(BaseModel):
    """The storage backends handed to services at startup."""

    model_config = {"arbitrary_types_allowed": True}

    metadata: MetadataStorage
