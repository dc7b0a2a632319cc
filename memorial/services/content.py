"""
Content service - curated item management.

Lists, creates and deletes items for each category. Validation of the
per-category payload is driven by the category descriptor rather than
by checks on category names.
"""

from __future__ import annotations

import logging
from typing import Any

from memorial.core.categories import (
    CategoryDescriptor,
    CategoryRegistry,
    RequiredField,
    get_categories,
)
from memorial.core.errors import NotFoundError, ValidationError
from memorial.core.models import ContentItem
from memorial.core.utils import is_valid_id, utc_now
from memorial.storage.base import StorageProvider

logger = logging.getLogger(__name__)


class CategoryStore:
    """A category bound to its storage collection."""

    def __init__(self, descriptor: CategoryDescriptor, storage: StorageProvider):
        self.descriptor = descriptor
        self.storage = storage

    @property
    def collection(self) -> str:
        return self.descriptor.collection

    async def all(self) -> list[ContentItem]:
        """All items, oldest first."""
        docs = await self.storage.metadata.query(self.collection)
        items = [ContentItem.model_validate(doc) for doc in docs]
        # sorted() is stable, so same-instant items keep insertion order
        return sorted(items, key=lambda item: item.created_at)

    async def get(self, item_id: str) -> ContentItem | None:
        doc = await self.storage.metadata.get(self.collection, item_id)
        return ContentItem.model_validate(doc) if doc else None

    async def add(self, item: ContentItem) -> ContentItem:
        await self.storage.metadata.save(self.collection, item.id, item.to_storage())
        return item

    async def remove(self, item_id: str) -> bool:
        return await self.storage.metadata.delete(self.collection, item_id)


class ContentService:
    """
    Manages curated content across all categories.

    Items are append-only: they are created and deleted, never edited.
    """

    def __init__(
        self,
        storage: StorageProvider,
        categories: CategoryRegistry | None = None,
        max_link_length: int = 2048,
    ):
        self.storage = storage
        self.categories = categories or get_categories()
        self.max_link_length = max_link_length

    def store(self, category: str) -> CategoryStore:
        """
        Get the store for a category key.

        Raises:
            NotFoundError: Unknown category
        """
        return CategoryStore(self.categories.get(category), self.storage)

    # =========================================================================
    # Operations
    # =========================================================================

    async def list_items(self, category: str) -> list[ContentItem]:
        """List all items in a category, ordered by creation time."""
        return await self.store(category).all()

    async def get_item(self, category: str, item_id: str) -> ContentItem | None:
        """Get a single item, or None if it does not exist or the id is malformed."""
        store = self.store(category)
        if not is_valid_id(item_id):
            return None
        return await store.get(item_id)

    async def create_item(self, category: str, fields: dict[str, Any]) -> ContentItem:
        """
        Create a new item in a category.

        Args:
            category: Category key
            fields: Submitted fields: title plus content or link

        Returns:
            The stored item with its assigned id and timestamps

        Raises:
            NotFoundError: Unknown category
            ValidationError: Missing or empty required field
        """
        store = self.store(category)
        descriptor = store.descriptor

        title = _clean(fields.get("title"))
        if not title:
            raise ValidationError("Missing required field: title")

        now = utc_now()
        item = ContentItem(title=title, created_at=now, updated_at=now)

        if descriptor.required_field == RequiredField.LINK:
            link = _clean(fields.get("link"))
            if not link:
                raise ValidationError("Missing required field: link")
            if len(link) > self.max_link_length:
                raise ValidationError(
                    f"Link is too long (maximum {self.max_link_length} characters)"
                )
            item.link = link
        else:
            content = fields.get("content")
            if not isinstance(content, str) or not content.strip():
                raise ValidationError("Missing required field: content")
            item.content = content

        await store.add(item)
        logger.info("Added %s item %s (%s)", descriptor.key, item.id, item.title)
        return item

    async def delete_item(self, category: str, item_id: str) -> str:
        """
        Delete an item by id.

        Returns:
            The deleted item's id

        Raises:
            NotFoundError: Unknown category or no such item
            ValidationError: Malformed id
        """
        store = self.store(category)
        key = store.descriptor.key

        if not is_valid_id(item_id):
            raise ValidationError(f"Invalid ID format: {item_id}")

        if not await store.remove(item_id):
            raise NotFoundError(f"{key} item with ID {item_id} not found.")

        logger.info("Deleted %s item %s", key, item_id)
        return item_id


def _clean(value: Any) -> str:
    """Trim a submitted string field; anything else counts as missing."""
    if not isinstance(value, str):
        return ""
    return value.strip()
