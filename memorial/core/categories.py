"""
Registry of content categories.

Every category is described once here: its URL key, the heading used
in listings and documents, and which field carries its payload. The
registry drives validation, rendering and document ordering, so an
unknown category is a single well-defined lookup failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from memorial.core.errors import NotFoundError


# Maximum number of items a visitor may select per category.
MAX_ITEMS_PER_CATEGORY = 2


class RequiredField(str, Enum):
    """Which payload field a category's items carry."""

    CONTENT = "content"  # Text body (readings, prayers, ...)
    LINK = "link"  # Media URL (music)


@dataclass(frozen=True)
class CategoryDescriptor:
    """A content category."""

    key: str
    display_name: str
    required_field: RequiredField

    # Collection name in metadata storage
    collection: str

    @property
    def is_media(self) -> bool:
        return self.required_field == RequiredField.LINK

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.display_name,
            "required_field": self.required_field.value,
            "max_selected": MAX_ITEMS_PER_CATEGORY,
        }


class CategoryRegistry:
    """
    Ordered registry of category descriptors.

    Registration order is the fixed document order.
    """

    def __init__(self, descriptors: list[CategoryDescriptor] | None = None):
        self._categories: dict[str, CategoryDescriptor] = {}
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: CategoryDescriptor) -> None:
        """Register a category by its key."""
        if descriptor.key in self._categories:
            raise ValueError(f"Category '{descriptor.key}' is already registered")
        self._categories[descriptor.key] = descriptor

    def get(self, key: str) -> CategoryDescriptor:
        """
        Look up a category by key (case-insensitive).

        Raises:
            NotFoundError: If the key is not a recognized category
        """
        descriptor = self._categories.get(str(key).lower())
        if descriptor is None:
            raise NotFoundError(f"Content type '{key}' not found.")
        return descriptor

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._categories

    def __iter__(self):
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def keys(self) -> list[str]:
        """Category keys in document order."""
        return list(self._categories.keys())


DEFAULT_CATEGORIES = CategoryRegistry([
    CategoryDescriptor("readings", "Readings", RequiredField.CONTENT, "readings"),
    CategoryDescriptor("gospels", "Gospels", RequiredField.CONTENT, "gospels"),
    CategoryDescriptor("music", "Music", RequiredField.LINK, "music"),
    CategoryDescriptor("prayers", "Prayers", RequiredField.CONTENT, "prayers"),
    CategoryDescriptor("poems", "Poems", RequiredField.CONTENT, "poems"),
])


def get_categories() -> CategoryRegistry:
    """Get the default category registry."""
    return DEFAULT_CATEGORIES
