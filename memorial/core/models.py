"""
Core data models for the memorial planner.

Content items are the curated records (a reading, a piece of music, ...).
A service plan is the transient, resolved view of a visitor's selection
that document exports consume.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from memorial.core.categories import CategoryDescriptor
from memorial.core.utils import generate_id, utc_now


# =============================================================================
# Content Item
# =============================================================================


class ContentItem(BaseModel):
    """
    A single curated item.

    Text categories carry `content`, media categories carry `link`;
    never both. The category itself is not stored on the item, it is
    the collection the item lives in.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_id)
    title: str

    # Payload (exactly one is set)
    content: str | None = None
    link: str | None = None

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")

    @property
    def payload(self) -> str:
        """The body text or link, whichever this item carries."""
        return self.content if self.content is not None else (self.link or "")

    def to_storage(self) -> dict[str, Any]:
        """Serialize for metadata storage."""
        return self.model_dump(mode="json")

    def to_api(self) -> dict[str, Any]:
        """Serialize for the HTTP API (camelCase timestamps, no empty payload)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Service Plan (resolved selection)
# =============================================================================


class PlanSection(BaseModel):
    """One category's resolved items, in selection order."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    category: CategoryDescriptor
    items: list[ContentItem] = Field(default_factory=list)

    @property
    def heading(self) -> str:
        return self.category.display_name


class ServicePlan(BaseModel):
    """
    The resolved selection for a service.

    Sections follow the category registry order and only categories
    with at least one resolved item are present.
    """

    sections: list[PlanSection] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def item_count(self) -> int:
        return sum(len(s.items) for s in self.sections)

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0

    def get_section(self, category_key: str) -> PlanSection | None:
        for section in self.sections:
            if section.category.key == category_key:
                return section
        return None
