"""
Core module - fundamental data models and infrastructure.

This module contains:
- models: Core data models (ContentItem, ServicePlan)
- categories: Category descriptors and registry
- errors: Error taxonomy
- utils: Shared utility functions
"""

from memorial.core.categories import (
    CategoryDescriptor,
    CategoryRegistry,
    RequiredField,
    MAX_ITEMS_PER_CATEGORY,
    get_categories,
)

from memorial.core.errors import (
    MemorialError,
    ValidationError,
    NotFoundError,
    StorageError,
    ClientPersistenceError,
    ApiError,
)

from memorial.core.models import (
    ContentItem,
    PlanSection,
    ServicePlan,
)

from memorial.core.utils import generate_id, is_valid_id, utc_now

__all__ = [
    # Categories
    "CategoryDescriptor",
    "CategoryRegistry",
    "RequiredField",
    "MAX_ITEMS_PER_CATEGORY",
    "get_categories",
    # Errors
    "MemorialError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
    "ClientPersistenceError",
    "ApiError",
    # Models
    "ContentItem",
    "PlanSection",
    "ServicePlan",
    # Utils
    "generate_id",
    "is_valid_id",
    "utc_now",
]
