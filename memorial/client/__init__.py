"""
Client side of the planner.

- local_storage: key-value storage on the visitor's machine
- selection: the bounded wishlist
- api: HTTP client for the content API
- browser: category listings and wishlist view models
"""

from memorial.client.api import ContentClient, GeneratedDocument
from memorial.client.browser import ContentBrowser, CategoryView, ItemRow, ViewStatus
from memorial.client.local_storage import (
    LocalStorage,
    InMemoryLocalStorage,
    FileLocalStorage,
)
from memorial.client.selection import (
    SelectionStore,
    AddOutcome,
    ButtonState,
    WISHLIST_KEY,
)

__all__ = [
    "ContentClient",
    "GeneratedDocument",
    "ContentBrowser",
    "CategoryView",
    "ItemRow",
    "ViewStatus",
    "LocalStorage",
    "InMemoryLocalStorage",
    "FileLocalStorage",
    "SelectionStore",
    "AddOutcome",
    "ButtonState",
    "WISHLIST_KEY",
]
