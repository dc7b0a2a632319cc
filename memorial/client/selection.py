"""
Client selection store - the visitor's wishlist.

Keeps up to MAX_ITEMS_PER_CATEGORY `{id, title}` references per category
in client-local storage. All mutation happens through SelectionStore
methods; `load` and `save` are the only places that touch storage.

Stored state that cannot be parsed is treated as an empty wishlist.
A failed save keeps the in-memory change and tells the visitor it may
not survive a reload.
"""

from __future__ import annotations

import copy
import json
import logging
from enum import Enum
from typing import Any, Callable

from memorial.client.local_storage import LocalStorage
from memorial.core.categories import (
    MAX_ITEMS_PER_CATEGORY,
    CategoryRegistry,
    get_categories,
)
from memorial.core.errors import ClientPersistenceError

logger = logging.getLogger(__name__)

WISHLIST_KEY = "funeralWishlist"

Notifier = Callable[[str], None]
Selection = dict[str, list[dict[str, str]]]


class AddOutcome(str, Enum):
    """What happened to an add request."""

    ADDED = "added"
    DUPLICATE = "duplicate"
    LIMIT_REACHED = "limit_reached"


class ButtonState(str, Enum):
    """State of an item's add-to-wishlist action."""

    ADDABLE = "Add to Wishlist"
    ADDED = "Added"
    LIMIT_REACHED = "Limit Reached"

    @property
    def label(self) -> str:
        return self.value

    @property
    def enabled(self) -> bool:
        return self is ButtonState.ADDABLE


def log_notice(message: str) -> None:
    """Default notifier: log the notice."""
    logger.warning(message)


class SelectionStore:
    """
    Bounded per-category selection persisted in local storage.

    Example:
        store = SelectionStore(FileLocalStorage("~/.memorial/local_storage.json"))
        store.add("readings", item_id, "Isaiah 25:6-9")
        payload = store.to_payload()
    """

    def __init__(
        self,
        storage: LocalStorage,
        categories: CategoryRegistry | None = None,
        notify: Notifier | None = None,
        key: str = WISHLIST_KEY,
        max_items: int = MAX_ITEMS_PER_CATEGORY,
    ):
        self.storage = storage
        self.categories = categories or get_categories()
        self.notify = notify or log_notice
        self.key = key
        self.max_items = max_items
        self._selection: Selection = self._empty()
        self.load()

    def _empty(self) -> Selection:
        return {key: [] for key in self.categories.keys()}

    # =========================================================================
    # Storage boundary
    # =========================================================================

    def load(self) -> Selection:
        """(Re)load the selection from local storage."""
        try:
            raw = self.storage.get_item(self.key)
        except ClientPersistenceError as e:
            logger.error("Error reading wishlist from local storage: %s", e)
            raw = None

        self._selection = self._parse(raw)
        return self.get_all()

    def save(self) -> bool:
        """
        Persist the in-memory selection.

        Returns:
            False if storage failed; the visitor has been notified
        """
        try:
            self.storage.set_item(self.key, json.dumps(self._selection))
        except ClientPersistenceError as e:
            logger.error("Error saving wishlist to local storage: %s", e)
            self.notify(
                "Could not save your wishlist changes, so they may not survive a "
                "reload. Local storage might be full or disabled."
            )
            return False
        return True

    def _parse(self, raw: str | None) -> Selection:
        selection = self._empty()
        if not raw:
            return selection

        try:
            data = json.loads(raw)
        except ValueError:
            logger.error("Stored wishlist is not valid JSON, starting empty")
            return selection
        if not isinstance(data, dict):
            return selection

        for key in selection:
            entries = data.get(key)
            if not isinstance(entries, list):
                continue
            for entry in entries:
                ref = _as_reference(entry)
                if ref is None or self._find(selection[key], ref["id"]) is not None:
                    continue
                if len(selection[key]) < self.max_items:
                    selection[key].append(ref)
        return selection

    # =========================================================================
    # Queries
    # =========================================================================

    def get_all(self) -> Selection:
        """The current selection, every category present."""
        return copy.deepcopy(self._selection)

    def items(self, category: str) -> list[dict[str, str]]:
        key = self.categories.get(category).key
        return [dict(ref) for ref in self._selection[key]]

    def contains(self, category: str, item_id: str) -> bool:
        key = self.categories.get(category).key
        return self._find(self._selection[key], item_id) is not None

    def is_full(self, category: str) -> bool:
        key = self.categories.get(category).key
        return len(self._selection[key]) >= self.max_items

    def button_state(self, category: str, item_id: str) -> ButtonState:
        """Which of the three add-action states applies to an item."""
        if self.contains(category, item_id):
            return ButtonState.ADDED
        if self.is_full(category):
            return ButtonState.LIMIT_REACHED
        return ButtonState.ADDABLE

    @property
    def total(self) -> int:
        return sum(len(refs) for refs in self._selection.values())

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_payload(self) -> dict[str, list[str]]:
        """Ids only, per category, for the document generation request."""
        return {
            key: [ref["id"] for ref in refs if ref.get("id")]
            for key, refs in self._selection.items()
        }

    # =========================================================================
    # Mutations
    # =========================================================================

    def add(self, category: str, item_id: str, title: str) -> AddOutcome:
        """
        Add an item reference to a category.

        Raises:
            NotFoundError: Unknown category
        """
        key = self.categories.get(category).key
        refs = self._selection[key]

        if self._find(refs, item_id) is not None:
            self.notify(f'"{title}" is already in your wishlist for {key}.')
            return AddOutcome.DUPLICATE

        if len(refs) >= self.max_items:
            self.notify(
                f"You can only add up to {self.max_items} items for the {key} category."
            )
            return AddOutcome.LIMIT_REACHED

        refs.append({"id": item_id, "title": title})
        self.save()
        return AddOutcome.ADDED

    def remove(self, category: str, item_id: str) -> bool:
        """Remove an item reference; returns False if it was not selected."""
        key = self.categories.get(category).key
        refs = self._selection[key]

        index = self._find(refs, item_id)
        if index is None:
            return False

        del refs[index]
        self.save()
        return True

    def clear(self) -> None:
        """Empty every category."""
        self._selection = self._empty()
        self.save()

    @staticmethod
    def _find(refs: list[dict[str, str]], item_id: str) -> int | None:
        for index, ref in enumerate(refs):
            if ref["id"] == item_id:
                return index
        return None


def _as_reference(entry: Any) -> dict[str, str] | None:
    """Coerce a stored entry to {id, title}, or None if it has no id."""
    if not isinstance(entry, dict):
        return None
    item_id = entry.get("id")
    if not isinstance(item_id, str) or not item_id:
        return None
    title = entry.get("title")
    return {"id": item_id, "title": title if isinstance(title, str) else ""}
