"""
Content browser - what a visitor sees for each category.

Builds view models from API items and the visitor's selection: text
previews with a show more/less toggle, embedded players for music,
the three-state add action, and the wishlist panel. Rendering to text
is kept separate so any front end can draw the same models.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from memorial.client.api import ContentClient
from memorial.client.selection import (
    AddOutcome,
    ButtonState,
    Notifier,
    SelectionStore,
    log_notice,
)
from memorial.core.errors import ApiError
from memorial.core.media import extract_youtube_video_id, youtube_embed_url

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 200


# =============================================================================
# View Models
# =============================================================================


class ViewStatus(str, Enum):
    """Lifecycle of a category listing."""

    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"
    ERROR = "error"


@dataclass
class MediaView:
    """How a link is presented: an embedded player or a plain link."""

    link: str
    label: str
    embed_url: str | None = None

    @property
    def is_player(self) -> bool:
        return self.embed_url is not None


@dataclass
class ItemRow:
    """One item in a category listing."""

    item_id: str
    title: str
    category: str
    button: ButtonState = ButtonState.ADDABLE

    # Text items
    full_text: str | None = None
    preview_text: str | None = None  # Only set when the body is truncated
    expanded: bool = False

    # Link items
    media: MediaView | None = None

    @property
    def has_toggle(self) -> bool:
        return self.preview_text is not None

    @property
    def visible_text(self) -> str | None:
        if self.has_toggle and not self.expanded:
            return self.preview_text
        return self.full_text

    @property
    def toggle_label(self) -> str | None:
        if not self.has_toggle:
            return None
        return "Show Less" if self.expanded else "Show More"

    def toggle(self) -> None:
        """Switch between preview and full text."""
        if self.has_toggle:
            self.expanded = not self.expanded


@dataclass
class CategoryView:
    """A category listing."""

    category: str
    status: ViewStatus
    message: str = ""
    rows: list[ItemRow] = field(default_factory=list)

    def get_row(self, item_id: str) -> ItemRow | None:
        for row in self.rows:
            if row.item_id == item_id:
                return row
        return None


@dataclass
class WishlistGroup:
    category: str
    name: str
    entries: list[dict[str, str]]


@dataclass
class WishlistPanel:
    """Summary of the visitor's selection."""

    summary: list[str]
    groups: list[WishlistGroup]
    is_empty: bool

    @property
    def show_generate(self) -> bool:
        return not self.is_empty


EMPTY_WISHLIST_MESSAGE = "Your wishlist is currently empty. Add items from the content pages."


def build_row(item: dict[str, Any], category: str, is_media_category: bool) -> ItemRow:
    """Build the row for one API item."""
    row = ItemRow(item_id=item["id"], title=item.get("title", ""), category=category)

    content = item.get("content")
    link = item.get("link")
    if content:
        row.full_text = content
        if len(content) > PREVIEW_LENGTH:
            row.preview_text = content[:PREVIEW_LENGTH] + "..."
    elif link and is_media_category:
        video_id = extract_youtube_video_id(link)
        if video_id:
            row.media = MediaView(
                link=link, label="YouTube video player", embed_url=youtube_embed_url(video_id)
            )
        else:
            logger.warning("Could not extract YouTube ID for %s: %s", row.title, link)
            row.media = MediaView(link=link, label="Listen (External Link)")
    elif link:
        row.media = MediaView(link=link, label="Link")
    return row


# =============================================================================
# Browser
# =============================================================================


class ContentBrowser:
    """
    Drives category listings and the wishlist for one visitor.

    The selection store is passed in explicitly; the browser never
    touches local storage itself.
    """

    def __init__(
        self,
        client: ContentClient,
        selection: SelectionStore,
        notify: Notifier | None = None,
        on_change: Callable[[CategoryView], None] | None = None,
    ):
        self.client = client
        self.selection = selection
        self.notify = notify or log_notice
        self.on_change = on_change
        self.view: CategoryView | None = None

    def _set_view(self, view: CategoryView) -> CategoryView:
        self.view = view
        if self.on_change:
            self.on_change(view)
        return view

    async def load(self, category: str) -> CategoryView:
        """Fetch and build a category listing."""
        descriptor = self.selection.categories.get(category)
        key = descriptor.key
        self._set_view(CategoryView(key, ViewStatus.LOADING, f"Loading {key}..."))

        try:
            items = await self.client.list_items(key)
        except ApiError as e:
            logger.error("Error fetching %s: %s", key, e)
            return self._set_view(CategoryView(
                key, ViewStatus.ERROR,
                f"Error loading {key}: {e.message}. Please try again later.",
            ))

        rows = []
        for item in items if isinstance(items, list) else []:
            if not isinstance(item, dict) or not item.get("id"):
                logger.warning("Item received from API is missing an id: %r", item)
                continue
            rows.append(build_row(item, key, descriptor.is_media))

        if not rows:
            return self._set_view(
                CategoryView(key, ViewStatus.EMPTY, f"No {key} have been added yet.")
            )

        view = CategoryView(key, ViewStatus.READY, rows=rows)
        self._refresh_buttons(view)
        return self._set_view(view)

    def _refresh_buttons(self, view: CategoryView | None = None) -> None:
        view = view or self.view
        if view is None:
            return
        for row in view.rows:
            row.button = self.selection.button_state(view.category, row.item_id)

    def toggle(self, item_id: str) -> ItemRow | None:
        """Toggle preview/full text of a row in the current listing."""
        row = self.view.get_row(item_id) if self.view else None
        if row:
            row.toggle()
        return row

    def add(self, item_id: str) -> AddOutcome | None:
        """Add a row of the current listing to the wishlist."""
        row = self.view.get_row(item_id) if self.view else None
        if row is None:
            self.notify(f"Item {item_id} is not in the current listing.")
            return None
        outcome = self.selection.add(row.category, row.item_id, row.title)
        self._refresh_buttons()
        return outcome

    def remove(self, category: str, item_id: str) -> bool:
        """Remove an entry from the wishlist."""
        removed = self.selection.remove(category, item_id)
        self._refresh_buttons()
        return removed

    def wishlist_panel(self) -> WishlistPanel:
        """Build the wishlist summary in category order."""
        summary = []
        groups = []
        for descriptor in self.selection.categories:
            entries = self.selection.items(descriptor.key)
            summary.append(
                f"{descriptor.display_name}: {len(entries)} / "
                f"{self.selection.max_items} selected"
            )
            if entries:
                groups.append(WishlistGroup(descriptor.key, descriptor.display_name, entries))
        return WishlistPanel(summary=summary, groups=groups, is_empty=not groups)

    async def generate(self, destination: str | Path = ".") -> Path | None:
        """
        Request the service plan and save it into a directory.

        Returns:
            Path of the saved file, or None if nothing was generated
        """
        payload = self.selection.to_payload()
        if not any(payload.values()):
            self.notify(
                "Your wishlist is empty. Please add some items before generating a PDF."
            )
            return None

        try:
            document = await self.client.generate_pdf(payload)
        except ApiError as e:
            logger.error("Error generating PDF: %s", e)
            self.notify(f"Could not generate PDF: {e.message}")
            return None

        # Only the final path component of the server's hint is used
        path = Path(destination) / Path(document.filename).name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(document.data)
        return path


# =============================================================================
# Text Rendering
# =============================================================================


def render_category(view: CategoryView) -> str:
    """Render a category listing as plain text."""
    if view.status != ViewStatus.READY:
        return view.message

    blocks = []
    for row in view.rows:
        lines = [f"[{row.item_id}] {row.title}"]
        if row.visible_text is not None:
            lines.append(row.visible_text)
        if row.toggle_label:
            lines.append(f"({row.toggle_label})")
        if row.media:
            if row.media.is_player:
                lines.append(f"Player: {row.media.embed_url}")
            else:
                lines.append(f"{row.media.label}: {row.media.link}")
        state = "" if row.button.enabled else " (disabled)"
        lines.append(f"<{row.button.label}>{state}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def render_wishlist(panel: WishlistPanel) -> str:
    """Render the wishlist panel as plain text."""
    lines = list(panel.summary)
    lines.append("")
    if panel.is_empty:
        lines.append(EMPTY_WISHLIST_MESSAGE)
    for group in panel.groups:
        lines.append(f"{group.name}:")
        for entry in group.entries:
            lines.append(f"  - {entry['title']} [{entry['id']}]")
    if panel.show_generate:
        lines.append("")
        lines.append("Run `memorial generate` to download the service plan.")
    return "\n".join(lines)
