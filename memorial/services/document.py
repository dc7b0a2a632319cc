"""
Document service - turns a visitor's selection into a printable plan.

Titles are never taken from the client: every id is resolved against
the store again at generation time. Ids that no longer resolve (the item
was deleted after it was selected) are dropped rather than failing the
whole request.
"""

from __future__ import annotations

import logging
from typing import Any

from memorial.core.categories import MAX_ITEMS_PER_CATEGORY
from memorial.core.errors import MemorialError, ValidationError
from memorial.core.models import PlanSection, ServicePlan
from memorial.interfaces.base import ExportResult, OutputInterface
from memorial.interfaces.output.pdf import PDFExportInterface
from memorial.resources.document_template import DocumentTemplate
from memorial.services.content import ContentService

logger = logging.getLogger(__name__)


class DocumentService:
    """Resolves selections and exports them through an output interface."""

    def __init__(
        self,
        content_service: ContentService,
        template: DocumentTemplate,
        output: OutputInterface | None = None,
    ):
        self.content_service = content_service
        self.template = template
        self.output = output or PDFExportInterface()

    async def resolve(self, selection: dict[str, Any]) -> ServicePlan:
        """
        Resolve a selection payload into a service plan.

        Args:
            selection: Mapping of category key to a list of item ids

        Returns:
            Plan with one section per category that resolved at least one item

        Raises:
            ValidationError: Malformed payload
        """
        if not isinstance(selection, dict):
            raise ValidationError("Wishlist must be an object of category to item IDs")

        categories = self.content_service.categories
        for key in selection:
            if key not in categories:
                logger.warning("Ignoring unknown category in selection: %s", key)

        plan = ServicePlan()
        for descriptor in categories:
            ids = _selected_ids(selection, descriptor.key)

            section = PlanSection(category=descriptor)
            for item_id in ids:
                if len(section.items) >= MAX_ITEMS_PER_CATEGORY:
                    logger.warning(
                        "Dropping %s item %s: only %d per category are printed",
                        descriptor.key, item_id, MAX_ITEMS_PER_CATEGORY,
                    )
                    continue
                item = await self.content_service.get_item(descriptor.key, item_id)
                if item is None:
                    logger.info("Skipping unresolved %s item %s", descriptor.key, item_id)
                    continue
                section.items.append(item)

            if section.items:
                plan.sections.append(section)

        return plan

    async def generate(self, selection: dict[str, Any]) -> ExportResult:
        """
        Generate the service plan document for a selection.

        Raises:
            ValidationError: Nothing in the selection resolved
            MemorialError: The output interface failed to render
        """
        plan = await self.resolve(selection)
        if plan.is_empty:
            raise ValidationError(
                "Your wishlist is empty. Please add some items before generating a PDF."
            )

        result = await self.output.export(plan, self.template)
        if not result.success:
            raise MemorialError(f"Document generation failed: {result.error}")

        logger.info(
            "Generated %s (%d bytes, %d items)",
            result.filename, result.size_bytes, plan.item_count,
        )
        return result


def _selected_ids(selection: dict[str, Any], key: str) -> list[str]:
    """Ids selected for one category, de-duplicated, order kept."""
    raw = selection.get(key) or []
    if not isinstance(raw, list):
        raise ValidationError(f"Selection for {key} must be a list of item IDs")

    ids: list[str] = []
    for value in raw:
        if isinstance(value, str) and value not in ids:
            ids.append(value)
    return ids
