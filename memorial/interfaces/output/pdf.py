"""
PDF Export Interface - printable service plan.

Lays the template's HTML out onto as many pages as needed with
PyMuPDF's Story API.
"""

from __future__ import annotations

import io
import logging

import fitz  # PyMuPDF

from memorial.core.models import ServicePlan
from memorial.interfaces.base import ExportResult, OutputInterface
from memorial.resources.document_template import DocumentTemplate

logger = logging.getLogger(__name__)


class PDFExportInterface(OutputInterface):
    """Renders service plans to PDF."""

    interface_id = "pdf_export"
    mime_type = "application/pdf"

    async def export(
        self,
        plan: ServicePlan,
        template: DocumentTemplate,
    ) -> ExportResult:
        try:
            data = self.render_pdf(plan, template)
        except (RuntimeError, ValueError) as e:
            logger.exception("PDF rendering failed")
            return ExportResult.failure_result(str(e))

        return ExportResult.success_result(
            data=data,
            filename=template.filename,
            mime_type=self.mime_type,
            items=plan.item_count,
        )

    def render_pdf(self, plan: ServicePlan, template: DocumentTemplate) -> bytes:
        """Lay the plan out page by page and return the PDF bytes."""
        mediabox = fitz.paper_rect(template.page_size)
        if mediabox.is_empty:
            raise ValueError(f"Unknown page size: {template.page_size}")
        margin = template.margin
        where = mediabox + (margin, margin, -margin, -margin)
        if where.is_empty:
            raise ValueError(f"Margin {margin} leaves no room on a {template.page_size} page")

        story = fitz.Story(html=template.render_html(plan), user_css=template.css)
        buffer = io.BytesIO()
        writer = fitz.DocumentWriter(buffer)

        more = True
        pages = 0
        while more:
            device = writer.begin_page(mediabox)
            more, _ = story.place(where)
            story.draw(device)
            writer.end_page()
            pages += 1
        writer.close()

        logger.info("Rendered service plan: %d items on %d pages", plan.item_count, pages)
        return buffer.getvalue()
