"""
Document template resource.

Document templates define the presentation of a generated service plan:
the document title, the heading and introduction for each category,
page geometry and the stylesheet. Category order is not a template
concern; it always follows the category registry.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any

from memorial.core.media import extract_youtube_video_id
from memorial.core.models import ContentItem, PlanSection, ServicePlan
from memorial.resources.base import Resource


DEFAULT_CSS = """
body { font-family: serif; font-size: 11pt; }
h1 { font-size: 22pt; text-align: center; }
h2 { font-size: 15pt; margin-top: 18pt; }
h3 { font-size: 12pt; }
p.subtitle, p.prepared { text-align: center; }
p.intro { font-style: italic; }
"""


@dataclass
class Section:
    """Presentation overrides for one category."""

    category: str
    heading: str | None = None
    intro: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"category": self.category}
        if self.heading:
            result["heading"] = self.heading
        if self.intro:
            result["intro"] = self.intro
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Section:
        return cls(
            category=data["category"],
            heading=data.get("heading"),
            intro=data.get("intro", ""),
        )


class DocumentTemplate(Resource):
    """
    A template for the generated service plan.

    Renders a ServicePlan to HTML; output interfaces turn that into the
    final file format.
    """

    def __init__(
        self,
        resource_id: str,
        title: str = "Funeral Service Plan",
        subtitle: str = "",
        filename: str = "funeral_plan.pdf",
        sections: list[Section] | None = None,
        page_size: str = "a4",
        margin: int = 54,
        css: str | None = None,
    ):
        self._resource_id = resource_id
        self.title = title
        self.subtitle = subtitle
        self.filename = filename
        self.page_size = page_size
        self.margin = margin
        self.css = css or DEFAULT_CSS
        self._sections = {s.category: s for s in sections or []}

    @property
    def resource_id(self) -> str:
        return self._resource_id

    @property
    def sections(self) -> list[Section]:
        return list(self._sections.values())

    def get_section(self, category: str) -> Section | None:
        """Get presentation overrides for a category."""
        return self._sections.get(category)

    def heading_for(self, section: PlanSection) -> str:
        override = self.get_section(section.category.key)
        if override and override.heading:
            return override.heading
        return section.heading

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_html(self, plan: ServicePlan) -> str:
        """Render a service plan as an HTML fragment."""
        parts = [f"<h1>{_escape(self.title)}</h1>"]
        if self.subtitle:
            parts.append(f'<p class="subtitle">{_escape(self.subtitle)}</p>')
        parts.append(
            f'<p class="prepared">Prepared on {plan.created_at.strftime("%d %B %Y")}</p>'
        )

        for section in plan.sections:
            parts.append(f"<h2>{_escape(self.heading_for(section))}</h2>")
            override = self.get_section(section.category.key)
            if override and override.intro:
                parts.append(f'<p class="intro">{_escape(override.intro)}</p>')
            for item in section.items:
                parts.append(self._render_item(item))

        return "\n".join(parts)

    def _render_item(self, item: ContentItem) -> str:
        lines = [f"<h3>{_escape(item.title)}</h3>"]
        if item.link is not None:
            link = html.escape(item.link, quote=True)
            lines.append(f'<p class="link"><a href="{link}">{link}</a></p>')
            video_id = extract_youtube_video_id(item.link)
            if video_id:
                lines.append(f'<p class="video">YouTube video: {video_id}</p>')
        else:
            lines.append(f"<p>{_escape(item.content or '')}</p>")
        return "\n".join(lines)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self._resource_id,
            "title": self.title,
            "subtitle": self.subtitle,
            "filename": self.filename,
            "page_size": self.page_size,
            "margin": self.margin,
            "css": self.css,
            "sections": [s.to_dict() for s in self._sections.values()],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocumentTemplate:
        sections = [Section.from_dict(s) for s in data.get("sections", [])]

        return cls(
            resource_id=data["id"],
            title=data.get("title", "Funeral Service Plan"),
            subtitle=data.get("subtitle", ""),
            filename=data.get("filename", "funeral_plan.pdf"),
            sections=sections,
            page_size=data.get("page_size", "a4"),
            margin=data.get("margin", 54),
            css=data.get("css"),
        )


def _escape(text: str) -> str:
    """Escape text for HTML, keeping line breaks."""
    return html.escape(text).replace("\r\n", "\n").replace("\n", "<br>")
