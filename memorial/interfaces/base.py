"""
Base classes for output interfaces.

An output interface turns a resolved ServicePlan into a downloadable
file. The result goes straight back to the requester; nothing is kept
on the server.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from memorial.core.models import ServicePlan
from memorial.resources.document_template import DocumentTemplate


@dataclass
class ExportResult:
    """A rendered document, or the reason it could not be rendered."""

    success: bool
    data: bytes = b""
    filename: str = ""
    mime_type: str = "application/octet-stream"
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @classmethod
    def success_result(
        cls, data: bytes, filename: str, mime_type: str, **details
    ) -> ExportResult:
        return cls(True, data=data, filename=filename, mime_type=mime_type, details=details)

    @classmethod
    def failure_result(cls, error: str) -> ExportResult:
        return cls(False, error=error)


class OutputInterface(ABC):
    """
    Renders a service plan with a document template.

    Subclasses set `interface_id` and implement `export`. Rendering
    problems are returned as a failed ExportResult rather than raised.
    """

    interface_id: str = ""
    mime_type: str = "application/octet-stream"

    @abstractmethod
    async def export(self, plan: ServicePlan, template: DocumentTemplate) -> ExportResult:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.interface_id}>"
