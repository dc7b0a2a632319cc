"""Services - content management and document generation."""

from memorial.services.content import CategoryStore, ContentService
from memorial.services.document import DocumentService

__all__ = [
    "CategoryStore",
    "ContentService",
    "DocumentService",
]
