"""
Resources - versioned data loaded from YAML.
"""

from memorial.resources.base import Resource
from memorial.resources.document_template import DocumentTemplate, Section

__all__ = [
    "Resource",
    "DocumentTemplate",
    "Section",
]
