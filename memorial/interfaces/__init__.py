"""Interfaces - adapters for content to exit the system."""

from memorial.interfaces.base import OutputInterface, ExportResult
from memorial.interfaces.output import PDFExportInterface

__all__ = [
    "OutputInterface",
    "ExportResult",
    "PDFExportInterface",
]
