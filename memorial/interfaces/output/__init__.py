"""Output interfaces."""

from memorial.interfaces.output.pdf import PDFExportInterface

__all__ = ["PDFExportInterface"]
