"""Infrastructure layer package."""

from .layout_repository import load_reservoir_layout
from .pdf_converter import DocumentConverter, LibreOfficeConverter
from .workbook import TemplateSource, TemplateWorkbook

__all__ = [
    "TemplateWorkbook",
    "TemplateSource",
    "DocumentConverter",
    "LibreOfficeConverter",
    "load_reservoir_layout",
]
