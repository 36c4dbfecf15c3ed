"""Error kinds raised while generating a report."""

from __future__ import annotations


class ReportGenerationError(Exception):
    """Base failure for any generation stage. Nothing is retried internally."""


class TemplateOpenError(ReportGenerationError):
    pass


class CellWriteError(ReportGenerationError):
    pass


class RowRemovalError(ReportGenerationError):
    pass


class ExternalConversionError(ReportGenerationError):
    """The workbook was built, but the document converter failed."""
