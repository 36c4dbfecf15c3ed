"""Final pass over a filled sheet before serialization."""

from __future__ import annotations

from hydro_reports.infrastructure.workbook import TemplateWorkbook


def finalize_sheet(book: TemplateWorkbook, last_row: int | None, last_column: int | str | None = None) -> str:
    """Recalculate formulas on open and bound the print area to ``last_row`` (row 1 when None)."""
    book.recalculate()
    return book.set_print_area(last_row or 1, last_column)
