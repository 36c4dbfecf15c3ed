"""Application service for the reservoir summary report and its export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Sequence

from hydro_reports.application.finalize import finalize_sheet
from hydro_reports.application.metrics_writer import write_org_summaries
from hydro_reports.application.reporting.formatting import ISO_DATE_FORMAT, fmt_date
from hydro_reports.application.reporting.timing import StageClock
from hydro_reports.domain.layout import ReservoirLayout
from hydro_reports.domain.models import OrgSummary
from hydro_reports.errors import ReportGenerationError
from hydro_reports.infrastructure.pdf_converter import DocumentConverter, LibreOfficeConverter
from hydro_reports.infrastructure.workbook import TemplateSource, TemplateWorkbook

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "СВОД"
CONVERSION_STEM = "reservoir-summary"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"


class ExportFormat(str, Enum):
    EXCEL = "excel"
    PDF = "pdf"


@dataclass(frozen=True)
class ExportResult:
    content: bytes
    filename: str
    media_type: str


def generate_reservoir_summary_report(
    template: TemplateSource,
    summaries: Sequence[OrgSummary],
    report_date: date,
    layout: ReservoirLayout,
) -> bytes:
    """Fill the reservoir summary template through ``layout``; summaries are written in caller order."""
    clock = StageClock()
    try:
        with TemplateWorkbook.open(template) as book:
            clock.mark("open_template")
            if layout.date_cell is not None:
                book.set_cell(layout.date_cell, fmt_date(report_date))
            written = write_org_summaries(book, layout, summaries)
            clock.mark("write_cells")
            finalize_sheet(book, layout.last_row)
            clock.mark("finalize")
            content = book.serialize()
            clock.mark("serialize")
    except ReportGenerationError as exc:
        logger.error("Reservoir summary generation failed for %s: %s", report_date, exc)
        raise

    logger.info(
        "Reservoir summary prepared: date=%s, summaries=%d, written=%d, stages=%s",
        report_date.isoformat(),
        len(summaries),
        written,
        clock.summary(),
    )
    return content


def export_reservoir_summary(
    template: TemplateSource,
    summaries: Sequence[OrgSummary],
    report_date: date,
    layout: ReservoirLayout,
    export_format: ExportFormat | str = ExportFormat.EXCEL,
    converter: DocumentConverter | None = None,
) -> ExportResult:
    """Build the summary workbook and return it as Excel or as a converted PDF."""
    fmt = ExportFormat(export_format)
    workbook = generate_reservoir_summary_report(template, summaries, report_date, layout)
    stem = f"{FILENAME_PREFIX}-{report_date.strftime(ISO_DATE_FORMAT)}"
    if fmt is ExportFormat.EXCEL:
        return ExportResult(content=workbook, filename=f"{stem}.xlsx", media_type=XLSX_MEDIA_TYPE)

    active_converter = converter if converter is not None else LibreOfficeConverter()
    try:
        document = active_converter.convert(workbook, CONVERSION_STEM)
    except ReportGenerationError as exc:
        logger.error("PDF conversion failed for %s: %s", report_date, exc)
        raise
    return ExportResult(content=document, filename=f"{stem}.pdf", media_type=PDF_MEDIA_TYPE)
