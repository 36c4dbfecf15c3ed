"""Application service for the hourly reservoir report."""

from __future__ import annotations

import logging

from hydro_reports.application.reporting.timing import StageClock
from hydro_reports.domain.models import HourlyReport, HourlyReservoir
from hydro_reports.errors import ReportGenerationError
from hydro_reports.infrastructure.workbook import TemplateSource, TemplateWorkbook

logger = logging.getLogger(__name__)

LATEST_TIME_CELL = "R2"
PERIOD_CELL = "S2"
FIRST_ROW = 6
MAX_RESERVOIRS = 6
INCOME_COLUMNS: tuple[str, ...] = ("J", "K", "L", "M", "N", "O")
ID_COLUMN = "R"


def _write_reservoir(book: TemplateWorkbook, row: int, reservoir: HourlyReservoir) -> None:
    book.set_cell(f"B{row}", reservoir.weather.day_begin)
    book.set_cell(f"C{row}", reservoir.weather.current)
    book.set_cell(f"D{row}", reservoir.level.day_begin)
    book.set_cell(f"E{row}", reservoir.level.current)
    book.set_cell(f"G{row}", reservoir.volume.day_begin)
    book.set_cell(f"H{row}", reservoir.volume.current)
    for column, value in zip(INCOME_COLUMNS, reservoir.income):
        book.set_cell(f"{column}{row}", value)
    book.set_cell(f"Q{row}", reservoir.release)
    book.set_cell(f"{ID_COLUMN}{row}", reservoir.organization_id)
    book.set_cell(f"S{row}", reservoir.income_at_day_begin)


def _clear_ids(book: TemplateWorkbook) -> None:
    for row in range(FIRST_ROW, FIRST_ROW + MAX_RESERVOIRS):
        book.clear_cell(f"{ID_COLUMN}{row}")


def generate_hourly_report(template: TemplateSource, report: HourlyReport) -> bytes:
    clock = StageClock()
    if len(report.reservoirs) > MAX_RESERVOIRS:
        logger.warning(
            "Hourly report has %d reservoirs; only the first %d fit the template",
            len(report.reservoirs),
            MAX_RESERVOIRS,
        )
    try:
        with TemplateWorkbook.open(template) as book:
            clock.mark("open_template")
            book.set_cell(LATEST_TIME_CELL, report.latest_time)
            book.set_cell(PERIOD_CELL, report.period)
            for offset, reservoir in enumerate(report.reservoirs[:MAX_RESERVOIRS]):
                _write_reservoir(book, FIRST_ROW + offset, reservoir)
            clock.mark("write_cells")
            book.recalculate()
            _clear_ids(book)
            content = book.serialize()
            clock.mark("serialize")
    except ReportGenerationError as exc:
        logger.error("Hourly report generation failed: %s", exc)
        raise

    logger.info("Hourly report prepared: reservoirs=%d, stages=%s", min(len(report.reservoirs), MAX_RESERVOIRS), clock.summary())
    return content
