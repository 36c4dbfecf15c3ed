"""Application service for the discharge report use case."""

from __future__ import annotations

import logging
from typing import Sequence

from hydro_reports.application.aggregation import aggregate_discharges
from hydro_reports.application.finalize import finalize_sheet
from hydro_reports.application.reporting.formatting import fmt_date
from hydro_reports.application.reporting.timing import StageClock
from hydro_reports.application.slots import prune_slots, resolve_slots
from hydro_reports.domain.models import DischargeEvent, ReportRow
from hydro_reports.domain.slots import SlotMap
from hydro_reports.errors import ReportGenerationError
from hydro_reports.infrastructure.workbook import TemplateSource, TemplateWorkbook

logger = logging.getLogger(__name__)

NUMBER_COLUMN = "B"
START_DATE_COLUMN = "D"
START_TIME_COLUMN = "E"
FLOW_RATE_COLUMN = "F"
END_DATE_COLUMN = "G"
END_TIME_COLUMN = "H"
DURATION_COLUMN = "I"
VOLUME_COLUMN = "J"
REASON_COLUMN = "K"
PRINT_LAST_COLUMN = "L"


def _write_report_row(book: TemplateWorkbook, row_num: int, row: ReportRow) -> None:
    book.set_cell(f"{START_DATE_COLUMN}{row_num}", fmt_date(row.start_date))
    book.set_cell(f"{START_TIME_COLUMN}{row_num}", row.start_time)
    if row.end_date is not None:
        book.set_cell(f"{END_DATE_COLUMN}{row_num}", fmt_date(row.end_date))
    if row.end_time is not None:
        book.set_cell(f"{END_TIME_COLUMN}{row_num}", row.end_time)
    book.set_cell(f"{DURATION_COLUMN}{row_num}", row.duration_text)
    book.set_cell(f"{FLOW_RATE_COLUMN}{row_num}", row.flow_rate)
    book.set_cell(f"{VOLUME_COLUMN}{row_num}", row.total_volume)
    if row.reason is not None:
        book.set_cell(f"{REASON_COLUMN}{row_num}", row.reason)


def _write_rows(book: TemplateWorkbook, slots: SlotMap, rows: dict[int, ReportRow]) -> None:
    for number, (organization_id, row_num) in enumerate(slots.ordered(), start=1):
        _write_report_row(book, row_num, rows[organization_id])
        book.set_cell(f"{NUMBER_COLUMN}{row_num}", number)


def _clear_markers(book: TemplateWorkbook) -> None:
    for row_num, value in list(book.first_column()):
        if value is not None:
            book.clear_cell(f"A{row_num}")


def generate_discharge_report(
    template: TemplateSource,
    events: Sequence[DischargeEvent],
    display_tz: str,
) -> bytes:
    """Fill the discharge template: one row per organization with events, others removed."""
    clock = StageClock()
    try:
        with TemplateWorkbook.open(template) as book:
            clock.mark("open_template")
            slots = resolve_slots(book)
            clock.mark("resolve_slots")
            rows = aggregate_discharges(events, display_tz)
            clock.mark("aggregate")
            slots = prune_slots(book, slots, rows.keys())
            clock.mark("prune_rows")
            _write_rows(book, slots, rows)
            _clear_markers(book)
            clock.mark("write_cells")
            finalize_sheet(book, slots.highest_row, PRINT_LAST_COLUMN)
            clock.mark("finalize")
            content = book.serialize()
            clock.mark("serialize")
    except ReportGenerationError as exc:
        logger.error("Discharge report generation failed: %s", exc)
        raise

    unmapped = sorted(set(rows).difference(slots))
    if unmapped:
        logger.warning("Organizations with discharges but no template row: %s", unmapped)
    logger.info(
        "Discharge report prepared: organizations=%d, rows=%d, stages=%s, total=%.3fs",
        len(rows),
        len(slots),
        clock.summary(),
        clock.total,
    )
    return content
