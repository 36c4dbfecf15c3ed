"""Application service writing reservoir metrics into layout cells."""

from __future__ import annotations

import logging
from typing import Sequence

from hydro_reports.domain.layout import MetricCells, ReservoirLayout
from hydro_reports.domain.models import OrgSummary, PeriodMetric
from hydro_reports.infrastructure.workbook import TemplateWorkbook

logger = logging.getLogger(__name__)


def _write_metric(book: TemplateWorkbook, cells: MetricCells, metric: PeriodMetric) -> None:
    book.set_cell(cells.current, metric.current)
    if cells.diff is not None:
        book.set_cell(cells.diff, metric.diff)
    if cells.year_ago is not None:
        book.set_cell(cells.year_ago, metric.year_ago)
    if cells.two_years_ago is not None:
        book.set_cell(cells.two_years_ago, metric.two_years_ago)


def write_org_summaries(book: TemplateWorkbook, layout: ReservoirLayout, summaries: Sequence[OrgSummary]) -> int:
    """Write each summary into the cells bound to its organization; returns the number written."""
    written = 0
    for summary in summaries:
        binding = layout.binding_for(summary.organization_id)
        if binding is None:
            logger.warning(
                "No layout slot for organization %s (%s); skipped",
                summary.organization_id,
                summary.organization_name,
            )
            continue
        for family, cells in binding.cells.items():
            _write_metric(book, cells, summary.metric(family) or PeriodMetric())
        written += 1
    return written
