"""Application service mapping organizations to template rows."""

from __future__ import annotations

import logging
from typing import AbstractSet

from hydro_reports.domain.slots import SlotMap, parse_marker
from hydro_reports.infrastructure.workbook import TemplateWorkbook

logger = logging.getLogger(__name__)


def resolve_slots(book: TemplateWorkbook) -> SlotMap:
    """Read organization IDs from column A. A repeated ID keeps its last row."""
    rows: dict[int, int] = {}
    for row, value in book.first_column():
        organization_id = parse_marker(value)
        if organization_id is None:
            continue
        if organization_id in rows:
            logger.warning("Organization %s marked on rows %s and %s; using row %s", organization_id, rows[organization_id], row, row)
        rows[organization_id] = row
    return SlotMap(rows)


def prune_slots(book: TemplateWorkbook, slots: SlotMap, keep: AbstractSet[int]) -> SlotMap:
    """Delete the rows of organizations not in ``keep`` and return the renumbered map."""
    doomed = sorted((row for organization_id, row in slots.rows.items() if organization_id not in keep), reverse=True)
    for row in doomed:
        book.remove_row(row)
    if doomed:
        logger.debug("Removed %d template rows without data: %s", len(doomed), doomed)
    return slots.without(doomed)
