"""
Shared fixtures: report templates built in memory with openpyxl.
"""

from io import BytesIO
from typing import Callable, Sequence

import pytest
from openpyxl import Workbook, load_workbook


def workbook_bytes(workbook: Workbook) -> bytes:
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def reopen(content: bytes):
    """Load generated bytes back and return the first worksheet."""
    return load_workbook(BytesIO(content)).worksheets[0]


def build_discharge_template(
    organization_ids: Sequence[object],
    merge_start_time_row: int | None = None,
    totals_sum_column: str | None = None,
) -> bytes:
    """Title row, header row, one row per marker, then a totals row."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Ташламалар"
    sheet["B1"] = "Салт ташламалар тўғрисида маълумот"
    sheet["A2"] = "ID"
    sheet["B2"] = "№"
    sheet["C2"] = "Ташкилот"
    for offset, marker in enumerate(organization_ids):
        row = 3 + offset
        sheet[f"A{row}"] = marker
        sheet[f"C{row}"] = f"ГЭС {marker}"
    totals_row = 3 + len(organization_ids)
    sheet[f"B{totals_row}"] = "Жами"
    if totals_sum_column is not None and organization_ids:
        column = totals_sum_column
        sheet[f"{column}{totals_row}"] = f"=SUM({column}3:{column}{totals_row - 1})"
    if merge_start_time_row is not None:
        sheet.merge_cells(f"D{merge_start_time_row}:E{merge_start_time_row}")
    return workbook_bytes(workbook)


@pytest.fixture
def discharge_template() -> Callable[..., bytes]:
    return build_discharge_template


@pytest.fixture
def blank_template() -> bytes:
    workbook = Workbook()
    workbook.active.title = "СВОД"
    workbook.active["A1"] = "Сув омборлари бўйича маълумот"
    return workbook_bytes(workbook)
