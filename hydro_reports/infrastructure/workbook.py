"""Infrastructure adapter over openpyxl for template-based workbooks."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from io import BytesIO
from pathlib import Path
from typing import Any, Iterator, Union
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import CellCoordinatesException, IllegalCharacterError, InvalidFileException
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.formula import ArrayFormula
from openpyxl.worksheet.worksheet import Worksheet

from hydro_reports.errors import CellWriteError, ReportGenerationError, RowRemovalError, TemplateOpenError
from hydro_reports.infrastructure.formulas import shift_formula, shift_reference

logger = logging.getLogger(__name__)

TemplateSource = Union[str, Path, bytes]

_CELL_ERRORS = (ValueError, TypeError, AttributeError, IndexError, CellCoordinatesException, IllegalCharacterError)


class TemplateWorkbook:
    """One opened template; writes go to a single worksheet."""

    def __init__(self, workbook: Workbook, sheet: Worksheet) -> None:
        self._workbook = workbook
        self._sheet = sheet

    @classmethod
    def load(cls, source: TemplateSource, sheet_name: str | None = None) -> "TemplateWorkbook":
        stream: Any = BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
        try:
            workbook = load_workbook(stream)
        except (OSError, BadZipFile, InvalidFileException, KeyError, ValueError) as exc:
            raise TemplateOpenError(f"failed to open template: {exc}") from exc

        if sheet_name is None:
            if not workbook.worksheets:
                workbook.close()
                raise TemplateOpenError("template has no worksheets")
            return cls(workbook, workbook.worksheets[0])
        if sheet_name not in workbook.sheetnames:
            workbook.close()
            raise TemplateOpenError(f"template has no sheet named {sheet_name!r}")
        return cls(workbook, workbook[sheet_name])

    @classmethod
    @contextmanager
    def open(cls, source: TemplateSource, sheet_name: str | None = None) -> Iterator["TemplateWorkbook"]:
        book = cls.load(source, sheet_name=sheet_name)
        try:
            yield book
        finally:
            book.close()

    @property
    def sheet_title(self) -> str:
        return self._sheet.title

    @property
    def max_row(self) -> int:
        return self._sheet.max_row

    @property
    def max_column(self) -> int:
        return self._sheet.max_column

    @property
    def print_area(self) -> str | None:
        return self._sheet.print_area

    @property
    def full_calc_on_load(self) -> bool:
        return bool(self._workbook.calculation.fullCalcOnLoad)

    def get_cell(self, coordinate: str) -> Any:
        try:
            return self._sheet[coordinate].value
        except _CELL_ERRORS as exc:
            raise ReportGenerationError(f"failed to read cell {coordinate}: {exc}") from exc

    def set_cell(self, coordinate: str, value: Any) -> None:
        try:
            self._sheet[coordinate].value = value
        except _CELL_ERRORS as exc:
            raise CellWriteError(f"failed to set cell {coordinate}: {exc}") from exc

    def clear_cell(self, coordinate: str) -> None:
        self.set_cell(coordinate, None)

    def first_column(self) -> Iterator[tuple[int, Any]]:
        """(row index, value) for every row of column A."""
        for (cell,) in self._sheet.iter_rows(min_col=1, max_col=1):
            yield cell.row, cell.value

    def remove_row(self, row: int) -> None:
        if row < 1 or row > self._sheet.max_row:
            raise RowRemovalError(f"failed to remove row {row}: sheet has {self._sheet.max_row} rows")
        self._sheet.delete_rows(row, 1)
        self._shift_merged_ranges(row)
        self._shift_formulas(row)
        self._shift_defined_names(row)

    def _shift_merged_ranges(self, removed_row: int) -> None:
        # openpyxl moves cells on delete_rows but leaves merge definitions in place.
        for merged in list(self._sheet.merged_cells.ranges):
            if merged.min_row > removed_row:
                merged.shift(row_shift=-1)
            elif merged.min_row == merged.max_row == removed_row:
                self._sheet.merged_cells.ranges.remove(merged)
            elif merged.min_row <= removed_row <= merged.max_row:
                merged.shrink(bottom=1)

    def _shift_formulas(self, removed_row: int) -> None:
        # delete_rows moves formula cells without rewriting their references.
        title = self._sheet.title
        for worksheet in self._workbook.worksheets:
            local = worksheet is self._sheet
            for cells in worksheet.iter_rows():
                for cell in cells:
                    if cell.data_type != "f":
                        continue
                    value = cell.value
                    if isinstance(value, ArrayFormula):
                        value.text = shift_formula(value.text, removed_row, title, local)
                        if local:
                            value.ref = shift_reference(value.ref, removed_row, title)
                    elif isinstance(value, str):
                        cell.value = shift_formula(value, removed_row, title, local)

    def _shift_defined_names(self, removed_row: int) -> None:
        title = self._sheet.title
        scopes = [(self._workbook.defined_names, False)]
        scopes.extend((worksheet.defined_names, worksheet is self._sheet) for worksheet in self._workbook.worksheets)
        for names, local in scopes:
            for defined in names.values():
                if defined.value:
                    defined.value = shift_formula(f"={defined.value}", removed_row, title, local)[1:]

    def recalculate(self) -> None:
        """Have the consuming application recompute every formula when the file is opened."""
        self._workbook.calculation.fullCalcOnLoad = True

    def set_print_area(self, last_row: int, last_column: int | str | None = None) -> str:
        if last_column is None:
            column = get_column_letter(max(self._sheet.max_column, 1))
        elif isinstance(last_column, int):
            column = get_column_letter(last_column)
        else:
            column = last_column
        area = f"A1:{column}{max(last_row, 1)}"
        try:
            self._sheet.print_area = area
        except ValueError as exc:
            raise ReportGenerationError(f"failed to set print area {area}: {exc}") from exc
        logger.debug("Print area of %r set to %s", self._sheet.title, area)
        return area

    def serialize(self) -> bytes:
        buffer = BytesIO()
        try:
            self._workbook.save(buffer)
        except (OSError, ValueError, TypeError) as exc:
            raise ReportGenerationError(f"failed to serialize workbook: {exc}") from exc
        return buffer.getvalue()

    def close(self) -> None:
        self._workbook.close()
