"""
End-to-end tests for the discharge report over in-memory templates.
"""

import logging
from datetime import datetime, timezone

import pytest

from hydro_reports.application.discharge_report import generate_discharge_report
from hydro_reports.domain.models import DischargeEvent
from hydro_reports.errors import CellWriteError, TemplateOpenError
from hydro_reports.infrastructure.workbook import TemplateWorkbook

from conftest import reopen


def _utc(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 10, 19, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def events():
    return [
        DischargeEvent(20, "Андижон ГЭС", _utc(5), _utc(8, 30), 0.864, "ремонт"),
        DischargeEvent(42, "Чорвоқ ГЭС", _utc(6), _utc(7), 0.2, "сел"),
        DischargeEvent(42, "Чорвоқ ГЭС", _utc(9), _utc(12), 0.1, None),
    ]


class TestGenerateDischargeReport:

    def test_rows_without_data_are_removed(self, discharge_template, events):
        template = discharge_template([10, 20, 30, 42, 50])

        sheet = reopen(generate_discharge_report(template, events, "UTC"))

        assert sheet.max_row == 5
        assert sheet["C3"].value == "ГЭС 20"
        assert sheet["C4"].value == "ГЭС 42"
        assert sheet["B5"].value == "Жами"
        assert sheet["B1"].value == "Салт ташламалар тўғрисида маълумот"

    def test_cells_are_filled(self, discharge_template, events):
        sheet = reopen(generate_discharge_report(discharge_template([10, 20, 30, 42, 50]), events, "UTC"))

        assert [sheet["B3"].value, sheet["B4"].value] == [1, 2]
        assert sheet["D3"].value == "19.10.2026"
        assert sheet["E3"].value == "05:00"
        assert sheet["G3"].value == "19.10.2026"
        assert sheet["H3"].value == "08:30"
        assert sheet["I3"].value == "3 соат, 30 минут"
        assert sheet["J3"].value == pytest.approx(0.864)
        assert sheet["F3"].value == pytest.approx(10.0)
        assert sheet["K3"].value == "ремонт"

        assert sheet["E4"].value == "06:00"
        assert sheet["H4"].value == "12:00"
        assert sheet["I4"].value == "6 соат"
        assert sheet["J4"].value == pytest.approx(0.3)
        assert sheet["K4"].value is None

    def test_marker_column_is_cleared(self, discharge_template, events):
        sheet = reopen(generate_discharge_report(discharge_template([10, 20, 30, 42, 50]), events, "UTC"))

        assert [sheet.cell(row=row, column=1).value for row in range(3, sheet.max_row + 1)] == [None, None, None]
        assert sheet["A2"].value == "ID"

    def test_print_area_ends_at_last_data_row(self, discharge_template, events):
        sheet = reopen(generate_discharge_report(discharge_template([10, 20, 30, 42, 50]), events, "UTC"))

        assert "$A$1:$L$4" in str(sheet.print_area)

    def test_display_timezone(self, discharge_template, events):
        sheet = reopen(generate_discharge_report(discharge_template([20]), events[:1], "Asia/Tashkent"))

        assert sheet["E3"].value == "10:00"
        assert sheet["H3"].value == "13:30"

    def test_no_events_removes_every_slot(self, discharge_template):
        sheet = reopen(generate_discharge_report(discharge_template([10, 20, 30]), [], "UTC"))

        assert sheet.max_row == 3
        assert sheet["B3"].value == "Жами"
        assert "$A$1:$L$1" in str(sheet.print_area)

    def test_organization_without_row_is_skipped(self, discharge_template, events, caplog):
        extra = DischargeEvent(99, "Номаълум", _utc(1), _utc(2), 1.0)

        with caplog.at_level(logging.WARNING):
            sheet = reopen(generate_discharge_report(discharge_template([20, 42]), events + [extra], "UTC"))

        assert sheet.max_row == 5
        assert [sheet["B3"].value, sheet["B4"].value] == [1, 2]
        assert "99" in caplog.text

    def test_unreadable_template(self, events):
        with pytest.raises(TemplateOpenError):
            generate_discharge_report(b"not a workbook", events, "UTC")

    def test_write_failure_closes_template(self, discharge_template, events, monkeypatch):
        closed = []
        original_close = TemplateWorkbook.close

        def spy(self):
            closed.append(True)
            original_close(self)

        monkeypatch.setattr(TemplateWorkbook, "close", spy)
        template = discharge_template([20, 42], merge_start_time_row=3)

        with pytest.raises(CellWriteError):
            generate_discharge_report(template, events, "UTC")
        assert closed == [True]

    def test_totals_formula_follows_pruned_rows(self, discharge_template, events):
        template = discharge_template([10, 20, 30, 40], totals_sum_column="J")

        sheet = reopen(generate_discharge_report(template, events[:1], "UTC"))

        assert sheet["B4"].value == "Жами"
        assert sheet["J4"].value == "=SUM(J3:J3)"
