"""
Tests for the hourly reservoir report.
"""

from io import BytesIO

import pytest
from openpyxl import load_workbook

from conftest import reopen
from hydro_reports.application.hourly_report import MAX_RESERVOIRS, generate_hourly_report
from hydro_reports.domain.models import HourlyReport


def _reservoir(org_id: int) -> dict:
    return {
        "organization_id": org_id,
        "weather": {"day_begin": 12.0, "current": 18.5},
        "level": {"day_begin": 880.1, "current": 880.3},
        "volume": {"day_begin": 1500.0, "current": 1502.5},
        "income": [100.0, 110.0, None, 130.0, 140.0, 150.0],
        "release": 95.5,
        "income_at_day_begin": 90.0,
    }


@pytest.fixture
def report():
    return HourlyReport.from_row(
        {
            "latest_time": "14:00",
            "period": "19.10.2026 06:00 - 14:00",
            "reservoirs": [_reservoir(org_id) for org_id in range(1, 8)],
        }
    )


class TestGenerateHourlyReport:

    def test_header_cells(self, blank_template, report):
        sheet = reopen(generate_hourly_report(blank_template, report))

        assert sheet["R2"].value == "14:00"
        assert sheet["S2"].value == "19.10.2026 06:00 - 14:00"

    def test_reservoir_rows(self, blank_template, report):
        sheet = reopen(generate_hourly_report(blank_template, report))

        assert [sheet["B6"].value, sheet["C6"].value] == [12.0, 18.5]
        assert [sheet["D6"].value, sheet["E6"].value] == [880.1, 880.3]
        assert [sheet["G6"].value, sheet["H6"].value] == [1500.0, 1502.5]
        assert [sheet[f"{column}6"].value for column in "JKLMNO"] == [100.0, 110.0, None, 130.0, 140.0, 150.0]
        assert sheet["Q6"].value == 95.5
        assert sheet["R6"].value is None
        assert sheet["S6"].value == 90.0

    def test_only_six_reservoirs_fit(self, blank_template, report):
        assert len(report.reservoirs) > MAX_RESERVOIRS

        sheet = reopen(generate_hourly_report(blank_template, report))

        assert [sheet[f"Q{row}"].value for row in range(6, 12)] == [95.5] * 6
        assert [sheet[f"R{row}"].value for row in range(6, 12)] == [None] * 6
        assert sheet["Q12"].value is None
        assert sheet["B12"].value is None

    def test_formulas_recalculate_on_open(self, blank_template, report):
        workbook = load_workbook(BytesIO(generate_hourly_report(blank_template, report)))
        assert workbook.calculation.fullCalcOnLoad is True
