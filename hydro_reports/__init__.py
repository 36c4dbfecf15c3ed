"""Template-based report generation for hydro facilities."""

from .application import (
    ExportFormat,
    ExportResult,
    aggregate_discharges,
    export_reservoir_summary,
    generate_discharge_report,
    generate_hourly_report,
    generate_reservoir_summary_report,
)
from .config import Settings, load_settings
from .domain import DischargeEvent, HourlyReport, OrgSummary, ReservoirLayout, grid_layout
from .errors import (
    CellWriteError,
    ExternalConversionError,
    ReportGenerationError,
    RowRemovalError,
    TemplateOpenError,
)
from .infrastructure import LibreOfficeConverter, TemplateWorkbook, load_reservoir_layout

__all__ = [
    "DischargeEvent",
    "OrgSummary",
    "HourlyReport",
    "ReservoirLayout",
    "grid_layout",
    "aggregate_discharges",
    "generate_discharge_report",
    "generate_reservoir_summary_report",
    "export_reservoir_summary",
    "generate_hourly_report",
    "ExportFormat",
    "ExportResult",
    "TemplateWorkbook",
    "LibreOfficeConverter",
    "load_reservoir_layout",
    "Settings",
    "load_settings",
    "ReportGenerationError",
    "TemplateOpenError",
    "CellWriteError",
    "RowRemovalError",
    "ExternalConversionError",
]
