"""Application layer package."""

from .aggregation import aggregate_discharges
from .discharge_report import generate_discharge_report
from .finalize import finalize_sheet
from .hourly_report import generate_hourly_report
from .metrics_writer import write_org_summaries
from .reservoir_report import ExportFormat, ExportResult, export_reservoir_summary, generate_reservoir_summary_report
from .slots import prune_slots, resolve_slots

__all__ = [
    "aggregate_discharges",
    "resolve_slots",
    "prune_slots",
    "write_org_summaries",
    "finalize_sheet",
    "generate_discharge_report",
    "generate_reservoir_summary_report",
    "export_reservoir_summary",
    "generate_hourly_report",
    "ExportFormat",
    "ExportResult",
]
