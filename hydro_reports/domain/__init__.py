"""Domain layer package."""

from .duration import format_duration
from .layout import FamilyColumns, MetricCells, ReservoirLayout, SlotBinding, grid_layout, layout_from_dict
from .models import (
    DischargeEvent,
    HourlyReport,
    HourlyReservoir,
    MetricFamily,
    OrgSummary,
    PeriodMetric,
    ReportRow,
)
from .slots import SlotMap, parse_marker, renumber_after_removal

__all__ = [
    "DischargeEvent",
    "ReportRow",
    "MetricFamily",
    "PeriodMetric",
    "OrgSummary",
    "HourlyReport",
    "HourlyReservoir",
    "SlotMap",
    "parse_marker",
    "renumber_after_removal",
    "format_duration",
    "MetricCells",
    "FamilyColumns",
    "SlotBinding",
    "ReservoirLayout",
    "grid_layout",
    "layout_from_dict",
]
