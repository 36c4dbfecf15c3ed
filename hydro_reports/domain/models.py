"""Domain models for discharge and reservoir reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Mapping

FLOW_RATE_DIVISOR = 0.0864


def _to_optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def to_utc(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_optional_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(text))


@dataclass(frozen=True)
class DischargeEvent:
    """One idle-discharge record as fetched from storage."""

    organization_id: int | None
    organization_name: str
    started_at: datetime
    ended_at: datetime | None
    total_volume: float
    reason: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DischargeEvent":
        started_at = _to_optional_datetime(row.get("started_at"))
        if started_at is None:
            raise ValueError("Discharge record is missing 'started_at'")
        return cls(
            organization_id=_to_optional_int(row.get("organization_id")),
            organization_name=str(row.get("organization_name", "") or ""),
            started_at=started_at,
            ended_at=_to_optional_datetime(row.get("ended_at")),
            total_volume=_to_optional_float(row.get("total_volume")) or 0.0,
            reason=_to_optional_text(row.get("reason")),
        )


@dataclass(frozen=True)
class ReportRow:
    """Per-organization discharge summary, one row of the report."""

    organization_id: int
    organization_name: str
    start_date: date
    start_time: str
    end_date: date | None
    end_time: str | None
    duration_text: str
    total_volume: float
    reason: str | None = None

    @property
    def flow_rate(self) -> float:
        # million m3 per day -> m3/s
        return self.total_volume / FLOW_RATE_DIVISOR


class MetricFamily(str, Enum):
    LEVEL = "level"
    VOLUME = "volume"
    INCOME = "income"
    RELEASE = "release"
    INCOMING_VOLUME = "incoming_volume"
    SNOW_COVER = "snow_cover"


@dataclass(frozen=True)
class PeriodMetric:
    current: float | None = None
    previous: float | None = None
    year_ago: float | None = None
    two_years_ago: float | None = None

    @property
    def diff(self) -> float | None:
        if self.current is None or self.previous is None:
            return None
        return self.current - self.previous


_FOUR_POINT_FAMILIES = (
    MetricFamily.LEVEL,
    MetricFamily.VOLUME,
    MetricFamily.INCOME,
    MetricFamily.RELEASE,
)


@dataclass(frozen=True)
class OrgSummary:
    """Multi-period readings of one reservoir; organization_id is None for the totals row."""

    organization_id: int | None
    organization_name: str
    metrics: Mapping[MetricFamily, PeriodMetric] = field(default_factory=dict)

    def metric(self, family: MetricFamily) -> PeriodMetric | None:
        return self.metrics.get(family)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "OrgSummary":
        metrics: dict[MetricFamily, PeriodMetric] = {}
        for family in _FOUR_POINT_FAMILIES:
            prefix = family.value
            metrics[family] = PeriodMetric(
                current=_to_optional_float(row.get(f"{prefix}_current")),
                previous=_to_optional_float(row.get(f"{prefix}_prev")),
                year_ago=_to_optional_float(row.get(f"{prefix}_year_ago")),
                two_years_ago=_to_optional_float(row.get(f"{prefix}_two_years_ago")),
            )

        metrics[MetricFamily.SNOW_COVER] = PeriodMetric(
            current=_to_optional_float(row.get("modsnow_current")),
            year_ago=_to_optional_float(row.get("modsnow_year_ago")),
        )

        # Manually stored values take precedence over computed ones.
        incoming = _to_optional_float(row.get("stored_incoming_volume"))
        if incoming is None:
            incoming = _to_optional_float(row.get("incoming_volume_mln_m3"))
        incoming_prev_year = _to_optional_float(row.get("stored_incoming_volume_prev_year"))
        if incoming_prev_year is None:
            incoming_prev_year = _to_optional_float(row.get("incoming_volume_mln_m3_prev_year"))
        metrics[MetricFamily.INCOMING_VOLUME] = PeriodMetric(current=incoming, year_ago=incoming_prev_year)

        return cls(
            organization_id=_to_optional_int(row.get("organization_id")),
            organization_name=str(row.get("organization_name", "") or ""),
            metrics=metrics,
        )


@dataclass(frozen=True)
class DayReading:
    day_begin: float | None = None
    current: float | None = None

    @classmethod
    def from_value(cls, value: Any) -> "DayReading":
        if not isinstance(value, Mapping):
            return cls()
        return cls(
            day_begin=_to_optional_float(value.get("day_begin")),
            current=_to_optional_float(value.get("current")),
        )


@dataclass(frozen=True)
class HourlyReservoir:
    organization_id: int | None
    weather: DayReading = DayReading()
    level: DayReading = DayReading()
    volume: DayReading = DayReading()
    income: tuple[float | None, ...] = ()
    release: float | None = None
    income_at_day_begin: float | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "HourlyReservoir":
        raw_income = row.get("income") or []
        return cls(
            organization_id=_to_optional_int(row.get("organization_id")),
            weather=DayReading.from_value(row.get("weather")),
            level=DayReading.from_value(row.get("level")),
            volume=DayReading.from_value(row.get("volume")),
            income=tuple(_to_optional_float(value) for value in raw_income),
            release=_to_optional_float(row.get("release")),
            income_at_day_begin=_to_optional_float(row.get("income_at_day_begin")),
        )


@dataclass(frozen=True)
class HourlyReport:
    latest_time: str
    period: str
    reservoirs: tuple[HourlyReservoir, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "HourlyReport":
        return cls(
            latest_time=str(row.get("latest_time", "") or ""),
            period=str(row.get("period", "") or ""),
            reservoirs=tuple(HourlyReservoir.from_row(item) for item in row.get("reservoirs") or []),
        )
