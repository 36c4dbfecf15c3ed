"""Application service grouping discharge events into report rows."""

from __future__ import annotations

from typing import Any, Sequence

import polars as pl

from hydro_reports.application.reporting.formatting import fmt_time
from hydro_reports.domain.duration import format_duration
from hydro_reports.domain.models import DischargeEvent, ReportRow, to_utc

EVENT_SCHEMA: dict[str, Any] = {
    "organization_id": pl.Int64,
    "organization_name": pl.Utf8,
    "started_at": pl.Datetime("us", "UTC"),
    "ended_at": pl.Datetime("us", "UTC"),
    "total_volume": pl.Float64,
    "reason": pl.Utf8,
}


def _events_frame(events: Sequence[DischargeEvent]) -> pl.DataFrame:
    records = [
        {
            "organization_id": event.organization_id,
            "organization_name": event.organization_name,
            "started_at": to_utc(event.started_at),
            "ended_at": to_utc(event.ended_at) if event.ended_at is not None else None,
            "total_volume": float(event.total_volume),
            "reason": event.reason,
        }
        for event in events
        if event.organization_id is not None
    ]
    return pl.DataFrame(records, schema=EVENT_SCHEMA)


def aggregate_frame(events: Sequence[DischargeEvent], display_tz: str) -> pl.DataFrame:
    """One row per organization in first-seen order, timestamps in ``display_tz``.

    ``reason`` is taken from the last event in input order, even when that
    event has none.
    """
    frame = _events_frame(events)
    return (
        frame.group_by("organization_id", maintain_order=True)
        .agg(
            [
                pl.col("organization_name").first(),
                pl.col("started_at").min(),
                pl.col("ended_at").max(),
                pl.col("total_volume").sum(),
                pl.col("reason").last(),
            ]
        )
        .with_columns(
            [
                pl.col("started_at").dt.convert_time_zone(display_tz),
                pl.col("ended_at").dt.convert_time_zone(display_tz),
            ]
        )
    )


def aggregate_discharges(events: Sequence[DischargeEvent], display_tz: str) -> dict[int, ReportRow]:
    """Group events by organization; the keys are the organizations that have data."""
    rows: dict[int, ReportRow] = {}
    for record in aggregate_frame(events, display_tz).iter_rows(named=True):
        started_at = record["started_at"]
        ended_at = record["ended_at"]
        rows[int(record["organization_id"])] = ReportRow(
            organization_id=int(record["organization_id"]),
            organization_name=record["organization_name"] or "",
            start_date=started_at.date(),
            start_time=fmt_time(started_at) or "",
            end_date=ended_at.date() if ended_at is not None else None,
            end_time=fmt_time(ended_at),
            duration_text=format_duration(ended_at - started_at) if ended_at is not None else "",
            total_volume=float(record["total_volume"] or 0.0),
            reason=record["reason"],
        )
    return rows
