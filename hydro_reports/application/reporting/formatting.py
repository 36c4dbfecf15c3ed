"""Shared cell formatting utilities for reporting."""

from __future__ import annotations

from datetime import date, datetime

DATE_FORMAT = "%d.%m.%Y"
TIME_FORMAT = "%H:%M"
ISO_DATE_FORMAT = "%Y-%m-%d"


def fmt_date(value: date | None) -> str | None:
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)


def fmt_time(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime(TIME_FORMAT)


def parse_report_date(value: str) -> date:
    """Parse a YYYY-MM-DD report date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()
