"""Environment-driven settings for report generation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DISCHARGE_TEMPLATE = "discharge.xlsx"
RESERVOIR_SUMMARY_TEMPLATE = "res-summary.xlsx"
RESERVOIR_HOURLY_TEMPLATE = "res-summary-hourly.xlsx"

DEFAULT_TEMPLATE_DIR = "templates"
DEFAULT_TIMEZONE = "Asia/Tashkent"
DEFAULT_SOFFICE = "soffice"
DEFAULT_CONVERT_TIMEOUT = 120.0


@dataclass(frozen=True)
class Settings:
    template_dir: Path
    timezone: str
    soffice_binary: str
    convert_timeout: float
    reservoir_layout_path: Path | None = None

    def template_path(self, name: str) -> Path:
        return self.template_dir / name


def _parse_timezone(raw: str) -> str:
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Invalid HYDRO_REPORTS_TIMEZONE: {raw}") from exc
    return raw


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid HYDRO_REPORTS_CONVERT_TIMEOUT: {raw}") from exc
    if timeout <= 0:
        raise ValueError(f"HYDRO_REPORTS_CONVERT_TIMEOUT must be positive, got {timeout}")
    return timeout


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    layout_raw = (env.get("HYDRO_REPORTS_RESERVOIR_LAYOUT") or "").strip()
    return Settings(
        template_dir=Path(env.get("HYDRO_REPORTS_TEMPLATE_DIR") or DEFAULT_TEMPLATE_DIR),
        timezone=_parse_timezone(env.get("HYDRO_REPORTS_TIMEZONE") or DEFAULT_TIMEZONE),
        soffice_binary=env.get("HYDRO_REPORTS_SOFFICE") or DEFAULT_SOFFICE,
        convert_timeout=_parse_timeout(env.get("HYDRO_REPORTS_CONVERT_TIMEOUT") or str(DEFAULT_CONVERT_TIMEOUT)),
        reservoir_layout_path=Path(layout_raw) if layout_raw else None,
    )
