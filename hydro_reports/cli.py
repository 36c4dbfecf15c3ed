"""Command-line entrypoint for generating reports from JSON records."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Sequence

from hydro_reports.application import (
    ExportFormat,
    export_reservoir_summary,
    generate_discharge_report,
    generate_hourly_report,
)
from hydro_reports.application.reporting.formatting import parse_report_date
from hydro_reports.config import (
    DISCHARGE_TEMPLATE,
    RESERVOIR_HOURLY_TEMPLATE,
    RESERVOIR_SUMMARY_TEMPLATE,
    Settings,
    load_settings,
)
from hydro_reports.domain.models import DischargeEvent, HourlyReport, OrgSummary
from hydro_reports.errors import ReportGenerationError
from hydro_reports.infrastructure.layout_repository import load_reservoir_layout
from hydro_reports.infrastructure.pdf_converter import LibreOfficeConverter

logger = logging.getLogger(__name__)


def _report_date(value: str) -> date:
    try:
        return parse_report_date(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Invalid date format. Expected YYYY-MM-DD") from exc


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Input JSON file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def _read_records(path: Path) -> list[dict[str, Any]]:
    payload = _read_json(path)
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON list of records in {path}")
    return payload


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hydro-reports", description="Fill report templates from JSON records.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    discharge = subparsers.add_parser("discharge", help="Idle discharge report")
    discharge.add_argument("--input", type=Path, required=True, help="JSON list of discharge events")
    discharge.add_argument("--output", type=Path, required=True)
    discharge.add_argument("--template", type=Path)
    discharge.add_argument("--timezone", help="Display time zone (default from settings)")

    summary = subparsers.add_parser("reservoir-summary", help="Reservoir summary (СВОД) report")
    summary.add_argument("--date", type=_report_date, required=True, help="Report date, YYYY-MM-DD")
    summary.add_argument("--input", type=Path, required=True, help="JSON list of reservoir summary records")
    summary.add_argument("--output", type=Path, help="Target file or directory (default: standard file name)")
    summary.add_argument("--format", choices=[fmt.value for fmt in ExportFormat], default=ExportFormat.EXCEL.value)
    summary.add_argument("--layout", type=Path, help="JSON layout file (default from settings)")
    summary.add_argument("--template", type=Path)

    hourly = subparsers.add_parser("reservoir-hourly", help="Hourly reservoir report")
    hourly.add_argument("--input", type=Path, required=True, help="JSON object with the hourly report")
    hourly.add_argument("--output", type=Path, required=True)
    hourly.add_argument("--template", type=Path)
    return parser


def _run_discharge(args: argparse.Namespace, settings: Settings) -> Path:
    events = [DischargeEvent.from_row(row) for row in _read_records(args.input)]
    template = args.template or settings.template_path(DISCHARGE_TEMPLATE)
    content = generate_discharge_report(template, events, args.timezone or settings.timezone)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(content)
    return args.output


def _run_summary(args: argparse.Namespace, settings: Settings) -> Path:
    layout_path = args.layout or settings.reservoir_layout_path
    if layout_path is None:
        raise ValueError("A reservoir layout is required: pass --layout or set HYDRO_REPORTS_RESERVOIR_LAYOUT")
    summaries = [OrgSummary.from_row(row) for row in _read_records(args.input)]
    result = export_reservoir_summary(
        args.template or settings.template_path(RESERVOIR_SUMMARY_TEMPLATE),
        summaries,
        args.date,
        load_reservoir_layout(layout_path),
        export_format=args.format,
        converter=LibreOfficeConverter(settings.soffice_binary, settings.convert_timeout),
    )
    output = args.output
    if output is None:
        output = Path(result.filename)
    elif output.is_dir():
        output = output / result.filename
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.content)
    return output


def _run_hourly(args: argparse.Namespace, settings: Settings) -> Path:
    payload = _read_json(args.input)
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object in {args.input}")
    template = args.template or settings.template_path(RESERVOIR_HOURLY_TEMPLATE)
    content = generate_hourly_report(template, HourlyReport.from_row(payload))
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(content)
    return args.output


_COMMANDS = {
    "discharge": _run_discharge,
    "reservoir-summary": _run_summary,
    "reservoir-hourly": _run_hourly,
}


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = load_settings()
        output = _COMMANDS[args.command](args, settings)
    except (ReportGenerationError, FileNotFoundError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"Report generation failed: {exc}", file=sys.stderr)
        return 1
    print(f"Saved report: {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
