"""Infrastructure adapter converting workbooks to PDF through LibreOffice."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol

from hydro_reports.errors import ExternalConversionError

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "hydro-reports-pdf-"


class DocumentConverter(Protocol):
    def convert(self, workbook: bytes, stem: str) -> bytes: ...


class LibreOfficeConverter:
    """Runs ``soffice --headless --convert-to pdf`` inside a scratch directory."""

    def __init__(self, binary: str = "soffice", timeout: float = 120.0) -> None:
        self.binary = binary
        self.timeout = timeout

    def _command(self, source: Path, outdir: Path) -> list[str]:
        return [
            self.binary,
            "--headless",
            "--norestore",
            "--convert-to",
            "pdf",
            "--outdir",
            str(outdir),
            str(source),
        ]

    def convert(self, workbook: bytes, stem: str) -> bytes:
        with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX) as scratch:
            workdir = Path(scratch)
            source = workdir / f"{stem}.xlsx"
            source.write_bytes(workbook)

            try:
                result = subprocess.run(
                    self._command(source, workdir),
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                    check=False,
                )
            except FileNotFoundError as exc:
                raise ExternalConversionError(f"converter not found: {self.binary}") from exc
            except subprocess.TimeoutExpired as exc:
                raise ExternalConversionError(f"conversion timed out after {self.timeout:.0f}s") from exc

            if result.returncode != 0:
                detail = (result.stderr or result.stdout or "").strip()
                raise ExternalConversionError(f"converter exited with {result.returncode}: {detail}")

            target = workdir / f"{stem}.pdf"
            if not target.exists():
                raise ExternalConversionError(f"converter produced no output for {source.name}")
            content = target.read_bytes()

        logger.info("Converted %s.xlsx to PDF (%d bytes)", stem, len(content))
        return content
