"""
Tests for the LibreOffice converter with subprocess replaced.
"""

import subprocess
from pathlib import Path

import pytest

from hydro_reports.errors import ExternalConversionError
from hydro_reports.infrastructure import pdf_converter
from hydro_reports.infrastructure.pdf_converter import LibreOfficeConverter


class FakeRun:
    """Records the command and mimics soffice writing <stem>.pdf into --outdir."""

    def __init__(self, returncode=0, produce=True, raises=None):
        self.returncode = returncode
        self.produce = produce
        self.raises = raises
        self.commands = []

    def __call__(self, command, **kwargs):
        self.commands.append((command, kwargs))
        if self.raises is not None:
            raise self.raises
        outdir = Path(command[command.index("--outdir") + 1])
        source = Path(command[-1])
        if self.produce and self.returncode == 0:
            (outdir / f"{source.stem}.pdf").write_bytes(b"%PDF " + source.read_bytes())
        return subprocess.CompletedProcess(command, self.returncode, stdout="", stderr="conversion error")

    @property
    def scratch(self):
        command, _ = self.commands[-1]
        return Path(command[command.index("--outdir") + 1])


def _install(monkeypatch, fake):
    monkeypatch.setattr(pdf_converter.subprocess, "run", fake)
    return fake


class TestLibreOfficeConverter:

    def test_successful_conversion(self, monkeypatch):
        fake = _install(monkeypatch, FakeRun())

        content = LibreOfficeConverter(binary="/opt/soffice", timeout=30).convert(b"xlsx-bytes", "reservoir-summary")

        assert content == b"%PDF xlsx-bytes"
        command, kwargs = fake.commands[0]
        assert command[:6] == ["/opt/soffice", "--headless", "--norestore", "--convert-to", "pdf", "--outdir"]
        assert command[-1].endswith("reservoir-summary.xlsx")
        assert kwargs["timeout"] == 30
        assert fake.scratch.name.startswith(pdf_converter.SCRATCH_PREFIX)
        assert not fake.scratch.exists()

    def test_nonzero_exit(self, monkeypatch):
        fake = _install(monkeypatch, FakeRun(returncode=77))

        with pytest.raises(ExternalConversionError, match="77"):
            LibreOfficeConverter().convert(b"data", "report")
        assert not fake.scratch.exists()

    def test_missing_output(self, monkeypatch):
        fake = _install(monkeypatch, FakeRun(produce=False))

        with pytest.raises(ExternalConversionError, match="no output"):
            LibreOfficeConverter().convert(b"data", "report")
        assert not fake.scratch.exists()

    def test_binary_not_found(self, monkeypatch):
        fake = _install(monkeypatch, FakeRun(raises=FileNotFoundError("soffice")))

        with pytest.raises(ExternalConversionError, match="not found"):
            LibreOfficeConverter(binary="missing-soffice").convert(b"data", "report")
        assert not fake.scratch.exists()

    def test_timeout(self, monkeypatch):
        fake = _install(monkeypatch, FakeRun(raises=subprocess.TimeoutExpired(cmd="soffice", timeout=5)))

        with pytest.raises(ExternalConversionError, match="timed out"):
            LibreOfficeConverter(timeout=5).convert(b"data", "report")
        assert not fake.scratch.exists()
