"""Hydro reports entrypoint."""

from __future__ import annotations

from hydro_reports.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
