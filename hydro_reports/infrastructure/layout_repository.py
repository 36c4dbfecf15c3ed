"""Infrastructure adapter for reservoir layout files."""

from __future__ import annotations

import json
from pathlib import Path

from hydro_reports.domain.layout import ReservoirLayout, layout_from_dict


def load_reservoir_layout(path: str | Path) -> ReservoirLayout:
    layout_path = Path(path)
    if not layout_path.exists():
        raise FileNotFoundError(f"Layout file not found: {layout_path}")
    payload = json.loads(layout_path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Layout file must contain a JSON object: {layout_path}")
    return layout_from_dict(payload)
