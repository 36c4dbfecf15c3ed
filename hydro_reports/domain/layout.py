"""Cell layout of the reservoir summary template."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Sequence

from openpyxl.utils.cell import coordinate_from_string

from hydro_reports.domain.models import MetricFamily

MAX_ORGANIZATION_SLOTS = 8


@dataclass(frozen=True)
class MetricCells:
    """Target coordinates of one metric family for one organization."""

    current: str
    diff: str | None = None
    year_ago: str | None = None
    two_years_ago: str | None = None

    def coordinates(self) -> Iterator[str]:
        for coordinate in (self.current, self.diff, self.year_ago, self.two_years_ago):
            if coordinate is not None:
                yield coordinate


@dataclass(frozen=True)
class FamilyColumns:
    current: str
    diff: str | None = None
    year_ago: str | None = None
    two_years_ago: str | None = None

    def at(self, row: int) -> MetricCells:
        def _cell(column: str | None) -> str | None:
            return f"{column}{row}" if column is not None else None

        return MetricCells(
            current=f"{self.current}{row}",
            diff=_cell(self.diff),
            year_ago=_cell(self.year_ago),
            two_years_ago=_cell(self.two_years_ago),
        )


DEFAULT_FAMILY_COLUMNS: dict[MetricFamily, FamilyColumns] = {
    MetricFamily.LEVEL: FamilyColumns("C", "D", "E", "F"),
    MetricFamily.VOLUME: FamilyColumns("G", "H", "I", "J"),
    MetricFamily.INCOME: FamilyColumns("K", "L", "M", "N"),
    MetricFamily.RELEASE: FamilyColumns("O", "P", "Q", "R"),
    MetricFamily.INCOMING_VOLUME: FamilyColumns("S", year_ago="T"),
    MetricFamily.SNOW_COVER: FamilyColumns("U", year_ago="V"),
}


@dataclass(frozen=True)
class SlotBinding:
    """Cells reserved for one organization. A family absent from ``cells`` is not reported for it."""

    organization_id: int | None
    cells: Mapping[MetricFamily, MetricCells] = field(default_factory=dict)

    def has_metric(self, family: MetricFamily) -> bool:
        return family in self.cells

    def coordinates(self) -> Iterator[str]:
        for metric_cells in self.cells.values():
            yield from metric_cells.coordinates()


@dataclass(frozen=True)
class ReservoirLayout:
    slots: tuple[SlotBinding, ...]
    totals: SlotBinding | None = None
    date_cell: str | None = None

    def __post_init__(self) -> None:
        if len(self.slots) > MAX_ORGANIZATION_SLOTS:
            raise ValueError(
                f"Layout has {len(self.slots)} organization slots, at most {MAX_ORGANIZATION_SLOTS} allowed"
            )
        seen: set[int] = set()
        for binding in self.slots:
            if binding.organization_id is None:
                raise ValueError("Organization slots must carry an organization_id; use totals for the summary row")
            if binding.organization_id in seen:
                raise ValueError(f"Duplicate organization_id in layout: {binding.organization_id}")
            seen.add(binding.organization_id)
        if self.totals is not None and self.totals.organization_id is not None:
            raise ValueError("Totals binding must not carry an organization_id")

    def binding_for(self, organization_id: int | None) -> SlotBinding | None:
        if organization_id is None:
            return self.totals
        for binding in self.slots:
            if binding.organization_id == organization_id:
                return binding
        return None

    def bindings(self) -> Iterator[SlotBinding]:
        yield from self.slots
        if self.totals is not None:
            yield self.totals

    @property
    def last_row(self) -> int:
        rows = [coordinate_from_string(coordinate)[1] for binding in self.bindings() for coordinate in binding.coordinates()]
        if self.date_cell is not None:
            rows.append(coordinate_from_string(self.date_cell)[1])
        return max(rows, default=1)


def _as_families(values: Iterable[MetricFamily | str]) -> set[MetricFamily]:
    return {MetricFamily(value) for value in values}


def grid_layout(
    organization_ids: Sequence[int],
    *,
    first_row: int = 6,
    columns: Mapping[MetricFamily, FamilyColumns] | None = None,
    without: Mapping[int, Iterable[MetricFamily | str]] | None = None,
    totals_row: int | None = None,
    date_cell: str | None = "B2",
) -> ReservoirLayout:
    """One row per organization starting at ``first_row``; ``without`` lists families an organization lacks."""
    family_columns = DEFAULT_FAMILY_COLUMNS if columns is None else columns
    missing = {org_id: _as_families(families) for org_id, families in (without or {}).items()}

    slots: list[SlotBinding] = []
    for offset, org_id in enumerate(organization_ids):
        row = first_row + offset
        skipped = missing.get(org_id, set())
        cells = {family: placement.at(row) for family, placement in family_columns.items() if family not in skipped}
        slots.append(SlotBinding(organization_id=org_id, cells=cells))

    totals = None
    if totals_row is not None:
        totals = SlotBinding(organization_id=None, cells={family: placement.at(totals_row) for family, placement in family_columns.items()})

    return ReservoirLayout(slots=tuple(slots), totals=totals, date_cell=date_cell)


def layout_from_dict(payload: Mapping[str, Any]) -> ReservoirLayout:
    """Build a grid layout from its JSON form.

    ``{"first_row": 6, "totals_row": 14, "date_cell": "B2",
    "slots": [{"organization_id": 3, "without": ["snow_cover"]}, ...]}``
    """
    raw_slots = payload.get("slots")
    if not isinstance(raw_slots, list):
        raise ValueError("Layout must define a 'slots' list")

    organization_ids: list[int] = []
    without: dict[int, list[str]] = {}
    for raw in raw_slots:
        if not isinstance(raw, Mapping) or "organization_id" not in raw:
            raise ValueError(f"Invalid layout slot: {raw!r}")
        org_id = int(raw["organization_id"])
        organization_ids.append(org_id)
        if raw.get("without"):
            without[org_id] = list(raw["without"])

    totals_row = payload.get("totals_row")
    return grid_layout(
        organization_ids,
        first_row=int(payload.get("first_row", 6)),
        without=without,
        totals_row=int(totals_row) if totals_row is not None else None,
        date_cell=payload.get("date_cell", "B2"),
    )
