"""Organization slot maps over template rows."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping


def parse_marker(value: Any) -> int | None:
    """Return the organization ID encoded in a marker cell, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def renumber_after_removal(rows: Mapping[int, int], removed: Iterable[int]) -> dict[int, int]:
    """Shift surviving row indices up past every removed row below them.

    Keys mapped to a removed row are dropped. The result does not depend on
    the order of ``removed``.
    """
    gone = sorted(set(removed))
    gone_set = set(gone)
    return {key: row - bisect_left(gone, row) for key, row in rows.items() if row not in gone_set}


@dataclass(frozen=True)
class SlotMap:
    """Organization ID -> 1-based row index."""

    rows: Mapping[int, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.rows)

    def __contains__(self, organization_id: object) -> bool:
        return organization_id in self.rows

    def __iter__(self) -> Iterator[int]:
        return iter(self.rows)

    def row_for(self, organization_id: int) -> int | None:
        return self.rows.get(organization_id)

    def ordered(self) -> list[tuple[int, int]]:
        """(organization_id, row) pairs from top to bottom."""
        return sorted(self.rows.items(), key=lambda item: item[1])

    @property
    def highest_row(self) -> int | None:
        return max(self.rows.values(), default=None)

    def without(self, removed_rows: Iterable[int]) -> "SlotMap":
        return SlotMap(renumber_after_removal(self.rows, removed_rows))
