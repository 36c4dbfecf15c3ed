"""Stage timing for report pipelines."""

from __future__ import annotations

from time import perf_counter


class StageClock:
    def __init__(self) -> None:
        self._pipeline_start = perf_counter()
        self._stage_start = self._pipeline_start
        self.timings: list[tuple[str, float]] = []

    def mark(self, stage_name: str) -> None:
        now = perf_counter()
        self.timings.append((stage_name, now - self._stage_start))
        self._stage_start = now

    @property
    def total(self) -> float:
        return perf_counter() - self._pipeline_start

    def summary(self) -> str:
        return ", ".join(f"{name}={seconds:.3f}s" for name, seconds in self.timings)
