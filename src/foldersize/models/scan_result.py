"""Scan target and result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

PATH_NOT_FOUND = "Path not found"


@dataclass(frozen=True, slots=True)
class ScanTarget:
    """A single folder to measure.

    The root of a scan is always measured with ``recurse=False`` so its
    row only counts files sitting directly in it.
    """

    path: Path
    recurse: bool = True


@dataclass(slots=True)
class MeasurementResult:
    """Outcome of measuring one target."""

    path: Path
    total_bytes: int = 0
    file_count: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


@dataclass(slots=True)
class ScanReport:
    """All measurements for one root, largest first."""

    root: Path
    results: list[MeasurementResult] = field(default_factory=list)
    elapsed: float = 0.0

    @classmethod
    def build(
        cls,
        root: Path,
        results: list[MeasurementResult],
        elapsed: float = 0.0,
    ) -> ScanReport:
        """Create a report with results sorted by size, ties broken by path."""
        ordered = sorted(results, key=lambda r: (-r.total_bytes, str(r.path)))
        return cls(root=root, results=ordered, elapsed=elapsed)

    @property
    def total_bytes(self) -> int:
        return sum(r.total_bytes for r in self.results)

    @property
    def file_count(self) -> int:
        return sum(r.file_count for r in self.results)

    @property
    def errors(self) -> list[MeasurementResult]:
        return [r for r in self.results if not r.ok]
