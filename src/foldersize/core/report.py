"""Render scan reports as text tables or JSON-ready dicts."""

from __future__ import annotations

from typing import Any

from foldersize.models.scan_result import MeasurementResult, ScanReport
from foldersize.utils import bytes_to_human

COLUMN_WIDTH = 12


def format_row(size: str, items: str, folder: str) -> str:
    return f"{size:>{COLUMN_WIDTH}} {items:>{COLUMN_WIDTH}} {folder}"


def format_result(result: MeasurementResult) -> str:
    """One table row: size, item count, path and any error."""
    folder = str(result.path)
    if result.error:
        folder = f"{folder}  [{result.error}]"
    return format_row(bytes_to_human(result.total_bytes), str(result.file_count), folder)


def render_report(report: ScanReport) -> str:
    """Render a report as a plain-text table, largest folder first."""
    lines = [
        "",
        format_row("Size", "Items", "Folder"),
        format_row("----", "-----", "------"),
    ]
    lines.extend(format_result(r) for r in report.results)
    return "\n".join(lines)


def report_to_dict(report: ScanReport) -> dict[str, Any]:
    return {
        "root": str(report.root),
        "elapsed": round(report.elapsed, 3),
        "total_bytes": report.total_bytes,
        "file_count": report.file_count,
        "results": [
            {
                "path": str(r.path),
                "total_bytes": r.total_bytes,
                "file_count": r.file_count,
                "error": r.error or None,
            }
            for r in report.results
        ],
    }
