"""Foldersize data models."""

from foldersize.models.scan_result import MeasurementResult, ScanReport, ScanTarget

__all__ = [
    "MeasurementResult",
    "ScanReport",
    "ScanTarget",
]
