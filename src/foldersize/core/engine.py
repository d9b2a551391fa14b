"""Scanning orchestration across one or more roots."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Callable, Mapping

from foldersize.core.dispatcher import (
    MAX_CONCURRENT_TASKS,
    MeasureFunc,
    ProgressCallback,
    WorkerPool,
    build_targets,
)
from foldersize.core.lister import PathNotFoundError, list_child_dirs
from foldersize.core.measure import measure_target
from foldersize.models.scan_result import ScanReport
from foldersize.utils import bytes_to_human, format_elapsed

log = logging.getLogger(__name__)

ReportCallback = Callable[[ScanReport], None]
RootProgressCallback = Callable[[Path, int, int], None]  # (root, done, total)


def default_roots(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Return the fixed set of roots scanned when none is given.

    System drive, Users, ProgramData, Program Files and
    Program Files (x86), honoring the usual Windows environment
    variables when they are set.
    """
    env = os.environ if environ is None else environ
    drive = env.get("SystemDrive", "C:").rstrip("\\/")
    system_root = Path(drive + "\\")
    return [
        system_root,
        system_root / "Users",
        Path(env.get("ProgramData", system_root / "ProgramData")),
        Path(env.get("ProgramFiles", system_root / "Program Files")),
        Path(env.get("ProgramFiles(x86)", system_root / "Program Files (x86)")),
    ]


class FolderSizeScanner:
    """Measures the size of each folder directly under a root."""

    def __init__(self, max_tasks: int = MAX_CONCURRENT_TASKS, measure: MeasureFunc = measure_target) -> None:
        self.max_tasks = max_tasks
        self._measure = measure

    def scan_root(
        self,
        root: Path | str,
        recurse: bool = True,
        on_progress: ProgressCallback | None = None,
        allow_missing: bool = False,
    ) -> ScanReport:
        """Scan a single root and return its report.

        The root's own row only counts files directly inside it; child
        folders honor ``recurse``.

        Args:
            root: Folder whose children are measured.
            recurse: Whether child folders are measured recursively.
            on_progress: Optional callback fired after each target.
            allow_missing: Treat a missing root as having no children
                instead of raising.

        Raises:
            PathNotFoundError: if the root is missing and ``allow_missing``
                is false.
        """
        root = Path(root)
        start = time.monotonic()
        try:
            children = list_child_dirs(root)
        except PathNotFoundError:
            if not allow_missing:
                raise
            log.info("Root %s does not exist, reporting it as empty", root)
            children = []

        targets = build_targets(root, children, recurse)
        pool = WorkerPool(self.max_tasks, self._measure)
        results = pool.run(targets, on_progress=on_progress)
        report = ScanReport.build(root, results, elapsed=time.monotonic() - start)
        log.info(
            "Scanned %s: %d folders, %s in %s",
            root, len(report.results), bytes_to_human(report.total_bytes), format_elapsed(report.elapsed),
        )
        return report

    def scan_roots(
        self,
        roots: list[Path | str],
        recurse: bool = True,
        on_progress: RootProgressCallback | None = None,
        on_report: ReportCallback | None = None,
        allow_missing: bool = False,
    ) -> list[ScanReport]:
        """Scan several roots one after another.

        Each root gets its own pool, so concurrency never exceeds
        ``max_tasks``. A missing root is logged and skipped (or reported
        as empty with ``allow_missing``); later roots still run.

        Args:
            roots: Folders to scan, in order.
            recurse: Whether child folders are measured recursively.
            on_progress: Optional callback receiving (root, done, total).
            on_report: Optional callback fired as soon as each root is done.
            allow_missing: Passed through to :meth:`scan_root`.

        Returns:
            One report per scanned root.
        """
        reports: list[ScanReport] = []
        for root in roots:
            root = Path(root)
            progress = None
            if on_progress:
                def progress(done, total, _result, _root=root):
                    on_progress(_root, done, total)
            try:
                report = self.scan_root(root, recurse, on_progress=progress, allow_missing=allow_missing)
            except PathNotFoundError as e:
                log.warning("%s", e)
                continue
            reports.append(report)
            if on_report:
                on_report(report)
        return reports
