"""Bounded worker pool that measures scan targets concurrently."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable

from foldersize.core.measure import measure_target
from foldersize.models.scan_result import MeasurementResult, ScanTarget

log = logging.getLogger(__name__)

MAX_CONCURRENT_TASKS = 20

MeasureFunc = Callable[[ScanTarget], MeasurementResult]
ProgressCallback = Callable[[int, int, MeasurementResult], None]  # (done, total, result)


def build_targets(root: Path, children: list[Path], recurse: bool) -> list[ScanTarget]:
    """Return the root (files only) followed by one target per child folder."""
    targets = [ScanTarget(path=Path(root), recurse=False)]
    targets.extend(ScanTarget(path=Path(child), recurse=recurse) for child in children)
    return targets


class WorkerPool:
    """Runs one measurement per target with at most ``max_tasks`` in flight.

    A pool is meant to be used for a single root. Workers only return
    results; collecting them happens on the calling thread.
    """

    def __init__(self, max_tasks: int = MAX_CONCURRENT_TASKS, measure: MeasureFunc = measure_target) -> None:
        if max_tasks < 1:
            raise ValueError(f"max_tasks must be at least 1, got {max_tasks}")
        self.max_tasks = max_tasks
        self._measure = measure

    def run(
        self,
        targets: list[ScanTarget],
        on_progress: ProgressCallback | None = None,
    ) -> list[MeasurementResult]:
        """Measure every target and return one result for each.

        Blocks until all targets are done. A measurement that raises is
        recorded as an error result for its target; the others carry on.

        Args:
            targets: Folders to measure.
            on_progress: Optional callback fired after each completion.

        Returns:
            Results in completion order.
        """
        if not targets:
            return []

        results: list[MeasurementResult] = []
        total = len(targets)
        workers = min(self.max_tasks, total)
        log.debug("Measuring %d targets with %d workers", total, workers)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="foldersize") as executor:
            futures: dict[Future[MeasurementResult], ScanTarget] = {
                executor.submit(self._measure, target): target for target in targets
            }
            for future in as_completed(futures):
                target = futures[future]
                try:
                    result = future.result()
                except Exception as e:
                    log.exception("Measuring '%s' failed", target.path)
                    result = MeasurementResult(path=target.path, error=str(e) or type(e).__name__)
                results.append(result)
                if not result.ok:
                    log.warning("%s: %s", result.path, result.error)
                if on_progress:
                    on_progress(len(results), total, result)

        return results
