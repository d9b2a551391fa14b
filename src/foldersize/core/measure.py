"""Per-folder size measurement executed by each pooled task."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from foldersize.core.lister import is_junction
from foldersize.models.scan_result import PATH_NOT_FOUND, MeasurementResult, ScanTarget

log = logging.getLogger(__name__)

# Not exposed by the stat module.
FILE_ATTRIBUTE_RECALL_ON_OPEN = 0x00040000
FILE_ATTRIBUTE_RECALL_ON_DATA_ACCESS = 0x00400000

PLACEHOLDER_ATTRIBUTES = (
    stat.FILE_ATTRIBUTE_OFFLINE
    | FILE_ATTRIBUTE_RECALL_ON_OPEN
    | FILE_ATTRIBUTE_RECALL_ON_DATA_ACCESS
)


def is_placeholder(attributes: int) -> bool:
    """Whether Windows file attributes mark a cloud-only stub.

    OneDrive and other sync providers leave such files on disk without
    their content, so they take up no local space.
    """
    return bool(attributes & PLACEHOLDER_ATTRIBUTES)


def measure_target(target: ScanTarget) -> MeasurementResult:
    """Sum the size and count of files under a target folder.

    Only files directly in the folder are counted unless
    ``target.recurse`` is set. Symlinks and junctions are not followed.
    Entries that cannot be read are skipped, so protected folders give
    partial totals rather than errors.
    """
    path = Path(target.path)
    if not path.is_dir():
        return MeasurementResult(path=path, error=PATH_NOT_FOUND)

    total = 0
    count = 0
    stack: list[str] = [str(path)]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            st = entry.stat(follow_symlinks=False)
                            if is_placeholder(getattr(st, "st_file_attributes", 0)):
                                continue
                            total += st.st_size
                            count += 1
                        elif target.recurse and entry.is_dir(follow_symlinks=False):
                            if not is_junction(entry):
                                stack.append(entry.path)
                    except OSError as e:
                        log.debug("Skipping %s: %s", entry.path, e)
        except FileNotFoundError:
            if current == str(path):
                return MeasurementResult(path=path, error=PATH_NOT_FOUND)
            log.debug("Folder vanished during scan: %s", current)
        except OSError as e:
            log.debug("Cannot read %s: %s", current, e)

    return MeasurementResult(path=path, total_bytes=total, file_count=count)
