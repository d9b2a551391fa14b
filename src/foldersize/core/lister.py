"""Enumerate the immediate child folders of a scan root."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

log = logging.getLogger(__name__)


class PathNotFoundError(FileNotFoundError):
    """Raised when a scan root does not exist or is not a directory."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Folder not found: {path}")
        self.path = Path(path)


def list_child_dirs(root: Path | str) -> list[Path]:
    """Return the immediate child directories of *root*.

    Hidden and system folders are included. Symlinks and junctions are
    not followed, so they never show up as children. An unreadable root
    yields no children; its own row will still be measured.

    Raises:
        PathNotFoundError: if *root* is missing or not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise PathNotFoundError(root)

    children: list[Path] = []
    try:
        with os.scandir(root) as it:
            for entry in it:
                try:
                    if entry.is_dir(follow_symlinks=False) and not is_junction(entry):
                        children.append(Path(entry.path))
                except OSError as e:
                    log.debug("Skipping unreadable entry %s: %s", entry.path, e)
    except FileNotFoundError:
        raise PathNotFoundError(root) from None
    except OSError as e:
        log.warning("Could not list folders in %s: %s", root, e)

    log.debug("Found %d child folders under %s", len(children), root)
    return children


def is_junction(entry: os.DirEntry) -> bool:
    """Whether *entry* is a Windows junction or other directory reparse point.

    ``DirEntry.is_junction`` only exists from Python 3.12; older versions
    report junctions as plain directories, so check the attributes instead.
    """
    check = getattr(entry, "is_junction", None)
    if check is not None:
        return bool(check())
    try:
        attributes = getattr(entry.stat(follow_symlinks=False), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & stat.FILE_ATTRIBUTE_REPARSE_POINT)
