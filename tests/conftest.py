"""Shared test fixtures."""

from __future__ import annotations

import contextlib
import os
from pathlib import Path

import pytest

from foldersize.settings import Settings


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Point settings at a temp config dir and drop the cached singleton."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(Settings, "_instance", None)
    return config_home / "foldersize" / "settings.json"


@pytest.fixture
def data_root(tmp_path):
    """A root with 200 bytes of direct files and two child folders.

    ``a`` holds 1,500 bytes in 3 files (one nested); ``b`` holds 100 bytes.
    """
    root = tmp_path / "data"
    root.mkdir()
    (root / "top1.bin").write_bytes(b"x" * 120)
    (root / "top2.bin").write_bytes(b"x" * 80)

    a = root / "a"
    (a / "nested").mkdir(parents=True)
    (a / "one.bin").write_bytes(b"a" * 700)
    (a / "two.bin").write_bytes(b"a" * 300)
    (a / "nested" / "three.bin").write_bytes(b"a" * 500)

    b = root / "b"
    b.mkdir()
    (b / "four.bin").write_bytes(b"b" * 100)
    return root


class FakeStat:
    def __init__(self, size: int = 0, attributes: int = 0) -> None:
        self.st_size = size
        self.st_file_attributes = attributes


class FakeEntry:
    """Stand-in for ``os.DirEntry`` as seen on Python < 3.12 (no ``is_junction``)."""

    def __init__(self, path: Path, *, is_dir: bool = False, size: int = 0, attributes: int = 0) -> None:
        self.path = str(path)
        self.name = Path(path).name
        self._is_dir = is_dir
        self._stat = FakeStat(size, attributes)

    def is_dir(self, follow_symlinks: bool = True) -> bool:
        return self._is_dir

    def is_file(self, follow_symlinks: bool = True) -> bool:
        return not self._is_dir

    def stat(self, follow_symlinks: bool = True) -> FakeStat:
        return self._stat


@pytest.fixture
def fake_scandir(monkeypatch):
    """Serve fake directory listings for selected paths.

    Returns a dict mapping a directory path to the ``FakeEntry`` list that
    ``os.scandir`` yields for it; other paths hit the real filesystem.
    """
    listings: dict[str, list[FakeEntry]] = {}
    real_scandir = os.scandir

    def scandir(path):
        key = str(path)
        if key in listings:
            return contextlib.nullcontext(iter(listings[key]))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)
    return listings
