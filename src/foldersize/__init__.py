"""Foldersize - per-folder disk usage reports for RMM maintenance runs."""

__version__ = "1.0.0"
