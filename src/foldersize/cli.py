"""CLI interface for Foldersize."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from foldersize.core.engine import FolderSizeScanner, default_roots
from foldersize.core.report import render_report, report_to_dict
from foldersize.models.scan_result import ScanReport
from foldersize.settings import DEFAULTS, Settings, SettingsError, parse_value

DEFAULT_ROOT = "Default"
EXIT_ROOT_NOT_FOUND = 100


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Foldersize - report disk usage of each folder under a root."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.option(
    "--root-folder",
    default=DEFAULT_ROOT,
    show_default=True,
    help=f"Folder to break down; '{DEFAULT_ROOT}' scans the system drive, "
    "Users, ProgramData and both Program Files folders",
)
@click.option("--recurse", type=click.BOOL, default=None, help="Measure child folders recursively [default: true]")
@click.option("--max-tasks", type=click.IntRange(min=1), default=None, help="Folders measured at once [default: 20]")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(root_folder: str, recurse: bool | None, max_tasks: int | None, as_json: bool) -> None:
    """Report the size of each folder directly under a root."""
    settings = Settings.instance()
    if recurse is None:
        recurse = settings.recurse
    if max_tasks is None:
        max_tasks = settings.max_concurrent_tasks

    default_mode = root_folder.strip().lower() == DEFAULT_ROOT.lower()
    if default_mode:
        roots = default_roots()
    else:
        root = Path(root_folder)
        if not root.is_dir():
            click.echo(f"Error: root folder '{root}' does not exist.", err=True)
            sys.exit(EXIT_ROOT_NOT_FOUND)
        roots = [root]

    show_progress = not as_json and sys.stderr.isatty()

    def on_progress(root: Path, done: int, total: int) -> None:
        if show_progress:
            pct = done * 100 // total
            click.echo(f"\r  Scanning {root}: {done}/{total} ({pct}%)", err=True, nl=False)

    def on_report(report: ScanReport) -> None:
        if show_progress:
            click.echo("", err=True)
        if not as_json:
            click.echo(render_report(report))
            if report.errors:
                click.echo(click.style(f"\n  {len(report.errors)} folder(s) could not be measured", fg="yellow"))

    scanner = FolderSizeScanner(max_tasks=max_tasks)
    reports = scanner.scan_roots(
        roots,
        recurse=recurse,
        on_progress=on_progress,
        on_report=on_report,
        allow_missing=default_mode,
    )

    if not default_mode and not reports:
        # Root vanished between the check above and the scan.
        click.echo(f"Error: root folder '{roots[0]}' does not exist.", err=True)
        sys.exit(EXIT_ROOT_NOT_FOUND)

    if as_json:
        click.echo(json.dumps([report_to_dict(r) for r in reports], indent=2))
    else:
        click.echo()


# ── roots ────────────────────────────────────────────────────────────────

@main.command("roots")
def roots_cmd() -> None:
    """List the folders scanned in default mode."""
    for root in default_roots():
        if root.is_dir():
            status = click.style("present", fg="green")
        else:
            status = click.style("missing", fg="bright_black")
        click.echo(f"  {str(root):40s} {status}")


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Read and change persistent settings."""


@config.command("get")
@click.argument("key", required=False)
def config_get(key: str | None) -> None:
    """Show one setting, or all of them."""
    settings = Settings.instance()
    keys = [key] if key else sorted(DEFAULTS)
    for k in keys:
        if k not in DEFAULTS:
            click.echo(f"Unknown setting '{k}'.", err=True)
            sys.exit(1)
        click.echo(f"{k} = {json.dumps(settings.get(k))}")


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Persist a setting, e.g. ``config set scan.max_concurrent_tasks 8``."""
    try:
        parsed = parse_value(key, value)
    except SettingsError as e:
        raise click.UsageError(str(e)) from e
    settings = Settings.instance()
    settings.set(key, parsed)
    click.echo(f"{key} = {json.dumps(parsed)}")
    click.echo(f"Saved to {settings.path}")


if __name__ == "__main__":
    main()
