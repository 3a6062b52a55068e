"""CLI interface for projdash."""

from datetime import tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import typer

from projdash import __version__
from projdash.analyzer import (
    DEFAULT_OUTPUT_NAME,
    SORT_KEYS,
    filter_entries,
    scan_projects,
    sort_entries,
)
from projdash.display import (
    console,
    plain,
    show_build_result,
    show_projects,
    show_scanning_progress,
    show_warnings,
)
from projdash.models import Dashboard
from projdash.page import DEFAULT_TITLE, write_dashboard
from projdash.scanner import ScanFailure
from projdash.server import DEFAULT_HOST, DEFAULT_PORT, serve_dashboard

# Create Typer app
app = typer.Typer(
    name="projdash",
    help="Dashboard of the project folders in a directory, with cached sizes",
    add_completion=False,
    no_args_is_help=True,
)

ROOT_ARGUMENT = typer.Argument(
    Path("."),
    help="Directory whose subfolders are the projects",
    envvar="PROJDASH_ROOT",
)
TIMEZONE_OPTION = typer.Option(
    None,
    "--timezone",
    "-z",
    help="IANA timezone for timestamps, e.g. Asia/Jakarta (default: local time)",
    envvar="PROJDASH_TIMEZONE",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"projdash version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """projdash - local project dashboard."""


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Look up a timezone by name, exiting with an error if unknown."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        console.print(f"[red]Unknown timezone: {name}[/red]")
        raise typer.Exit(1)


def run_scan(root: Path, tz: Optional[tzinfo], output_name: str = DEFAULT_OUTPUT_NAME) -> Dashboard:
    """Scan root with a progress bar, exiting with an error if it can't be listed."""
    with show_scanning_progress() as progress:
        task = progress.add_task("Scanning projects...", total=None)

        def update_progress(name: str, current: int, total: int):
            progress.update(task, completed=current, total=total, description=f"Sizing {plain(name)}...")

        try:
            return scan_projects(
                root,
                output_name=output_name,
                tz=tz,
                progress_callback=update_progress,
            )
        except ScanFailure as e:
            progress.stop()
            console.print(f"[red]Error: {plain(str(e))}[/red]")
            raise typer.Exit(1)


@app.command()
def build(
    root: Path = ROOT_ARGUMENT,
    output: str = typer.Option(
        DEFAULT_OUTPUT_NAME, "--output", "-o", help="File name of the page, written inside ROOT"
    ),
    title: str = typer.Option(DEFAULT_TITLE, "--title", "-t", help="Page title"),
    timezone: Optional[str] = TIMEZONE_OPTION,
) -> None:
    """Scan ROOT and write the dashboard page into it."""
    tz = resolve_timezone(timezone)
    dashboard = run_scan(root, tz, output_name=output)

    output_path = write_dashboard(dashboard, Path(dashboard.root) / output, title)
    show_build_result(dashboard, output_path)


@app.command(name="list")
def list_projects(
    root: Path = ROOT_ARGUMENT,
    sort: str = typer.Option("mtime", "--sort", "-s", help="Sort by mtime, name or size"),
    asc: bool = typer.Option(False, "--asc", help="Sort ascending instead of descending"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Only names containing TEXT"),
    timezone: Optional[str] = TIMEZONE_OPTION,
) -> None:
    """Scan ROOT and print the projects as a table."""
    if sort not in SORT_KEYS:
        console.print(f"[red]Unknown sort key: {sort}[/red] (choose from {', '.join(SORT_KEYS)})")
        raise typer.Exit(1)

    tz = resolve_timezone(timezone)
    dashboard = run_scan(root, tz)

    entries = dashboard.entries
    if search:
        entries = filter_entries(entries, search)
    entries = sort_entries(entries, key=sort, descending=not asc)

    show_projects(entries, dashboard.root)
    show_warnings(dashboard)


@app.command()
def serve(
    root: Path = ROOT_ARGUMENT,
    host: str = typer.Option(DEFAULT_HOST, "--host", help="Interface to bind"),
    port: int = typer.Option(DEFAULT_PORT, "--port", "-p", help="Port to listen on", envvar="PROJDASH_PORT"),
    title: str = typer.Option(DEFAULT_TITLE, "--title", "-t", help="Page title"),
    timezone: Optional[str] = TIMEZONE_OPTION,
) -> None:
    """Serve ROOT over HTTP, regenerating the dashboard on every visit."""
    tz = resolve_timezone(timezone)
    if not root.is_dir():
        console.print(f"[red]Error: {root} is not a directory[/red]")
        raise typer.Exit(1)

    try:
        serve_dashboard(root, host=host, port=port, title=title, tz=tz)
    except OSError as e:
        console.print(f"[red]Cannot listen on {host}:{port}: {e.strerror or e}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
