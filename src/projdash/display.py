"""Rich terminal display for projdash."""

from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from projdash.models import Dashboard, DirectoryEntry

console = Console()

MTIME_FORMAT = "%d %b %Y, %H:%M"


def plain(text: str) -> str:
    """Make a file name or path safe to embed in Rich markup."""
    # Undecodable bytes in names arrive as lone surrogates
    return escape(text.encode("utf-8", "replace").decode("utf-8"))


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units)."""
    if size_bytes >= 1024**3:
        return f"{size_bytes / 1024**3:,.2f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / 1024**2:,.2f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:,.2f} KB"
    elif size_bytes > 1:
        return f"{size_bytes} bytes"
    elif size_bytes == 1:
        return "1 byte"
    else:
        return "0 bytes"


def format_mtime(timestamp: int, tz: Optional[tzinfo] = None) -> str:
    """Format an epoch timestamp, in local time unless tz is given."""
    return datetime.fromtimestamp(timestamp, tz).strftime(MTIME_FORMAT)


def show_projects(entries: list[DirectoryEntry], root: str) -> None:
    """Display project directories as a table."""
    if not entries:
        console.print(f"[yellow]No projects found in {plain(root)}[/yellow]")
        return

    table = Table(title=plain(root), show_header=True, header_style="bold")
    table.add_column("Project", style="cyan")
    table.add_column("Modified")
    table.add_column("Size", justify="right")

    for entry in entries:
        size = entry.size_display
        if entry.error:
            size = f"[red]{size}[/red]"
        table.add_row(plain(entry.name), entry.mtime_display, size)

    total = sum(e.size_bytes for e in entries)
    table.add_section()
    table.add_row(f"[bold]{pluralize(len(entries), 'project')}[/bold]", "", f"[bold]{format_size(total)}[/bold]")

    console.print(table)


def show_warnings(dashboard: Dashboard) -> None:
    """Report sizes that collapsed to zero and cache write failures."""
    for entry in dashboard.failed_entries:
        console.print(f"[yellow]![/yellow] {plain(entry.name)}: size unavailable ({plain(entry.error)})")

    if dashboard.cache_error:
        console.print(f"[yellow]![/yellow] Cache not saved: {plain(dashboard.cache_error)}")


def show_build_result(dashboard: Dashboard, output_path: Path) -> None:
    """Display summary after writing the dashboard page."""
    cached = sum(1 for e in dashboard.entries if e.from_cache)
    computed = len(dashboard.entries) - cached

    console.print(f"[green]✓[/green] Dashboard written to [bold]{plain(str(output_path))}[/bold]")
    console.print(
        f"  {pluralize(len(dashboard.entries), 'project')}, {format_size(dashboard.total_bytes)} total"
    )
    console.print(f"  [dim]{cached} sizes from cache, {computed} computed[/dim]")
    show_warnings(dashboard)


def show_scanning_progress() -> Progress:
    """Create progress bar for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
