"""Scan assembly and ordering logic for projdash."""

from datetime import datetime, tzinfo
from pathlib import Path
from typing import Callable, Optional

from projdash.cache import CACHE_FILE_NAME, CachePersistFailure, SizeCache
from projdash.display import format_mtime, format_size
from projdash.models import Dashboard, DirectoryEntry
from projdash.scanner import ignored_names, list_project_dirs

DEFAULT_OUTPUT_NAME = "index.html"

SORT_KEYS = ("mtime", "name", "size")


def scan_projects(
    root: Path,
    cache_path: Optional[Path] = None,
    output_name: str = DEFAULT_OUTPUT_NAME,
    tz: Optional[tzinfo] = None,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> Dashboard:
    """
    Scan root for project directories and resolve their sizes.

    Sizes come from the cache file when still valid. The cache is written
    back once at the end, and only if a record changed. A failed write is
    recorded on the result instead of aborting the scan.

    Args:
        root: Directory whose subdirectories are the projects
        cache_path: Cache file (defaults to CACHE_FILE_NAME inside root)
        output_name: Name of the generated page, hidden from the listing
        tz: Timezone for displayed timestamps (local time if None)
        progress_callback: Optional callback(name, current, total)

    Returns:
        Dashboard with entries sorted newest first

    Raises:
        ScanFailure: If root cannot be listed
    """
    root = root.resolve()
    if cache_path is None:
        cache_path = root / CACHE_FILE_NAME

    ignore = ignored_names(cache_path.name, output_name)
    found = list_project_dirs(root, ignore)
    cache = SizeCache.load(cache_path)

    entries: list[DirectoryEntry] = []
    for i, (name, mtime) in enumerate(found, 1):
        if progress_callback:
            progress_callback(name, i, len(found))

        path = root / name
        result = cache.size_of(path, mtime)
        entries.append(
            DirectoryEntry(
                name=name,
                path=str(path),
                mtime=mtime,
                size_bytes=result.size_bytes,
                mtime_display=format_mtime(mtime, tz),
                size_display=format_size(result.size_bytes),
                from_cache=result.from_cache,
                error=result.error,
            )
        )

    entries = sort_entries(entries)

    cache_updated = False
    cache_error = None
    try:
        cache_updated = cache.save()
    except CachePersistFailure as e:
        cache_error = str(e)

    return Dashboard(
        root=str(root),
        generated_at=datetime.now(tz),
        entries=entries,
        cache_updated=cache_updated,
        cache_error=cache_error,
    )


def sort_entries(
    entries: list[DirectoryEntry],
    key: str = "mtime",
    descending: bool = True,
) -> list[DirectoryEntry]:
    """
    Sort entries the way the dashboard page offers.

    Args:
        entries: Entries to sort
        key: One of 'mtime', 'name' (case-insensitive) or 'size'
        descending: Largest/newest/Z first

    Returns:
        New sorted list
    """
    if key == "name":
        return sorted(entries, key=lambda e: e.name.lower(), reverse=descending)
    if key == "size":
        return sorted(entries, key=lambda e: e.size_bytes, reverse=descending)
    if key == "mtime":
        return sorted(entries, key=lambda e: e.mtime, reverse=descending)
    raise ValueError(f"Unknown sort key: {key}")


def filter_entries(entries: list[DirectoryEntry], query: str) -> list[DirectoryEntry]:
    """Keep entries whose name contains query, ignoring case."""
    needle = query.lower()
    return [e for e in entries if needle in e.name.lower()]
