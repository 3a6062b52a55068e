"""Directory scanning functionality for projdash."""

import os
from pathlib import Path

from projdash.models import SizeResult

# Entries never listed on the dashboard
IGNORE_NAMES = frozenset(
    {
        ".",
        "..",
        "dashboard",  # XAMPP defaults
        "img",
        "webalizer",
        "xampp",
        "desktop.ini",  # Windows folder metadata
        "node_modules",
        ".git",
        ".vscode",
    }
)


class ScanFailure(Exception):
    """The root directory could not be listed."""


def ignored_names(*own_files: str) -> frozenset[str]:
    """
    Build the ignore set for a scan.

    Args:
        own_files: Names of files projdash itself writes into the root
            (cache file, generated page)

    Returns:
        The fixed ignore names plus the given file names
    """
    return IGNORE_NAMES | {name for name in own_files if name}


def list_project_dirs(root: Path, ignore: frozenset[str] = IGNORE_NAMES) -> list[tuple[str, int]]:
    """
    List the immediate subdirectories of root.

    Symlinks to directories count as directories. Entries whose type or
    modification time cannot be read are skipped.

    Args:
        root: Directory to list
        ignore: Names to leave out

    Returns:
        (name, mtime) pairs sorted by name, mtime in whole epoch seconds

    Raises:
        ScanFailure: If root cannot be listed
    """
    try:
        with os.scandir(root) as it:
            entries = list(it)
    except OSError as e:
        raise ScanFailure(f"Cannot list {root}: {e.strerror or e}") from e

    found: list[tuple[str, int]] = []
    for entry in entries:
        if entry.name in ignore:
            continue
        try:
            if not entry.is_dir():
                continue
            mtime = int(entry.stat().st_mtime)
        except OSError:
            continue
        found.append((entry.name, mtime))

    found.sort(key=lambda item: item[0])
    return found


def _failed(path: str, error: OSError) -> SizeResult:
    reason = error.strerror or str(error)
    return SizeResult(size_bytes=0, error=f"{error.filename or path}: {reason}")


def get_directory_size(path: Path) -> SizeResult:
    """
    Calculate the total size of everything under a directory.

    Readable files contribute their size, unreadable ones are skipped.
    A listing or stat failure anywhere in the subtree zeroes the whole
    result: nothing counted so far is kept and the error is reported on
    the returned SizeResult.

    Args:
        path: Directory to measure

    Returns:
        SizeResult with the byte total, or size 0 and the first error
    """
    total = 0
    pending = [str(path)]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            return _failed(current, e)

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(entry.path)
                    continue
                if not os.access(entry.path, os.R_OK):
                    continue
                total += entry.stat().st_size
            except OSError as e:
                return _failed(entry.path, e)

    return SizeResult(size_bytes=total)
