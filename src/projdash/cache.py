"""Persistent directory size cache, keyed by modification time."""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from projdash.models import CacheRecord, SizeResult
from projdash.scanner import get_directory_size

CACHE_FILE_NAME = "_dashboard_cache.json"


class CachePersistFailure(Exception):
    """The cache file could not be written."""


class SizeCache:
    """
    Directory sizes from previous runs.

    A record is reused only while its stored mtime equals the directory's
    current mtime. Any difference, including an mtime moving backwards,
    triggers a full recomputation.
    """

    def __init__(self, path: Path, records: Optional[dict[str, CacheRecord]] = None):
        self.path = path
        self.records: dict[str, CacheRecord] = records if records is not None else {}
        self._dirty = False

    @classmethod
    def load(cls, path: Path) -> "SizeCache":
        """
        Load the cache file at path.

        A missing, unreadable or malformed file yields an empty cache.
        Records that don't validate are dropped.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return cls(path)

        if not isinstance(data, dict):
            return cls(path)

        records: dict[str, CacheRecord] = {}
        for name, value in data.items():
            try:
                records[name] = CacheRecord.model_validate(value)
            except ValidationError:
                continue
        return cls(path, records)

    @property
    def dirty(self) -> bool:
        """Whether any record changed since loading or the last save."""
        return self._dirty

    def get(self, name: str) -> Optional[CacheRecord]:
        return self.records.get(name)

    def size_of(self, path: Path, current_mtime: int) -> SizeResult:
        """
        Resolve the size of a project directory.

        Args:
            path: Project directory; its base name is the cache key
            current_mtime: The directory's mtime right now

        Returns:
            Cached SizeResult if the record is still valid, otherwise a
            freshly computed one (which is stored even when it failed)
        """
        name = path.name
        record = self.records.get(name)
        if record is not None and record.mtime == current_mtime:
            return SizeResult(size_bytes=record.size, from_cache=True)

        result = get_directory_size(path)
        self.records[name] = CacheRecord(mtime=current_mtime, size=result.size_bytes)
        self._dirty = True
        return result

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {name: record.model_dump() for name, record in self.records.items()}

    def save(self) -> bool:
        """
        Write the cache file if anything changed.

        Returns:
            True if the file was written, False if there was nothing to write

        Raises:
            CachePersistFailure: If the file could not be written
        """
        if not self._dirty:
            return False

        # Serialize fully before the file is opened for writing
        content = json.dumps(self.to_dict(), indent=4).encode("utf-8")
        try:
            self.path.write_bytes(content)
        except OSError as e:
            raise CachePersistFailure(f"Cannot write {self.path}: {e.strerror or e}") from e

        self._dirty = False
        return True
