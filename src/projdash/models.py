"""Data models for projdash."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CacheRecord(BaseModel):
    """Persisted size of a directory at a given modification time."""

    mtime: int = Field(..., description="Directory mtime observed when the size was computed")
    size: int = Field(..., description="Computed size in bytes")


class SizeResult(BaseModel):
    """Outcome of resolving the size of one project directory."""

    size_bytes: int = Field(0, description="Total size in bytes (0 when the walk failed)")
    error: Optional[str] = Field(None, description="Why the walk failed, if it did")
    from_cache: bool = Field(False, description="Whether the size came from the cache")

    @property
    def ok(self) -> bool:
        """Whether the size was computed without errors."""
        return self.error is None


class DirectoryEntry(BaseModel):
    """A project directory found in the scanned root."""

    name: str = Field(..., description="Directory base name")
    path: str = Field(..., description="Full path of the directory")
    mtime: int = Field(..., description="Modification time of the directory itself (epoch seconds)")
    size_bytes: int = Field(0, description="Recursive size in bytes")
    mtime_display: str = Field("", description="Human-readable modification time")
    size_display: str = Field("", description="Human-readable size")
    from_cache: bool = Field(False, description="Whether the size came from the cache")
    error: Optional[str] = Field(None, description="Size computation error, if any")


class Dashboard(BaseModel):
    """Complete scan of a root directory, ready for presentation."""

    root: str = Field(..., description="Absolute path of the scanned root")
    generated_at: datetime = Field(default_factory=datetime.now)
    entries: list[DirectoryEntry] = Field(default_factory=list)
    cache_updated: bool = Field(False, description="Whether the cache file was rewritten")
    cache_error: Optional[str] = Field(None, description="Error from writing the cache file")

    @property
    def total_bytes(self) -> int:
        """Combined size of all entries."""
        return sum(e.size_bytes for e in self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def failed_entries(self) -> list[DirectoryEntry]:
        """Entries whose size could not be computed."""
        return [e for e in self.entries if e.error is not None]
