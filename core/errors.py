"""
Error types raised and reported by the catalog core.
"""

from typing import List, Optional


class CatalogError(Exception):
    """Base class for every recoverable catalog failure."""


class InvalidInput(CatalogError):
    """The URL was empty or whitespace-only."""


class FetchInProgress(CatalogError):
    """Another download is still running against the save directory."""


class ProcessSpawnFailed(CatalogError):
    """The external downloader could not be launched."""


class FetchFailed(CatalogError):
    """The downloader exited non-zero or left no usable result metadata."""

    def __init__(self, message: str, output: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.output = output
        self.returncode = returncode

    def tail(self, lines: int = 10) -> List[str]:
        """Return the last few non-empty lines of captured output."""
        return [line for line in self.output.splitlines() if line.strip()][-lines:]


class PersistenceFailed(CatalogError):
    """The consolidated catalog file could not be written or read."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class ParseSkipped(CatalogError):
    """A per-item metadata file was unreadable and was left out of a scan."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
