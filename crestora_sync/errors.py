"""Error types raised by the sync and rank recalculation pipeline."""

from typing import Optional


class SyncError(Exception):
    """Base class for failures the entry points report and exit on."""

    # SyncResult of a run that failed after writing some files
    partial_result = None


class RemoteFetchError(SyncError):
    """Non-2xx response, or a transport failure (status 0)."""

    def __init__(self, url: str, status: int, body: str = ""):
        self.url = url
        self.status = status
        self.body = (body or "")[:200]
        if status:
            message = f"HTTP {status} for {url}"
        else:
            message = f"Request failed for {url}"
        if self.body:
            message = f"{message}: {self.body}"
        super().__init__(message)


class DecodeError(SyncError):
    """Body or file content is not valid JSON, or has the wrong shape."""

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Malformed JSON from {source}: {detail}")


class FileSystemError(SyncError):
    """Reading or writing a snapshot file failed."""

    def __init__(self, path: str, detail: Optional[str] = None):
        self.path = str(path)
        self.detail = detail
        message = f"File error for {self.path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MissingFileError(FileSystemError):
    """Snapshot file does not exist."""
