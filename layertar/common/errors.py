"""
Custom exception classes for layer-tar.
"""


class LayerTarError(Exception):
    """Base exception class for layer-tar errors."""
    pass


class TarVisitError(LayerTarError):
    """Raised when a visitor fails while handling a tar entry."""

    def __init__(self, entry_name: str, cause: BaseException):
        self.entry_name = entry_name
        self.cause = cause
        super().__init__(f"failed to visit tar entry={entry_name!r} : {cause}")


class TarFileNotFoundError(LayerTarError):
    """Raised when a path lookup exhausts the archive without a match."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"file not found (path={path})")


class ExtractionError(LayerTarError):
    """Raised when an entry cannot be written to the destination."""
    pass


class PathTraversalError(ExtractionError):
    """Raised when an entry would be written outside the destination root."""

    def __init__(self, entry_name: str):
        self.entry_name = entry_name
        super().__init__(f"potential path traversal attack with entry: {entry_name!r}")


class ReadLimitExceededError(ExtractionError):
    """Raised when a regular file reaches the per-file read limit."""

    def __init__(self, entry_name: str, copied: int, limit: int):
        self.entry_name = entry_name
        self.copied = copied
        self.limit = limit
        super().__init__(
            f"tar read limit hit for entry {entry_name!r} "
            f"(potential decompression bomb attack): {copied} >= {limit}"
        )
