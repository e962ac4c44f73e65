"""Single-entry lookups by logical path."""

from __future__ import annotations

from typing import BinaryIO, Optional

from ..common.errors import TarFileNotFoundError
from .decoder import TarEntry
from .iterate import VisitResult, iterate_tar
from .metadata import Metadata


class TarMemberReader:
    """Reader over one tar member that owns the underlying archive stream.

    Closing the reader closes the archive stream; callers must not close the
    archive stream themselves.
    """

    def __init__(self, content: BinaryIO, archive: BinaryIO):
        self._content = content
        self._archive = archive
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def readable(self) -> bool:
        return not self._closed

    def read(self, size: int = -1) -> bytes:
        if self._closed:
            raise ValueError("I/O operation on closed tar member reader")
        return self._content.read(size)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._archive.close()

    def __enter__(self) -> "TarMemberReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def reader_from_tar(stream: BinaryIO, tar_path: str) -> TarMemberReader:
    """
    Return a reader for the content of `tar_path` within a tar stream.

    The returned reader takes ownership of `stream`.

    Raises:
        TarFileNotFoundError: If no entry is named `tar_path`
    """
    result: Optional[TarMemberReader] = None

    def visitor(entry: TarEntry) -> VisitResult:
        nonlocal result
        if entry.name == tar_path:
            result = TarMemberReader(entry.content, stream)
            return VisitResult.STOP
        return VisitResult.CONTINUE

    iterate_tar(stream, visitor)

    if result is None:
        raise TarFileNotFoundError(tar_path)
    return result


def metadata_from_tar(stream: BinaryIO, tar_path: str) -> Metadata:
    """
    Return metadata for `tar_path` within a tar stream.

    The stream is left open; closing it stays with the caller.

    Raises:
        TarFileNotFoundError: If no entry is named `tar_path`
    """
    metadata: Optional[Metadata] = None

    def visitor(entry: TarEntry) -> VisitResult:
        nonlocal metadata
        if entry.name == tar_path:
            content = entry.content if entry.header.size > 0 else None
            metadata = Metadata.from_header(entry.header, content)
            return VisitResult.STOP
        return VisitResult.CONTINUE

    iterate_tar(stream, visitor)

    if metadata is None:
        raise TarFileNotFoundError(tar_path)
    return metadata
