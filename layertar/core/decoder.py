"""Sequential tar decoding.

Wraps :mod:`tarfile` in pure streaming mode (``r|*``) so entries are produced
one at a time from any readable byte stream, pipes included. Compressed
layers (gzip, bzip2, xz) are decompressed transparently.
"""

from __future__ import annotations

import io
import tarfile
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional


@dataclass
class TarEntry:
    """Header, content and list position of an entry within a tar stream.

    `content` is only valid until the decoder is asked for the next entry.
    """

    sequence: int
    header: tarfile.TarInfo
    content: BinaryIO

    @property
    def name(self) -> str:
        return self.header.name


class _CountingReader:
    """Read-through wrapper recording how many bytes the source produced."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self.bytes_read = 0

    def read(self, size: int = -1) -> bytes:
        data = self._stream.read(size)
        self.bytes_read += len(data)
        return data


class TarDecoder:
    """Pull entries out of a tar byte stream in order.

    The decoder never closes the stream it was given.
    """

    def __init__(self, stream: BinaryIO):
        self._source = _CountingReader(stream)
        self._tar: Optional[tarfile.TarFile] = None
        self._sequence = -1
        self._exhausted = False

    @property
    def sequence(self) -> int:
        """Sequence number of the most recent pull (-1 before the first)."""
        return self._sequence

    def next_entry(self) -> Optional[TarEntry]:
        """Return the next entry, or None once the stream is exhausted.

        Any unread content of the previous entry is skipped. Decode errors
        are raised as-is.
        """
        if self._exhausted:
            return None

        self._sequence += 1
        if self._tar is None:
            try:
                self._tar = tarfile.open(fileobj=self._source, mode="r|*")
            except tarfile.ReadError:
                # a zero-byte stream is an archive without entries
                if self._source.bytes_read == 0:
                    self._exhausted = True
                    return None
                raise
        header = self._tar.next()
        # streaming TarFile objects keep every header they have seen
        self._tar.members = []
        if header is None:
            self._exhausted = True
            return None

        return TarEntry(
            sequence=self._sequence,
            header=header,
            content=self._content_for(header),
        )

    def _content_for(self, header: tarfile.TarInfo) -> BinaryIO:
        if header.isreg():
            content = self._tar.extractfile(header)
            if content is not None:
                return content
        return io.BytesIO(b"")

    def __iter__(self) -> Iterator[TarEntry]:
        while True:
            entry = self.next_entry()
            if entry is None:
                return
            yield entry
