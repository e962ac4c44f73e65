"""Safe extraction of tar streams onto a filesystem.

Meant for image archives (layers), not arbitrary user archives: only regular
files and directories are materialised. Links, devices and other special
entries are skipped so they cannot be used to escape the destination.
"""

from __future__ import annotations

import os
import stat
import tarfile
from typing import BinaryIO, Optional

from ..common.config import ExtractionSettings, get_extraction_settings
from ..common.constants import COPY_CHUNK_SIZE, DEFAULT_DIRECTORY_MODE, DEFAULT_PER_FILE_READ_LIMIT
from ..common.errors import ExtractionError, LayerTarError, PathTraversalError, ReadLimitExceededError
from ..common.logging_config import get_logger
from .decoder import TarEntry
from .filesystem import Filesystem, OsFilesystem
from .iterate import VisitResult, iterate_tar

_log = get_logger(__name__)


class TarExtractor:
    """Tar visitor that writes entries below a destination root."""

    def __init__(self, fs: Filesystem, destination: str, read_limit: int = DEFAULT_PER_FILE_READ_LIMIT):
        """
        Initialize the extractor.

        Args:
            fs: Filesystem to create directories and files on
            destination: Root directory all entries must land under
            read_limit: Maximum bytes read per regular file
        """
        self.fs = fs
        self.destination = os.path.abspath(destination)
        self.read_limit = read_limit
        self._within = self.destination if self.destination.endswith(os.sep) else self.destination + os.sep

    def visit(self, entry: TarEntry) -> VisitResult:
        """Extract one entry; any failure aborts the whole extraction."""
        try:
            self._extract(entry)
        except (LayerTarError, OSError) as exc:
            return VisitResult.fail(exc)
        return VisitResult.CONTINUE

    def _extract(self, entry: TarEntry) -> None:
        name = entry.name
        target = os.path.normpath(os.path.join(self.destination, name))

        # "." is the root of the unarchived content and always allowed
        if not target.startswith(self._within) and name != ".":
            raise PathTraversalError(name)

        header = entry.header
        if header.issym() or header.islnk():
            _log.debug("skipping symlink/link entry in image tar (path=%s)", name)
        elif header.isdir():
            self._make_directory(name, target)
        elif header.isreg():
            self._write_file(entry, target)

    def _make_directory(self, name: str, target: str) -> None:
        if name == ".":
            return
        try:
            self.fs.stat(target)
        except FileNotFoundError:
            self.fs.mkdir_all(target, DEFAULT_DIRECTORY_MODE)

    def _write_file(self, entry: TarEntry, target: str) -> None:
        handle = self.fs.open_for_write(target, stat.S_IMODE(entry.header.mode))
        copied = 0
        try:
            # limit the bytes read per file to guard against decompression bombs
            while copied < self.read_limit:
                chunk = entry.content.read(min(COPY_CHUNK_SIZE, self.read_limit - copied))
                if not chunk:
                    break
                handle.write(chunk)
                copied += len(chunk)
        except EOFError as exc:
            raise ReadLimitExceededError(entry.name, copied, self.read_limit) from exc
        except (OSError, tarfile.TarError) as exc:
            raise ExtractionError(f"unable to copy file {entry.name!r}: {exc}") from exc
        finally:
            self._close_file(handle, target)

        # a file exactly at the limit is indistinguishable from a truncated larger one
        if copied >= self.read_limit:
            raise ReadLimitExceededError(entry.name, copied, self.read_limit)

    def _close_file(self, handle: BinaryIO, target: str) -> None:
        try:
            handle.close()
        except OSError as exc:
            _log.error("failed to close file during untar of path=%r: %s", target, exc)


def untar_to_directory(
    stream: BinaryIO,
    destination: str,
    fs: Optional[Filesystem] = None,
    settings: Optional[ExtractionSettings] = None,
) -> None:
    """
    Write the regular files and directories of a tar stream below `destination`.

    Args:
        stream: Readable binary stream holding a tar archive (left open)
        destination: Root directory to extract into
        fs: Destination filesystem (defaults to the real one)
        settings: Extraction settings (defaults to the process-wide settings)

    Raises:
        TarVisitError: If an entry is unsafe or cannot be written; the cause
            is a PathTraversalError, ReadLimitExceededError or ExtractionError
        tarfile.TarError: If the stream cannot be decoded
    """
    settings = settings or get_extraction_settings()
    extractor = TarExtractor(fs or OsFilesystem(), destination, settings.per_file_read_limit)
    _log.debug(
        "Extracting tar stream to %s (per-file read limit %d bytes)",
        extractor.destination, extractor.read_limit,
    )
    iterate_tar(stream, extractor.visit)
