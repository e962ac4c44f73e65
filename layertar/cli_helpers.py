"""Shared CLI helpers for layer-tar commands."""

import sys
import tarfile
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from layertar.common.constants import ExitCodes
from layertar.common.errors import (
    ExtractionError,
    PathTraversalError,
    ReadLimitExceededError,
    TarFileNotFoundError,
    TarVisitError,
)


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> Optional[int]:
    """Translate known exceptions to layer-tar exit codes."""
    if isinstance(exc, TarVisitError) and isinstance(exc.cause, Exception):
        exc = exc.cause
    if isinstance(exc, TarFileNotFoundError):
        return ExitCodes.FILE_NOT_FOUND
    if isinstance(exc, PathTraversalError):
        return ExitCodes.PATH_TRAVERSAL
    if isinstance(exc, ReadLimitExceededError):
        return ExitCodes.READ_LIMIT_EXCEEDED
    if isinstance(exc, ExtractionError):
        return ExitCodes.EXTRACTION_FAILED
    if isinstance(exc, (tarfile.TarError, EOFError)):
        return ExitCodes.ARCHIVE_READ_FAILED
    if isinstance(exc, FileNotFoundError):
        return ExitCodes.INPUT_NOT_FOUND
    if isinstance(exc, OSError):
        return ExitCodes.EXTRACTION_FAILED
    return None


def fail_command(action: str, exc: Exception) -> None:
    """Report a failed command and exit with the mapped code."""
    exit_code = map_exception_to_exit_code(exc)
    if exit_code is None:
        exit_code = ExitCodes.ARCHIVE_READ_FAILED
    exit_with_error(f"{action} failed: {exc}", exit_code)


def open_archive_stream(path: str) -> BinaryIO:
    """Open an archive path for reading; `-` means standard input.

    The caller owns the returned stream.
    """
    if path == '-':
        return sys.stdin.buffer
    return open(path, 'rb')


@contextmanager
def open_archive(path: str) -> Iterator[BinaryIO]:
    """Open an archive for the duration of a `with` block."""
    stream = open_archive_stream(path)
    try:
        yield stream
    finally:
        if path != '-':
            stream.close()
