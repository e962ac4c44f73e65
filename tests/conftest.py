"""Shared fixtures: in-memory tar archives built with tarfile."""

from __future__ import annotations

import io
import tarfile
import time

import pytest


def _build_info(spec) -> tuple:
    kind, name = spec[0], spec[1]
    info = tarfile.TarInfo(name)
    info.mtime = int(time.time())
    data = None
    if kind == "file":
        data = spec[2]
        info.size = len(data)
        info.mode = spec[3] if len(spec) > 3 else 0o644
    elif kind == "dir":
        info.type = tarfile.DIRTYPE
        info.mode = 0o755
    elif kind == "symlink":
        info.type = tarfile.SYMTYPE
        info.linkname = spec[2]
    elif kind == "hardlink":
        info.type = tarfile.LNKTYPE
        info.linkname = spec[2]
    elif kind == "fifo":
        info.type = tarfile.FIFOTYPE
    elif kind == "chr":
        info.type = tarfile.CHRTYPE
    else:
        raise ValueError(f"unknown entry kind: {kind}")
    return info, data


def build_tar_bytes(entries, compression: str = "") -> bytes:
    buf = io.BytesIO()
    mode = f"w:{compression}" if compression else "w"
    with tarfile.open(fileobj=buf, mode=mode) as tar:
        for spec in entries:
            info, data = _build_info(spec)
            tar.addfile(info, io.BytesIO(data) if data is not None else None)
    return buf.getvalue()


@pytest.fixture
def make_tar():
    """Return a factory building a tar stream from entry tuples.

    Entry tuples: ("file", name, data[, mode]), ("dir", name),
    ("symlink", name, target), ("hardlink", name, target), ("fifo", name),
    ("chr", name).
    """
    def _make(entries, compression: str = "") -> io.BytesIO:
        return io.BytesIO(build_tar_bytes(entries, compression))

    return _make


@pytest.fixture
def tar_bytes():
    """Return `build_tar_bytes` for tests that need raw archive bytes."""
    return build_tar_bytes
