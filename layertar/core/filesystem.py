"""Destination filesystem abstraction used by extraction.

`OsFilesystem` writes to the real disk; `MemoryFilesystem` keeps everything
in memory so extraction can be exercised without touching a disk.
"""

from __future__ import annotations

import errno
import io
import os
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Dict, List


@dataclass
class FileInfo:
    """What a filesystem knows about an existing path."""

    path: str
    is_dir: bool
    mode: int
    size: int = 0


class Filesystem(ABC):
    """Capabilities extraction needs from a destination filesystem."""

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """Describe `path`.

        Raises:
            FileNotFoundError: If nothing exists at `path`
        """
        pass

    @abstractmethod
    def mkdir_all(self, path: str, mode: int) -> None:
        """Create `path` and any missing parents with `mode`."""
        pass

    @abstractmethod
    def open_for_write(self, path: str, mode: int) -> BinaryIO:
        """Open `path` read-write, creating it with `mode` if missing.

        Existing content is not truncated.
        """
        pass


class OsFilesystem(Filesystem):
    """Filesystem backed by the operating system."""

    def stat(self, path: str) -> FileInfo:
        st = os.stat(path)
        return FileInfo(
            path=path,
            is_dir=stat.S_ISDIR(st.st_mode),
            mode=stat.S_IMODE(st.st_mode),
            size=st.st_size,
        )

    def mkdir_all(self, path: str, mode: int) -> None:
        if os.path.isdir(path):
            return
        parent = os.path.dirname(path)
        if parent and parent != path:
            self.mkdir_all(parent, mode)
        try:
            os.mkdir(path, mode)
        except FileExistsError:
            if not os.path.isdir(path):
                raise

    def open_for_write(self, path: str, mode: int) -> BinaryIO:
        fd = os.open(path, os.O_CREAT | os.O_RDWR, mode)
        return os.fdopen(fd, "r+b")


class _MemoryFile(io.BytesIO):
    """Writable handle that stores its bytes back into a MemoryFilesystem on close."""

    def __init__(self, fs: "MemoryFilesystem", path: str, initial: bytes):
        super().__init__(initial)
        self._fs = fs
        self._path = path
        self.name = path

    def flush(self) -> None:
        super().flush()
        if not self.closed:
            self._fs._files[self._path] = self.getvalue()

    def close(self) -> None:
        if not self.closed:
            self._fs._files[self._path] = self.getvalue()
        super().close()


class MemoryFilesystem(Filesystem):
    """In-memory filesystem for tests and dry runs."""

    def __init__(self) -> None:
        self._dirs: Dict[str, int] = {os.sep: 0o755}
        self._files: Dict[str, bytes] = {}
        self._modes: Dict[str, int] = {}

    @staticmethod
    def _clean(path: str) -> str:
        return os.path.normpath(os.path.join(os.sep, path))

    def stat(self, path: str) -> FileInfo:
        path = self._clean(path)
        if path in self._dirs:
            return FileInfo(path=path, is_dir=True, mode=self._dirs[path])
        if path in self._files:
            return FileInfo(path=path, is_dir=False, mode=self._modes[path], size=len(self._files[path]))
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)

    def mkdir_all(self, path: str, mode: int) -> None:
        path = self._clean(path)
        if path in self._dirs:
            return
        if path in self._files:
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
        self.mkdir_all(os.path.dirname(path), mode)
        self._dirs[path] = mode

    def open_for_write(self, path: str, mode: int) -> BinaryIO:
        path = self._clean(path)
        if path in self._dirs:
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
        parent = os.path.dirname(path)
        if parent not in self._dirs:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        if path not in self._files:
            self._files[path] = b""
            self._modes[path] = mode
        return _MemoryFile(self, path, self._files[path])

    def read_file(self, path: str) -> bytes:
        return self._files[self._clean(path)]

    def exists(self, path: str) -> bool:
        path = self._clean(path)
        return path in self._dirs or path in self._files

    def is_dir(self, path: str) -> bool:
        return self._clean(path) in self._dirs

    def paths(self) -> List[str]:
        """All directories and files, root excluded, sorted."""
        return sorted((set(self._dirs) | set(self._files)) - {os.sep})
