"""File metadata built from tar headers."""

from __future__ import annotations

import codecs
import mimetypes
import posixpath
import stat
import tarfile
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, BinaryIO, Dict, Optional

# Number of leading content bytes inspected when the path gives no MIME hint.
_MIME_SNIFF_SIZE = 512


class FileType(Enum):
    REGULAR = "regular"
    HARD_LINK = "hard-link"
    SYMLINK = "symlink"
    CHAR_DEVICE = "char-device"
    BLOCK_DEVICE = "block-device"
    DIRECTORY = "directory"
    FIFO = "fifo"
    IRREGULAR = "irregular"

    @classmethod
    def from_header(cls, header: tarfile.TarInfo) -> "FileType":
        if header.isreg():
            return cls.REGULAR
        if header.islnk():
            return cls.HARD_LINK
        if header.issym():
            return cls.SYMLINK
        if header.ischr():
            return cls.CHAR_DEVICE
        if header.isblk():
            return cls.BLOCK_DEVICE
        if header.isdir():
            return cls.DIRECTORY
        if header.isfifo():
            return cls.FIFO
        return cls.IRREGULAR


@dataclass
class Metadata:
    """Metadata about one file within a tar archive."""

    path: str
    link_destination: str
    size: int
    user_id: int
    group_id: int
    user_name: str
    group_name: str
    file_type: FileType
    mode: int
    mod_time: datetime
    mime_type: str = ""

    @property
    def is_dir(self) -> bool:
        return self.file_type is FileType.DIRECTORY

    @classmethod
    def from_header(cls, header: tarfile.TarInfo, content: Optional[BinaryIO] = None) -> "Metadata":
        """
        Build metadata from a tar header.

        Args:
            header: The entry header
            content: Reader over the entry content, or None when there are
                no bytes to read (the MIME type is then left empty)
        """
        path = posixpath.normpath("/" + header.name.lstrip("/"))
        return cls(
            path=path,
            link_destination=header.linkname,
            size=header.size,
            user_id=header.uid,
            group_id=header.gid,
            user_name=header.uname,
            group_name=header.gname,
            file_type=FileType.from_header(header),
            mode=stat.S_IMODE(header.mode),
            mod_time=datetime.fromtimestamp(header.mtime, tz=timezone.utc),
            mime_type=_detect_mime_type(path, content),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the metadata to a JSON-friendly dictionary."""
        return {
            'path': self.path,
            'link_destination': self.link_destination,
            'size': self.size,
            'user_id': self.user_id,
            'group_id': self.group_id,
            'user_name': self.user_name,
            'group_name': self.group_name,
            'type': self.file_type.value,
            'mode': oct(self.mode),
            'mod_time': self.mod_time.isoformat(),
            'mime_type': self.mime_type,
        }


def _detect_mime_type(path: str, content: Optional[BinaryIO]) -> str:
    if content is None:
        return ""

    guessed, _ = mimetypes.guess_type(path)
    if guessed:
        return guessed

    sample = content.read(_MIME_SNIFF_SIZE)
    if not sample:
        return ""
    if b"\x00" in sample:
        return "application/octet-stream"
    try:
        # a multi-byte character cut off at the sample boundary is still text
        codecs.getincrementaldecoder("utf-8")().decode(sample, final=False)
    except UnicodeDecodeError:
        return "application/octet-stream"
    return "text/plain"
