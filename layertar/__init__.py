"""layer-tar - streaming tar inspection and safe extraction for image layers.

Provides:
* Sequential, visitor-driven iteration over tar streams
* Content and metadata lookup for a single entry by path
* Extraction of regular files and directories with path-traversal and
  decompression-bomb guards
* Thin CLI wrapper (`layer-tar`)
"""

from ._version import __version__
from .common.config import ExtractionSettings, parse_read_limit  # noqa: F401
from .common.errors import (  # noqa: F401
    ExtractionError,
    LayerTarError,
    PathTraversalError,
    ReadLimitExceededError,
    TarFileNotFoundError,
    TarVisitError,
)
from .common.logging_config import configure_logging  # noqa: F401
from .core.decoder import TarDecoder, TarEntry  # noqa: F401
from .core.extract import TarExtractor, untar_to_directory  # noqa: F401
from .core.filesystem import Filesystem, MemoryFilesystem, OsFilesystem  # noqa: F401
from .core.iterate import VisitResult, iterate_tar  # noqa: F401
from .core.lookup import metadata_from_tar, reader_from_tar  # noqa: F401
from .core.metadata import FileType, Metadata  # noqa: F401

__all__ = [
	"__version__",
	"configure_logging",
	"ExtractionSettings",
	"parse_read_limit",
	"LayerTarError",
	"TarVisitError",
	"TarFileNotFoundError",
	"ExtractionError",
	"PathTraversalError",
	"ReadLimitExceededError",
	"TarDecoder",
	"TarEntry",
	"VisitResult",
	"iterate_tar",
	"reader_from_tar",
	"metadata_from_tar",
	"FileType",
	"Metadata",
	"Filesystem",
	"OsFilesystem",
	"MemoryFilesystem",
	"TarExtractor",
	"untar_to_directory",
]
