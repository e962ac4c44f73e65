"""
Constants and exit codes for layer-tar.
"""

GB = 1024 * 1024 * 1024

DEFAULT_PER_FILE_READ_LIMIT = 2 * GB
PER_FILE_READ_LIMIT_ENV = 'LAYERTAR_PER_FILE_READ_LIMIT'

DEFAULT_DIRECTORY_MODE = 0o755

# Chunk size for bounded copies out of the tar stream.
COPY_CHUNK_SIZE = 64 * 1024


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    ARCHIVE_READ_FAILED = 1
    FILE_NOT_FOUND = 2
    PATH_TRAVERSAL = 3
    READ_LIMIT_EXCEEDED = 4
    EXTRACTION_FAILED = 5
    INPUT_NOT_FOUND = 6
