"""Configuration helpers for layer-tar.

The only tunable is the per-file read limit, sourced once from
`LAYERTAR_PER_FILE_READ_LIMIT` and handed to the extractor explicitly.
"""

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import DEFAULT_PER_FILE_READ_LIMIT, PER_FILE_READ_LIMIT_ENV

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_read_limit(value: Optional[str], default: int = DEFAULT_PER_FILE_READ_LIMIT) -> int:
    """
    Parse a per-file read limit given in bytes.

    Args:
        value: Raw configuration string (base-10 integer)
        default: Limit kept when the value is missing, malformed or not positive

    Returns:
        The parsed limit, or `default`
    """
    if value is None or not _INTEGER_RE.fullmatch(value):
        return default
    limit = int(value, 10)
    if limit <= 0:
        return default
    return limit


@dataclass(frozen=True)
class ExtractionSettings:
    """Typed extraction settings sourced from the environment."""

    per_file_read_limit: int = DEFAULT_PER_FILE_READ_LIMIT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExtractionSettings":
        environ = os.environ if environ is None else environ
        return cls(
            per_file_read_limit=parse_read_limit(environ.get(PER_FILE_READ_LIMIT_ENV)),
        )


# Process-wide settings, read from the environment once on first use
_extraction_settings: Optional[ExtractionSettings] = None


def get_extraction_settings() -> ExtractionSettings:
    """Get the process-wide extraction settings."""
    global _extraction_settings
    if _extraction_settings is None:
        _extraction_settings = ExtractionSettings.from_env()
    return _extraction_settings
