"""Data models for tar archive decoding."""

from dataclasses import dataclass
from enum import Enum


class TarEntryType(Enum):
    """Entry kinds the converter knows how to re-emit."""

    REGULAR_FILE = "regular_file"
    SYMBOLIC_LINK = "symbolic_link"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass(frozen=True)
class TarEntry:
    """Metadata decoded from a single tar header block."""

    name: str
    type: TarEntryType
    type_code: str
    size: int
    link_target: str = ""
    is_pax_header: bool = False


@dataclass
class WalkState:
    """Cursor and counters for one archive traversal."""

    offset: int = 0
    consecutive_invalid_headers: int = 0
    accepted_entries: int = 0


@dataclass
class ConversionResult:
    """Outcome of a completed tar to zip conversion."""

    data: bytes
    entry_count: int
    was_gzipped: bool
